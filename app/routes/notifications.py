# app/routes/notifications.py

"""Notification inbox of the signed-in user."""

from fastapi import APIRouter
from fastapi.responses import ORJSONResponse

from app.dependencies import NotificationServiceDep, PaginationDep, UserDBDep
from app.models import UserDB
from app.schemas.notification import (
    MarkAllReadResponse,
    NotificationListResponse,
    NotificationResponse,
)

router = APIRouter(prefix="/notifications", tags=["🔔 Notifications"])


def _user_id(user: UserDB) -> int:
    if user.id is None:
        msg = "Authenticated user has no id"
        raise ValueError(msg)
    return user.id


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=NotificationListResponse,
    summary="List notifications",
    description="Newest first, with the number of unread notifications.",
    operation_id="notifications_list",
)
async def list_notifications(
    user: UserDBDep,
    pagination: PaginationDep,
    notification_service: NotificationServiceDep,
) -> NotificationListResponse:
    return await notification_service.list_notifications(_user_id(user), pagination)


@router.get(
    "/unread",
    response_class=ORJSONResponse,
    response_model=NotificationListResponse,
    summary="List unread notifications",
    operation_id="notifications_unread",
)
async def list_unread(
    user: UserDBDep,
    pagination: PaginationDep,
    notification_service: NotificationServiceDep,
) -> NotificationListResponse:
    return await notification_service.list_unread(_user_id(user), pagination)


@router.put(
    "/read-all",
    response_class=ORJSONResponse,
    response_model=MarkAllReadResponse,
    summary="Mark all notifications as read",
    operation_id="notifications_read_all",
)
async def mark_all_as_read(
    user: UserDBDep,
    notification_service: NotificationServiceDep,
) -> MarkAllReadResponse:
    return await notification_service.mark_all_as_read(_user_id(user))


@router.put(
    "/{notification_id}/read",
    response_class=ORJSONResponse,
    response_model=NotificationResponse,
    summary="Mark a notification as read",
    responses={404: {"description": "Notification not found"}},
    operation_id="notifications_read",
)
async def mark_as_read(
    notification_id: int,
    user: UserDBDep,
    notification_service: NotificationServiceDep,
) -> NotificationResponse:
    return await notification_service.mark_as_read(notification_id, _user_id(user))
