"""Notification service: fan-out of activity events and the caller's inbox."""

from app.errors import RecordNotFoundError
from app.models import NotificationDB, NotificationType, UserDB
from app.monitoring import get_logger
from app.repositories import NotificationRepository
from app.schemas.common import PaginationResponse
from app.schemas.notification import (
    MarkAllReadResponse,
    NotificationListResponse,
    NotificationResponse,
)
from app.utils.pagination import Pagination

logger = get_logger(__name__)


class NotificationService:
    """Create notifications for content owners and serve them back."""

    def __init__(self, notification_repo: NotificationRepository) -> None:
        self.notification_repo = notification_repo

    async def notify(
        self,
        *,
        recipient_id: int | None,
        actor: UserDB | None,
        type: NotificationType,  # noqa: A002
        title: str,
        message: str,
        post_id: int | None = None,
        comment_id: int | None = None,
        link: str | None = None,
    ) -> NotificationDB | None:
        """
        Notify ``recipient_id`` about something ``actor`` did.

        Nothing is stored when there is no recipient (anonymous content) or
        when the actor is the recipient.

        Returns:
            NotificationDB | None: The stored notification, if any
        """
        if recipient_id is None:
            return None
        if actor is not None and actor.id == recipient_id:
            return None

        notification = NotificationDB(
            user_id=recipient_id,
            type=type,
            title=title,
            message=message,
            post_id=post_id,
            comment_id=comment_id,
            actor_id=actor.id if actor else None,
            link=link,
        )
        notification = await self.notification_repo.add(notification)
        logger.debug(f"Notification {notification.id} ({type}) for user {recipient_id}")
        return notification

    async def _build_list(
        self,
        items: list[NotificationDB],
        total: int,
        pagination: Pagination,
        user_id: int,
    ) -> NotificationListResponse:
        return NotificationListResponse(
            notifications=[NotificationResponse.model_validate(n) for n in items],
            pagination=PaginationResponse.build(pagination.page, pagination.limit, total),
            unread_count=await self.notification_repo.count_unread(user_id),
        )

    async def list_notifications(
        self,
        user_id: int,
        pagination: Pagination,
    ) -> NotificationListResponse:
        items, total = await self.notification_repo.list_for_user(user_id, pagination)
        return await self._build_list(items, total, pagination, user_id)

    async def list_unread(self, user_id: int, pagination: Pagination) -> NotificationListResponse:
        items, total = await self.notification_repo.list_unread(user_id, pagination)
        return await self._build_list(items, total, pagination, user_id)

    async def mark_as_read(self, notification_id: int, user_id: int) -> NotificationResponse:
        """
        Mark one of the caller's notifications as read.

        Raises:
            RecordNotFoundError: If it does not exist or belongs to someone else
        """
        notification = await self.notification_repo.get_for_user(notification_id, user_id)
        if not notification:
            raise RecordNotFoundError(detail="Notification not found")
        notification = await self.notification_repo.mark_as_read(notification)
        return NotificationResponse.model_validate(notification)

    async def mark_all_as_read(self, user_id: int) -> MarkAllReadResponse:
        updated = await self.notification_repo.mark_all_as_read(user_id)
        return MarkAllReadResponse(updated=updated)
