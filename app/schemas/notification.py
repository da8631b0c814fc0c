"""Notification schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from app.schemas.common import PaginationResponse


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    type: str
    title: str
    message: str
    post_id: int | None = None
    comment_id: int | None = None
    actor_id: int | None = None
    is_read: bool = False
    read_at: datetime | None = None
    link: str | None = None
    created_at: datetime


class NotificationListResponse(BaseModel):
    """Paginated notifications plus the caller's unread count."""

    notifications: list[NotificationResponse]
    pagination: PaginationResponse
    unread_count: int


class MarkAllReadResponse(BaseModel):
    updated: int
