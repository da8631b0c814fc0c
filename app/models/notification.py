"""Notification database model."""

from datetime import datetime
from enum import StrEnum
from typing import cast

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, String

from app.models.base import TimestampedModel


class NotificationType(StrEnum):
    COMMENT_REPLY = "comment_reply"
    POST_COMMENT = "post_comment"
    COMMENT_LIKE = "comment_like"
    POST_LIKE = "post_like"
    POST_BOOKMARK = "post_bookmark"


class NotificationDB(TimestampedModel, table=True):
    """Something that happened to a user's content."""

    __tablename__ = cast("declared_attr[str]", "notifications")

    user_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        description="Recipient",
    )
    type: str = Field(sa_column=Column(String(50), nullable=False))
    title: str = Field(sa_column=Column(String(255), nullable=False))
    message: str = Field(sa_column=Column(Text, nullable=False))

    post_id: int | None = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("posts.id", ondelete="CASCADE")),
    )
    comment_id: int | None = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("comments.id", ondelete="CASCADE")),
    )
    actor_id: int | None = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("users.id", ondelete="SET NULL")),
        description="User who triggered the notification",
    )

    is_read: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, default=False, index=True),
    )
    read_at: datetime | None = Field(default=None, sa_column=Column(DateTime(timezone=True)))
    link: str | None = Field(default=None, sa_column=Column(String(500)))
