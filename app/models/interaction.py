"""Like and bookmark database models."""

from typing import cast

from sqlalchemy import ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field

from app.models.base import TimestampedModel


class LikeDB(TimestampedModel, table=True):
    """A user's like on either a post or a comment."""

    __tablename__ = cast("declared_attr[str]", "likes")
    __table_args__ = (
        UniqueConstraint("user_id", "post_id", name="uq_likes_user_post"),
        UniqueConstraint("user_id", "comment_id", name="uq_likes_user_comment"),
    )

    user_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
    )
    post_id: int | None = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), index=True),
    )
    comment_id: int | None = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("comments.id", ondelete="CASCADE"), index=True),
    )


class BookmarkDB(TimestampedModel, table=True):
    """A user's saved post."""

    __tablename__ = cast("declared_attr[str]", "bookmarks")
    __table_args__ = (UniqueConstraint("user_id", "post_id", name="uq_bookmarks_user_post"),)

    user_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
    )
    post_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("posts.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
    )
