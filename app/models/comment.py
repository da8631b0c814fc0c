"""Comment database model."""

from typing import TYPE_CHECKING, Optional, cast

from sqlalchemy import Boolean, ForeignKey, Integer, Text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, Relationship, String

from app.models.base import SoftDeleteModel

if TYPE_CHECKING:
    from app.models.post import PostDB
    from app.models.user import UserDB


class CommentDB(SoftDeleteModel, table=True):
    """
    Comment on a post, written by a user or anonymously.

    Anonymous comments carry an author name and a hashed password that
    allows the author to edit or delete the comment later.
    """

    __tablename__ = cast("declared_attr[str]", "comments")

    content: str = Field(sa_column=Column(Text, nullable=False))

    post_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("posts.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
    )
    parent_id: int | None = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("comments.id", ondelete="CASCADE"), index=True),
    )
    user_id: int | None = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), index=True),
    )

    author_name: str | None = Field(default=None, sa_column=Column(String(100)))
    author_email: str | None = Field(default=None, sa_column=Column(String(255)))
    author_password: str | None = Field(default=None, sa_column=Column(String(255)))

    like_count: int = Field(default=0, sa_column=Column(Integer, nullable=False, default=0))
    is_edited: bool = Field(default=False, sa_column=Column(Boolean, nullable=False, default=False))

    post: Optional["PostDB"] = Relationship(sa_relationship_kwargs={"lazy": "selectin"})
    user: Optional["UserDB"] = Relationship(sa_relationship_kwargs={"lazy": "selectin"})

    @property
    def is_anonymous(self) -> bool:
        return self.user_id is None

    @property
    def is_reply(self) -> bool:
        return self.parent_id is not None

    @property
    def display_name(self) -> str:
        if self.user is not None:
            return self.user.nickname
        return self.author_name or "Anonymous"
