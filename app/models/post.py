"""Post, post/tag link and view log database models."""

from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING, Optional, cast

from sqlalchemy import DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, Relationship, SQLModel, String

from app.models.base import SoftDeleteModel, TimestampedModel
from app.utils.helpers import as_utc, utc_now

if TYPE_CHECKING:
    from app.models.taxonomy import CategoryDB, TagDB
    from app.models.user import UserDB


class PostStatus(StrEnum):
    DRAFT = "draft"
    PUBLISHED = "published"
    SCHEDULED = "scheduled"


class PostTagLink(SQLModel, table=True):
    """Association table between posts and tags."""

    __tablename__ = cast("declared_attr[str]", "post_tags")

    post_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("posts.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )
    tag_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("tags.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )


class PostDB(SoftDeleteModel, table=True):
    """
    Blog post database model.

    Counters are denormalized and maintained by the repository through
    explicit increments and decrements.
    """

    __tablename__ = cast("declared_attr[str]", "posts")

    title: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Post title",
    )
    slug: str = Field(
        sa_column=Column(String(255), unique=True, nullable=False, index=True),
        description="URL slug (unique)",
    )
    content: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Markdown content",
    )
    excerpt: str | None = Field(
        default=None,
        sa_column=Column(Text),
        description="Plain text summary",
    )
    featured_image: str | None = Field(
        default=None,
        sa_column=Column(String(500)),
        description="Featured image URL",
    )
    status: str = Field(
        default=PostStatus.DRAFT,
        sa_column=Column(String(20), nullable=False, default=PostStatus.DRAFT, index=True),
        description="draft, published or scheduled",
    )
    published_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), index=True),
        description="Publication time",
    )

    view_count: int = Field(default=0, sa_column=Column(Integer, nullable=False, default=0))
    like_count: int = Field(default=0, sa_column=Column(Integer, nullable=False, default=0))
    comment_count: int = Field(default=0, sa_column=Column(Integer, nullable=False, default=0))
    bookmark_count: int = Field(default=0, sa_column=Column(Integer, nullable=False, default=0))

    meta_title: str | None = Field(default=None, sa_column=Column(String(255)))
    meta_description: str | None = Field(default=None, sa_column=Column(String(500)))
    meta_keywords: str | None = Field(default=None, sa_column=Column(String(255)))

    author_id: int = Field(
        sa_column=Column(Integer, ForeignKey("users.id"), nullable=False, index=True),
        description="Author user ID",
    )
    category_id: int | None = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), index=True),
        description="Category ID",
    )

    author: Optional["UserDB"] = Relationship(sa_relationship_kwargs={"lazy": "selectin"})
    category: Optional["CategoryDB"] = Relationship(sa_relationship_kwargs={"lazy": "selectin"})
    tags: list["TagDB"] = Relationship(
        link_model=PostTagLink,
        sa_relationship_kwargs={"lazy": "selectin", "order_by": "TagDB.name"},
    )

    @property
    def is_published(self) -> bool:
        """Published and not scheduled in the future."""
        if self.status != PostStatus.PUBLISHED:
            return False
        return self.published_at is None or as_utc(self.published_at) <= utc_now()


class ViewLogDB(TimestampedModel, table=True):
    """One counted view of a post."""

    __tablename__ = cast("declared_attr[str]", "view_logs")

    post_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("posts.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
    )
    ip_address: str = Field(sa_column=Column(String(45), nullable=False))
    user_agent: str | None = Field(default=None, sa_column=Column(String(500)))
