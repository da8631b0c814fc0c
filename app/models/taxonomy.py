"""Category and tag database models."""

from typing import cast

from sqlalchemy import Integer, Text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, String

from app.models.base import TimestampedModel


class CategoryDB(TimestampedModel, table=True):
    """A post belongs to at most one category."""

    __tablename__ = cast("declared_attr[str]", "categories")

    name: str = Field(
        sa_column=Column(String(100), unique=True, nullable=False),
        description="Category name (unique)",
    )
    slug: str = Field(
        sa_column=Column(String(100), unique=True, nullable=False, index=True),
        description="URL slug (unique)",
    )
    description: str | None = Field(
        default=None,
        sa_column=Column(Text),
        description="Category description",
    )
    post_count: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, default=0),
        description="Number of posts in the category",
    )


class TagDB(TimestampedModel, table=True):
    """A post carries any number of tags through ``post_tags``."""

    __tablename__ = cast("declared_attr[str]", "tags")

    name: str = Field(
        sa_column=Column(String(50), unique=True, nullable=False),
        description="Tag name (unique)",
    )
    slug: str = Field(
        sa_column=Column(String(50), unique=True, nullable=False, index=True),
        description="URL slug (unique)",
    )
    post_count: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, default=0),
        description="Number of posts carrying the tag",
    )
