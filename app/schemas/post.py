"""
Post schemas.

Covers admin create/update bodies, the full post response with author,
category and tags, paginated listings and search results.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.configs import MAX_TAGS_PER_POST
from app.schemas.common import PaginationResponse
from app.schemas.taxonomy import CategoryResponse, TagResponse
from app.schemas.user import AuthorResponse

type PostStatusLiteral = Literal["draft", "published", "scheduled"]


class PostCreate(BaseModel):
    """Post creation request (admin only)."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Post title",
        examples=["Writing a blog backend"],
    )
    slug: str | None = Field(
        default=None,
        min_length=1,
        max_length=255,
        description="URL slug (derived from the title when omitted)",
        examples=["writing-a-blog-backend"],
    )
    content: str = Field(..., min_length=1, description="Markdown content")
    excerpt: str | None = Field(
        default=None,
        max_length=500,
        description="Summary (derived from the content when omitted)",
    )
    featured_image: str | None = Field(default=None, max_length=500)
    status: PostStatusLiteral = Field(default="draft")
    published_at: datetime | None = Field(
        default=None,
        description="Publication time (defaults to now when publishing)",
    )
    meta_title: str | None = Field(default=None, max_length=255)
    meta_description: str | None = Field(default=None, max_length=500)
    meta_keywords: str | None = Field(default=None, max_length=255)
    category_id: int | None = None
    tag_ids: list[int] = Field(default_factory=list, max_length=MAX_TAGS_PER_POST)


class PostUpdate(BaseModel):
    """Post update request (admin only). Only provided fields are changed."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    slug: str | None = Field(default=None, min_length=1, max_length=255)
    content: str | None = Field(default=None, min_length=1)
    excerpt: str | None = Field(default=None, max_length=500)
    featured_image: str | None = Field(default=None, max_length=500)
    status: PostStatusLiteral | None = None
    published_at: datetime | None = None
    meta_title: str | None = Field(default=None, max_length=255)
    meta_description: str | None = Field(default=None, max_length=500)
    meta_keywords: str | None = Field(default=None, max_length=255)
    category_id: int | None = None
    tag_ids: list[int] | None = Field(default=None, max_length=MAX_TAGS_PER_POST)


class PostResponse(BaseModel):
    """Full post response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    slug: str
    content: str
    excerpt: str | None = None
    featured_image: str | None = None
    status: str
    published_at: datetime | None = None
    view_count: int = 0
    like_count: int = 0
    comment_count: int = 0
    bookmark_count: int = 0
    meta_title: str | None = None
    meta_description: str | None = None
    meta_keywords: str | None = None
    author: AuthorResponse | None = None
    category: CategoryResponse | None = None
    tags: list[TagResponse] = Field(default_factory=list)
    is_liked: bool = False
    is_bookmarked: bool = False
    created_at: datetime
    updated_at: datetime


class PostListResponse(BaseModel):
    """Paginated list of posts."""

    posts: list[PostResponse]
    pagination: PaginationResponse


class PostSearchResult(PostResponse):
    """Post matched by a search with a highlighted snippet."""

    snippet: str = Field(default="", description="Content excerpt around the first match")
    highlighted_title: str = Field(default="", description="Title with matches wrapped in <mark>")


class PostSearchResponse(BaseModel):
    """Paginated search results."""

    query: str
    posts: list[PostSearchResult]
    pagination: PaginationResponse


class ViewResponse(BaseModel):
    """Outcome of recording a post view."""

    counted: bool = Field(..., description="False when the IP already viewed the post today")
    view_count: int


class InteractionResponse(BaseModel):
    """State of a like or bookmark after toggling it."""

    active: bool
    count: int
