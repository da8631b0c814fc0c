"""Admin-related schemas for administrative operations."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import PaginationResponse
from app.schemas.user import UserResponse


class DashboardResponse(BaseModel):
    """Site statistics for the admin dashboard."""

    total_users: int = Field(..., description="Number of users")
    total_posts: int = Field(..., description="Number of posts, drafts included")
    published_posts: int = Field(..., description="Number of visible published posts")
    total_comments: int = Field(..., description="Number of comments")


class AdminUserListResponse(BaseModel):
    """Paginated list of users for the admin interface."""

    users: list[UserResponse] = Field(..., description="List of users")
    pagination: PaginationResponse


class AdminCommentResponse(BaseModel):
    """Comment as seen by an administrator, with the author email."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    content: str
    post_id: int
    post_title: str | None = None
    user_id: int | None = None
    user_name: str | None = None
    author_name: str | None = None
    author_email: str | None = None
    parent_id: int | None = None
    like_count: int = 0
    is_edited: bool = False
    created_at: datetime
    updated_at: datetime


class AdminCommentListResponse(BaseModel):
    """Paginated list of comments for the admin interface."""

    comments: list[AdminCommentResponse]
    pagination: PaginationResponse
