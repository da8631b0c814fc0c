"""Comment schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import PaginationResponse
from app.schemas.user import AuthorResponse


class CommentCreate(BaseModel):
    """
    Comment or reply creation request.

    Authenticated callers comment as themselves and the anonymous author
    fields are ignored. Anonymous callers must provide ``author_name`` and
    ``author_password``; the password later authorizes edits and deletion.
    """

    content: str = Field(..., min_length=1, max_length=5000)
    author_name: str | None = Field(default=None, min_length=1, max_length=100)
    author_email: str | None = Field(default=None, max_length=255)
    author_password: str | None = Field(default=None, min_length=4, max_length=128)


class CommentUpdate(BaseModel):
    """Comment update request."""

    content: str = Field(..., min_length=1, max_length=5000)
    author_password: str | None = Field(
        default=None,
        max_length=128,
        description="Required when editing an anonymous comment",
    )


class CommentResponse(BaseModel):
    """Comment response. Anonymous author email and password are never exposed."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    content: str
    post_id: int
    parent_id: int | None = None
    user_id: int | None = None
    user: AuthorResponse | None = None
    author_name: str | None = None
    like_count: int = 0
    is_edited: bool = False
    is_anonymous: bool = False
    is_liked: bool = False
    created_at: datetime
    updated_at: datetime


class CommentListResponse(BaseModel):
    """Paginated list of comments."""

    comments: list[CommentResponse]
    pagination: PaginationResponse
