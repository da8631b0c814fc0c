"""
User schemas.

Request bodies for profile updates and the public shapes a user takes in
responses. Password hashes never leave the database layer.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AuthorResponse(BaseModel):
    """Public author information embedded in posts and comments."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    nickname: str
    avatar_url: str | None = None


class UserResponse(BaseModel):
    """User profile response."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="User ID")
    email: str = Field(..., description="Email address", examples=["writer@example.com"])
    nickname: str = Field(..., description="Display nickname", examples=["writer"])
    avatar_url: str | None = Field(default=None, description="Avatar image URL")
    bio: str | None = Field(default=None, description="Short biography")
    is_admin: bool = Field(default=False, description="Whether the user is an administrator")
    created_at: datetime
    last_login_at: datetime | None = None


class UserUpdate(BaseModel):
    """Profile update request. Only provided fields are changed."""

    nickname: str | None = Field(
        default=None,
        min_length=2,
        max_length=20,
        description="New nickname",
        examples=["new_writer"],
    )
    avatar_url: str | None = Field(
        default=None,
        max_length=500,
        description="Avatar URL (empty string clears it)",
    )
    bio: str | None = Field(default=None, max_length=500, description="Short biography")
