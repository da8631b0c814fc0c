"""User database model using SQLModel."""

from datetime import datetime
from typing import cast

from pydantic import ConfigDict
from sqlalchemy import Boolean, DateTime, Text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, String

from app.models.base import SoftDeleteModel


class UserDB(SoftDeleteModel, table=True):
    """
    User database model.

    Regular users comment, like and bookmark. Admins additionally manage
    posts, taxonomy, users and comments.
    """

    __tablename__ = cast("declared_attr[str]", "users")

    email: str = Field(
        sa_column=Column(String(255), unique=True, nullable=False, index=True),
        description="Email address (unique)",
    )
    password: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="bcrypt password hash",
    )
    nickname: str = Field(
        sa_column=Column(String(50), unique=True, nullable=False, index=True),
        description="Public display name (unique)",
    )
    avatar_url: str | None = Field(
        default=None,
        sa_column=Column(String(500)),
        description="Avatar image URL",
    )
    bio: str | None = Field(
        default=None,
        sa_column=Column(Text),
        description="Short biography",
    )
    is_admin: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, default=False, index=True),
        description="Whether the user can access the admin API",
    )
    last_login_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
        description="Time of the last successful login",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "email": "writer@example.com",
                "nickname": "writer",
                "is_admin": False,
            },
        },
    )
