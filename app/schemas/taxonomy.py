"""Category and tag schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CategoryCreate(BaseModel):
    """Category creation request. The slug is derived from the name."""

    name: str = Field(..., min_length=1, max_length=100, examples=["Engineering"])
    description: str | None = Field(default=None, max_length=1000)


class CategoryUpdate(BaseModel):
    """Category update request."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=1000)


class CategoryResponse(BaseModel):
    """Category response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str
    description: str | None = None
    post_count: int = 0
    created_at: datetime
    updated_at: datetime


class CategoryListResponse(BaseModel):
    categories: list[CategoryResponse]
    total: int


class TagCreate(BaseModel):
    """Tag creation request. The slug is derived from the name."""

    name: str = Field(..., min_length=1, max_length=50, examples=["python"])


class TagUpdate(BaseModel):
    """Tag update request."""

    name: str | None = Field(default=None, min_length=1, max_length=50)


class TagResponse(BaseModel):
    """Tag response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str
    post_count: int = 0
    created_at: datetime
    updated_at: datetime


class TagListResponse(BaseModel):
    tags: list[TagResponse]
    total: int
