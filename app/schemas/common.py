"""Shared response schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from app.utils.pagination import total_pages


class MessageResponse(BaseModel):
    """Plain message response."""

    message: str = Field(..., description="Human readable message")


class PaginationResponse(BaseModel):
    """Pagination metadata attached to list responses."""

    page: int = Field(..., description="Current page (1-based)")
    limit: int = Field(..., description="Page size")
    total: int = Field(..., description="Total number of matching records")
    total_pages: int = Field(..., description="Total number of pages")

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "PaginationResponse":
        return cls(page=page, limit=limit, total=total, total_pages=total_pages(total, limit))


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., examples=["ok"])
    env: str = Field(..., examples=["development"])
    version: str = Field(..., examples=["0.1.0"])
    timestamp: datetime
