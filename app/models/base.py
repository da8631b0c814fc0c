"""Shared columns for every table."""

from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from app.utils.helpers import utc_now


class TimestampedModel(SQLModel):
    """Integer primary key plus creation and update timestamps."""

    id: int | None = Field(default=None, primary_key=True, description="Primary key")

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        nullable=False,
        description="Creation timestamp",
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        nullable=False,
        sa_column_kwargs={"onupdate": utc_now},
        description="Last update timestamp",
    )


class SoftDeleteModel(TimestampedModel):
    """Rows are hidden instead of removed when deleted."""

    deleted_at: datetime | None = Field(
        default=None,
        sa_type=DateTime(timezone=True),
        index=True,
        description="Soft delete timestamp",
    )

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
