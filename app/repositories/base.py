"""Base repository for database operations."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel
from sqlalchemy import Select, case, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from app.errors.database import (
    DatabaseError,
    DuplicateEntryError,
    RecordNotFoundError,
)
from app.utils.helpers import utc_now
from app.utils.pagination import Pagination

type FilterValue = str | int | float | bool | datetime | None


class BaseRepository[ModelT: SQLModel, CreateSchemaT: BaseModel, UpdateSchemaT: BaseModel]:
    """
    Base repository implementing common CRUD operations.

    This class provides a generic implementation of database operations
    that can be extended by specific entity repositories. Models carrying
    a ``deleted_at`` column are soft-deleted, and every read, count and
    existence check made through this class skips soft-deleted rows.

    Attributes:
        model: The SQLModel database model type.
        id_field: The name of the primary key field (default: "id").
    """

    model: type[ModelT]
    id_field: str = "id"

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    @property
    def soft_delete(self) -> bool:
        return hasattr(self.model, "deleted_at")

    def _id_column(self) -> Any:
        return getattr(self.model, self.id_field)

    def _active[StatementT: Select[Any]](self, statement: StatementT) -> StatementT:
        """Exclude soft-deleted rows from a statement."""
        if self.soft_delete:
            return statement.where(self.model.deleted_at.is_(None))  # type: ignore[attr-defined]
        return statement

    def _newest_first(self) -> tuple[Any, ...]:
        return (self.model.created_at.desc(), self._id_column().desc())  # type: ignore[attr-defined]

    async def create(self, schema: CreateSchemaT, **extra: Any) -> ModelT:
        """
        Create a new record in the database.

        Args:
            schema: Creation schema with data
            **extra: Values not carried by the schema (owner IDs, hashes...)

        Returns:
            ModelT: Created database model
        """
        data = schema.model_dump(exclude_unset=True) | extra
        db_obj = self.model.model_validate(data)
        return await self._add_and_refresh(db_obj)

    async def add(self, record: ModelT) -> ModelT:
        """Persist an already built model instance."""
        return await self._add_and_refresh(record)

    async def get_by_id(
        self,
        record_id: int,
        *,
        include_deleted: bool = False,
        refresh: bool = False,
    ) -> ModelT | None:
        """
        Get a record by its ID.

        Args:
            record_id: Record primary key
            include_deleted: Also return soft-deleted rows
            refresh: Reload the row even when it is already in the session

        Returns:
            ModelT | None: Record if found, None otherwise
        """
        statement = select(self.model).where(self._id_column() == record_id)
        if not include_deleted:
            statement = self._active(statement)
        if refresh:
            statement = statement.execution_options(populate_existing=True)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_field(
        self,
        field_name: str,
        value: FilterValue,
    ) -> ModelT | None:
        """
        Get a record by a specific field value.

        Args:
            field_name: Name of the field to search
            value: Value to search for

        Returns:
            ModelT | None: Record if found, None otherwise
        """
        field = getattr(self.model, field_name)
        statement = self._active(select(self.model).where(field == value))
        result = await self.session.execute(statement.limit(1))
        return result.scalar_one_or_none()

    async def get_or_raise(self, record_id: int, *, refresh: bool = False) -> ModelT:
        """
        Get a record by ID or raise an exception if not found.

        Raises:
            RecordNotFoundError: If record is not found
        """
        record = await self.get_by_id(record_id, refresh=refresh)
        if not record:
            raise RecordNotFoundError(
                detail=f"{self.model.__name__.removesuffix('DB')} with ID {record_id} not found",
            )
        return record

    async def get_all(
        self,
        skip: int = 0,
        limit: int = 10,
    ) -> list[ModelT]:
        """
        Get all records with pagination, newest first.

        Args:
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            list[ModelT]: List of records
        """
        statement = self._active(select(self.model)).order_by(*self._newest_first())
        result = await self.session.execute(statement.offset(skip).limit(limit))
        return list(result.scalars().all())

    async def update(
        self,
        record_id: int,
        schema: UpdateSchemaT,
    ) -> ModelT | None:
        """
        Update a record with the fields set on the schema.

        Returns:
            ModelT | None: Updated record if found, None otherwise
        """
        db_obj = await self.get_by_id(record_id)
        if not db_obj:
            return None

        obj_data = schema.model_dump(exclude_unset=True)
        for key, value in obj_data.items():
            setattr(db_obj, key, value)

        return await self._add_and_refresh(db_obj)

    async def save(self, record: ModelT) -> ModelT:
        """Flush changes made to a loaded record and reload it."""
        return await self._add_and_refresh(record)

    async def delete(self, record_id: int) -> bool:
        """
        Delete a record by ID.

        Soft-deletable models get ``deleted_at`` stamped; others are removed.

        Returns:
            bool: True if record was deleted, False if not found
        """
        record = await self.get_by_id(record_id)
        if not record:
            return False

        if self.soft_delete:
            record.deleted_at = utc_now()  # type: ignore[attr-defined]
            self.session.add(record)
        else:
            await self.session.delete(record)
        await self.session.flush()
        return True

    async def exists(self, record_id: int) -> bool:
        """Check if a record exists without loading it."""
        statement = self._active(select(1).select_from(self.model))
        statement = statement.where(self._id_column() == record_id).limit(1)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none() is not None

    async def count(self) -> int:
        """
        Count total records.

        Returns:
            int: Total number of records
        """
        statement = self._active(select(func.count()).select_from(self.model))
        result = await self.session.execute(statement)
        count = result.scalar()
        return count if count is not None else 0

    async def _paginate(
        self,
        statement: Select[Any],
        pagination: Pagination,
    ) -> tuple[list[ModelT], int]:
        """
        Run a select for one page and count every matching row.

        Returns:
            tuple[list[ModelT], int]: Page items and total count
        """
        count_stmt = select(func.count()).select_from(statement.order_by(None).subquery())
        total = (await self.session.execute(count_stmt)).scalar() or 0

        result = await self.session.execute(
            statement.offset(pagination.offset).limit(pagination.limit),
        )
        return list(result.scalars().all()), total

    async def _adjust_counter(self, record_id: int, field_name: str, delta: int) -> None:
        """
        Increment or decrement a counter column in place.

        Decrements stop at zero. ``updated_at`` is left untouched because a
        counter bump is not an edit of the record.
        """
        column = getattr(self.model, field_name)
        if delta >= 0:
            value = column + delta
        else:
            value = case((column + delta > 0, column + delta), else_=0)

        values: dict[str, Any] = {field_name: value}
        if hasattr(self.model, "updated_at"):
            values["updated_at"] = self.model.updated_at  # type: ignore[attr-defined]

        statement = (
            update(self.model)
            .where(self._id_column() == record_id)
            .values(values)
            .execution_options(synchronize_session=False)
        )
        try:
            await self.session.execute(statement)
        except SQLAlchemyError as e:
            raise DatabaseError(detail=f"Failed to update {field_name}").with_error(e) from e

    async def _add_and_refresh(self, record: ModelT) -> ModelT:
        """
        Add a record and refresh it from the database with error handling.

        Raises:
            DuplicateEntryError: If a unique constraint is violated
            DatabaseError: For other database errors
        """
        try:
            self.session.add(record)
            await self.session.flush()
            await self.session.refresh(record)
            return record
        except IntegrityError as e:
            await self.session.rollback()
            error_msg = str(e.orig) if e.orig else str(e)
            if "unique" in error_msg.lower() or "duplicate" in error_msg.lower():
                raise DuplicateEntryError(
                    detail=f"{self.model.__name__.removesuffix('DB')} already exists",
                ).with_error(e) from e
            raise DatabaseError(detail="Database integrity error").with_error(e) from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DatabaseError(detail="Failed to save record").with_error(e) from e

    async def _check_exists_by_field(
        self,
        field_name: str,
        value: FilterValue,
        exclude_id: int | None = None,
    ) -> bool:
        """
        Check if a record exists with a specific field value.

        Args:
            field_name: Name of the field to check
            value: Value to check for
            exclude_id: Optional ID to exclude from check (for updates)

        Returns:
            bool: True if record exists, False otherwise
        """
        field = getattr(self.model, field_name)
        statement = self._active(select(1).select_from(self.model).where(field == value))

        if exclude_id is not None:
            statement = statement.where(self._id_column() != exclude_id)

        result = await self.session.execute(statement.limit(1))
        return result.scalar_one_or_none() is not None
