"""Notification repository for database operations."""

from typing import Any

from pydantic import BaseModel
from sqlalchemy import func, select, update

from app.models.notification import NotificationDB
from app.repositories.base import BaseRepository
from app.utils.helpers import utc_now
from app.utils.pagination import Pagination


class NotificationRepository(BaseRepository[NotificationDB, BaseModel, BaseModel]):
    """Repository for a user's notifications, newest first."""

    model = NotificationDB

    def _for_user(self, user_id: int) -> Any:
        return select(NotificationDB).where(NotificationDB.user_id == user_id)

    async def list_for_user(
        self,
        user_id: int,
        pagination: Pagination,
    ) -> tuple[list[NotificationDB], int]:
        statement = self._for_user(user_id).order_by(*self._newest_first())
        return await self._paginate(statement, pagination)

    async def list_unread(
        self,
        user_id: int,
        pagination: Pagination,
    ) -> tuple[list[NotificationDB], int]:
        statement = self._for_user(user_id).where(NotificationDB.is_read.is_(False))  # type: ignore[attr-defined]
        return await self._paginate(statement.order_by(*self._newest_first()), pagination)

    async def get_for_user(self, notification_id: int, user_id: int) -> NotificationDB | None:
        """Load a notification only when it belongs to ``user_id``."""
        statement = self._for_user(user_id).where(NotificationDB.id == notification_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def mark_as_read(self, notification: NotificationDB) -> NotificationDB:
        if notification.is_read:
            return notification
        notification.is_read = True
        notification.read_at = utc_now()
        return await self.save(notification)

    async def mark_all_as_read(self, user_id: int) -> int:
        """
        Mark every unread notification of a user as read.

        Returns:
            int: Number of notifications updated
        """
        statement = (
            update(NotificationDB)
            .where(
                NotificationDB.user_id == user_id,
                NotificationDB.is_read.is_(False),  # type: ignore[attr-defined]
            )
            .values(is_read=True, read_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(statement)
        return result.rowcount or 0

    async def count_unread(self, user_id: int) -> int:
        statement = select(func.count()).select_from(NotificationDB).where(
            NotificationDB.user_id == user_id,
            NotificationDB.is_read.is_(False),  # type: ignore[attr-defined]
        )
        result = await self.session.execute(statement)
        return result.scalar() or 0
