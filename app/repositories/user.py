"""User repository for database operations."""

from sqlalchemy import select

from app.models.user import UserDB
from app.repositories.base import BaseRepository
from app.schemas.auth import RegisterRequest
from app.schemas.user import UserUpdate
from app.utils.helpers import utc_now
from app.utils.pagination import Pagination


class UserRepository(BaseRepository[UserDB, RegisterRequest, UserUpdate]):
    """
    Repository for User database operations.

    Emails are stored lowercased, so lookups by email are exact matches on
    the normalized value.
    """

    model = UserDB

    async def get_by_email(self, email: str) -> UserDB | None:
        """
        Get user by email.

        Args:
            email: Email to search for

        Returns:
            UserDB | None: User if found, None otherwise
        """
        return await self.get_by_field("email", email.strip().lower())

    async def get_by_nickname(self, nickname: str) -> UserDB | None:
        return await self.get_by_field("nickname", nickname)

    async def exists_by_email(self, email: str, exclude_id: int | None = None) -> bool:
        return await self._check_exists_by_field("email", email.strip().lower(), exclude_id)

    async def exists_by_nickname(self, nickname: str, exclude_id: int | None = None) -> bool:
        return await self._check_exists_by_field("nickname", nickname, exclude_id)

    async def update_last_login(self, user: UserDB) -> UserDB:
        """Stamp ``last_login_at`` on a loaded user."""
        user.last_login_at = utc_now()
        return await self.save(user)

    async def list_paginated(self, pagination: Pagination) -> tuple[list[UserDB], int]:
        """
        List users newest first.

        Returns:
            tuple[list[UserDB], int]: Users on the page and the total count
        """
        statement = self._active(select(UserDB)).order_by(*self._newest_first())
        return await self._paginate(statement, pagination)
