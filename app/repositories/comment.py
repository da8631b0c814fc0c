"""Comment repository for database operations."""

from collections.abc import Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError

from app.errors.database import DuplicateEntryError
from app.models.comment import CommentDB
from app.models.interaction import LikeDB
from app.repositories.base import BaseRepository
from app.schemas.comment import CommentCreate, CommentUpdate
from app.utils.pagination import Pagination


class CommentRepository(BaseRepository[CommentDB, CommentCreate, CommentUpdate]):
    """
    Repository for comments and comment likes.

    Threads read oldest first so that a conversation reads top to bottom;
    the admin listing reads newest first.
    """

    model = CommentDB

    def _oldest_first(self) -> tuple:
        return (CommentDB.created_at.asc(), CommentDB.id.asc())  # type: ignore[union-attr]

    async def list_by_post(
        self,
        post_id: int,
        pagination: Pagination,
    ) -> tuple[list[CommentDB], int]:
        """Top level comments of a post."""
        statement = self._active(select(CommentDB)).where(
            CommentDB.post_id == post_id,
            CommentDB.parent_id.is_(None),  # type: ignore[union-attr]
        )
        return await self._paginate(statement.order_by(*self._oldest_first()), pagination)

    async def list_replies(
        self,
        parent_id: int,
        pagination: Pagination,
    ) -> tuple[list[CommentDB], int]:
        statement = self._active(select(CommentDB)).where(CommentDB.parent_id == parent_id)
        return await self._paginate(statement.order_by(*self._oldest_first()), pagination)

    async def list_paginated(self, pagination: Pagination) -> tuple[list[CommentDB], int]:
        statement = self._active(select(CommentDB)).order_by(*self._newest_first())
        return await self._paginate(statement, pagination)

    async def has_liked(self, user_id: int, comment_id: int) -> bool:
        statement = select(1).where(LikeDB.user_id == user_id, LikeDB.comment_id == comment_id)
        result = await self.session.execute(statement.limit(1))
        return result.scalar_one_or_none() is not None

    async def liked_ids(self, user_id: int, comment_ids: Sequence[int]) -> set[int]:
        """IDs among ``comment_ids`` that the user has liked."""
        if not comment_ids:
            return set()
        statement = select(LikeDB.comment_id).where(
            LikeDB.user_id == user_id,
            LikeDB.comment_id.in_(comment_ids),  # type: ignore[union-attr]
        )
        result = await self.session.execute(statement)
        return {comment_id for comment_id in result.scalars().all() if comment_id is not None}

    async def like(self, user_id: int, comment_id: int) -> LikeDB:
        """
        Record a like on a comment and bump its ``like_count``.

        Raises:
            DuplicateEntryError: If the user already liked the comment
        """
        like = LikeDB(user_id=user_id, comment_id=comment_id)
        try:
            self.session.add(like)
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            raise DuplicateEntryError(detail="Comment already liked").with_error(e) from e
        await self.increment_like_count(comment_id)
        return like

    async def unlike(self, user_id: int, comment_id: int) -> bool:
        statement = delete(LikeDB).where(
            LikeDB.user_id == user_id,
            LikeDB.comment_id == comment_id,
        )
        result = await self.session.execute(statement)
        if not result.rowcount:
            return False
        await self.decrement_like_count(comment_id)
        return True

    async def increment_like_count(self, comment_id: int) -> None:
        await self._adjust_counter(comment_id, "like_count", 1)

    async def decrement_like_count(self, comment_id: int) -> None:
        await self._adjust_counter(comment_id, "like_count", -1)
