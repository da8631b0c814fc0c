"""Post repository: listing, search, views, likes and bookmarks."""

from typing import Any

from sqlalchemy import Select, and_, delete, func, not_, or_, select
from sqlalchemy.exc import IntegrityError

from app.errors.database import DuplicateEntryError
from app.models.interaction import BookmarkDB, LikeDB
from app.models.post import PostDB, PostStatus, PostTagLink, ViewLogDB
from app.repositories.base import BaseRepository
from app.schemas.post import PostCreate, PostUpdate
from app.utils.helpers import utc_now
from app.utils.pagination import Pagination
from app.utils.search import ParsedQuery


def _like_pattern(needle: str) -> str:
    escaped = needle.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _matches(needle: str) -> Any:
    pattern = _like_pattern(needle)
    return or_(
        PostDB.title.ilike(pattern, escape="\\"),  # type: ignore[attr-defined]
        PostDB.content.ilike(pattern, escape="\\"),  # type: ignore[attr-defined]
        # NULL excerpts would turn an excluded term's NOT(...) into NULL
        func.coalesce(PostDB.excerpt, "").ilike(pattern, escape="\\"),
    )


class PostRepository(BaseRepository[PostDB, PostCreate, PostUpdate]):
    """
    Repository for Post database operations.

    "Published" means status ``published`` with a ``published_at`` that is
    not in the future. Listings for readers only ever return published
    posts, newest publication first.
    """

    model = PostDB

    @staticmethod
    def published_clause() -> Any:
        return and_(
            PostDB.status == PostStatus.PUBLISHED,
            PostDB.published_at.is_not(None),  # type: ignore[union-attr]
            PostDB.published_at <= utc_now(),  # type: ignore[operator]
        )

    def _published(self) -> Select[Any]:
        statement = self._active(select(PostDB)).where(self.published_clause())
        return statement.order_by(
            PostDB.published_at.desc(),  # type: ignore[union-attr]
            PostDB.id.desc(),  # type: ignore[union-attr]
        )

    async def get_by_slug(self, slug: str) -> PostDB | None:
        return await self.get_by_field("slug", slug)

    async def slug_exists(self, slug: str, exclude_id: int | None = None) -> bool:
        """
        Check whether a live post already uses ``slug``.

        Args:
            slug: Slug to check
            exclude_id: Post to ignore (the one being updated)
        """
        return await self._check_exists_by_field("slug", slug, exclude_id)

    async def list_published(self, pagination: Pagination) -> tuple[list[PostDB], int]:
        return await self._paginate(self._published(), pagination)

    async def list_by_category(
        self,
        category_id: int,
        pagination: Pagination,
    ) -> tuple[list[PostDB], int]:
        statement = self._published().where(PostDB.category_id == category_id)
        return await self._paginate(statement, pagination)

    async def list_by_tag(self, tag_id: int, pagination: Pagination) -> tuple[list[PostDB], int]:
        statement = self._published().join(
            PostTagLink,
            PostTagLink.post_id == PostDB.id,  # type: ignore[arg-type]
        )
        statement = statement.where(PostTagLink.tag_id == tag_id)
        return await self._paginate(statement, pagination)

    async def list_by_author(
        self,
        author_id: int,
        pagination: Pagination,
    ) -> tuple[list[PostDB], int]:
        """Every post of an author, drafts included, newest first."""
        statement = self._active(select(PostDB)).where(PostDB.author_id == author_id)
        return await self._paginate(statement.order_by(*self._newest_first()), pagination)

    async def search(
        self,
        query: ParsedQuery,
        pagination: Pagination,
    ) -> tuple[list[PostDB], int]:
        """
        Case-insensitive search over title, content and excerpt.

        Every term and phrase must occur in at least one of the three
        columns; excluded terms must occur in none of them.
        """
        statement = self._published()
        for needle in query.needles:
            statement = statement.where(_matches(needle))
        for needle in query.excluded:
            statement = statement.where(not_(_matches(needle)))
        return await self._paginate(statement, pagination)

    async def count_published(self) -> int:
        statement = self._active(select(func.count()).select_from(PostDB))
        result = await self.session.execute(statement.where(self.published_clause()))
        return result.scalar() or 0

    # Views

    async def increment_view_count(self, post_id: int) -> None:
        await self._adjust_counter(post_id, "view_count", 1)

    async def record_view(
        self,
        post_id: int,
        ip_address: str,
        user_agent: str | None = None,
    ) -> ViewLogDB:
        """Write a view log row."""
        view = ViewLogDB(
            post_id=post_id,
            ip_address=ip_address[:45],
            user_agent=user_agent[:500] if user_agent else None,
        )
        self.session.add(view)
        await self.session.flush()
        return view

    # Likes

    async def has_liked(self, user_id: int, post_id: int) -> bool:
        statement = select(1).where(LikeDB.user_id == user_id, LikeDB.post_id == post_id)
        result = await self.session.execute(statement.limit(1))
        return result.scalar_one_or_none() is not None

    async def like(self, user_id: int, post_id: int) -> LikeDB:
        """
        Record a like and bump ``like_count``.

        Raises:
            DuplicateEntryError: If the user already liked the post
        """
        like = LikeDB(user_id=user_id, post_id=post_id)
        await self._insert_interaction(like, "Post already liked")
        await self._adjust_counter(post_id, "like_count", 1)
        return like

    async def unlike(self, user_id: int, post_id: int) -> bool:
        """Remove a like. Returns False when there was nothing to remove."""
        statement = delete(LikeDB).where(LikeDB.user_id == user_id, LikeDB.post_id == post_id)
        result = await self.session.execute(statement)
        if not result.rowcount:
            return False
        await self._adjust_counter(post_id, "like_count", -1)
        return True

    # Bookmarks

    async def has_bookmarked(self, user_id: int, post_id: int) -> bool:
        statement = select(1).where(
            BookmarkDB.user_id == user_id,
            BookmarkDB.post_id == post_id,
        )
        result = await self.session.execute(statement.limit(1))
        return result.scalar_one_or_none() is not None

    async def bookmark(self, user_id: int, post_id: int) -> BookmarkDB:
        """
        Save a post for a user and bump ``bookmark_count``.

        Raises:
            DuplicateEntryError: If the post is already bookmarked
        """
        bookmark = BookmarkDB(user_id=user_id, post_id=post_id)
        await self._insert_interaction(bookmark, "Post already bookmarked")
        await self._adjust_counter(post_id, "bookmark_count", 1)
        return bookmark

    async def unbookmark(self, user_id: int, post_id: int) -> bool:
        statement = delete(BookmarkDB).where(
            BookmarkDB.user_id == user_id,
            BookmarkDB.post_id == post_id,
        )
        result = await self.session.execute(statement)
        if not result.rowcount:
            return False
        await self._adjust_counter(post_id, "bookmark_count", -1)
        return True

    async def list_bookmarked(
        self,
        user_id: int,
        pagination: Pagination,
    ) -> tuple[list[PostDB], int]:
        """Posts bookmarked by a user, most recently bookmarked first."""
        statement = (
            self._active(select(PostDB))
            .join(BookmarkDB, BookmarkDB.post_id == PostDB.id)  # type: ignore[arg-type]
            .where(BookmarkDB.user_id == user_id)
            .order_by(BookmarkDB.created_at.desc(), BookmarkDB.id.desc())  # type: ignore[union-attr]
        )
        return await self._paginate(statement, pagination)

    # Comments

    async def increment_comment_count(self, post_id: int) -> None:
        await self._adjust_counter(post_id, "comment_count", 1)

    async def decrement_comment_count(self, post_id: int) -> None:
        await self._adjust_counter(post_id, "comment_count", -1)

    async def _insert_interaction(self, record: LikeDB | BookmarkDB, detail: str) -> None:
        try:
            self.session.add(record)
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            raise DuplicateEntryError(detail=detail).with_error(e) from e
