"""Category and tag repositories."""

from collections.abc import Sequence

from sqlalchemy import select

from app.models.taxonomy import CategoryDB, TagDB
from app.repositories.base import BaseRepository
from app.schemas.taxonomy import CategoryCreate, CategoryUpdate, TagCreate, TagUpdate


class CategoryRepository(BaseRepository[CategoryDB, CategoryCreate, CategoryUpdate]):
    """Repository for categories."""

    model = CategoryDB

    async def get_by_slug(self, slug: str) -> CategoryDB | None:
        return await self.get_by_field("slug", slug)

    async def exists_by_name(self, name: str, exclude_id: int | None = None) -> bool:
        return await self._check_exists_by_field("name", name, exclude_id)

    async def exists_by_slug(self, slug: str, exclude_id: int | None = None) -> bool:
        return await self._check_exists_by_field("slug", slug, exclude_id)

    async def list_all(self) -> list[CategoryDB]:
        """Every category, by name."""
        result = await self.session.execute(select(CategoryDB).order_by(CategoryDB.name))
        return list(result.scalars().all())

    async def increment_post_count(self, category_id: int) -> None:
        await self._adjust_counter(category_id, "post_count", 1)

    async def decrement_post_count(self, category_id: int) -> None:
        await self._adjust_counter(category_id, "post_count", -1)


class TagRepository(BaseRepository[TagDB, TagCreate, TagUpdate]):
    """Repository for tags."""

    model = TagDB

    async def get_by_slug(self, slug: str) -> TagDB | None:
        return await self.get_by_field("slug", slug)

    async def get_many(self, tag_ids: Sequence[int]) -> list[TagDB]:
        """Load the tags with the given IDs; unknown IDs are simply absent."""
        if not tag_ids:
            return []
        statement = select(TagDB).where(TagDB.id.in_(set(tag_ids)))  # type: ignore[union-attr]
        result = await self.session.execute(statement.order_by(TagDB.name))
        return list(result.scalars().all())

    async def exists_by_name(self, name: str, exclude_id: int | None = None) -> bool:
        return await self._check_exists_by_field("name", name, exclude_id)

    async def exists_by_slug(self, slug: str, exclude_id: int | None = None) -> bool:
        return await self._check_exists_by_field("slug", slug, exclude_id)

    async def list_all(self) -> list[TagDB]:
        """Every tag, by name."""
        result = await self.session.execute(select(TagDB).order_by(TagDB.name))
        return list(result.scalars().all())

    async def increment_post_count(self, tag_id: int) -> None:
        await self._adjust_counter(tag_id, "post_count", 1)

    async def decrement_post_count(self, tag_id: int) -> None:
        await self._adjust_counter(tag_id, "post_count", -1)
