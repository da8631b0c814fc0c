"""Category and tag management services."""

from app.errors import DuplicateEntryError, RecordNotFoundError, ValidationError
from app.models import CategoryDB, TagDB
from app.monitoring import get_logger
from app.repositories import CategoryRepository, TagRepository
from app.schemas.taxonomy import (
    CategoryCreate,
    CategoryListResponse,
    CategoryResponse,
    CategoryUpdate,
    TagCreate,
    TagListResponse,
    TagResponse,
    TagUpdate,
)
from app.utils.text import slugify
from app.utils.validators import is_valid_category_slug, sanitize_string, validate_tag_name

logger = get_logger(__name__)


def _slug_for(name: str) -> str:
    slug = slugify(name)
    if not slug:
        raise ValidationError(detail="Name must contain letters or numbers").with_details(
            field="name",
        )
    return slug


class CategoryService:
    """Admin management and public listing of categories."""

    def __init__(self, category_repo: CategoryRepository) -> None:
        self.category_repo = category_repo

    async def _get(self, category_id: int) -> CategoryDB:
        category = await self.category_repo.get_by_id(category_id)
        if category is None:
            raise RecordNotFoundError(detail="Category not found")
        return category

    async def _checked_slug(self, name: str, exclude_id: int | None = None) -> str:
        slug = _slug_for(name)
        if not is_valid_category_slug(slug):
            raise ValidationError(
                detail="Category slug must be 1-50 characters (a-z, 0-9 and - only)",
            ).with_details(field="name")
        if await self.category_repo.exists_by_slug(slug, exclude_id=exclude_id):
            raise DuplicateEntryError(detail="Category slug already exists")
        return slug

    async def list_categories(self) -> CategoryListResponse:
        categories = await self.category_repo.list_all()
        return CategoryListResponse(
            categories=[CategoryResponse.model_validate(c) for c in categories],
            total=len(categories),
        )

    async def create_category(self, data: CategoryCreate) -> CategoryResponse:
        """
        Create a category; the slug is derived from the name.

        Raises:
            ValidationError: If the name is blank or yields an empty slug
            DuplicateEntryError: If the name or slug is taken
        """
        name = sanitize_string(data.name)
        if not name:
            raise ValidationError(detail="Category name is required").with_details(field="name")
        if await self.category_repo.exists_by_name(name):
            raise DuplicateEntryError(detail="Category name already exists")

        category = CategoryDB(
            name=name,
            slug=await self._checked_slug(name),
            description=data.description,
        )
        category = await self.category_repo.add(category)
        logger.info(f"Category {category.id} created")
        return CategoryResponse.model_validate(category)

    async def update_category(self, category_id: int, data: CategoryUpdate) -> CategoryResponse:
        """
        Rename a category and/or change its description.

        Raises:
            RecordNotFoundError: If the category does not exist
            DuplicateEntryError: If the new name or slug is taken
        """
        category = await self._get(category_id)

        name = sanitize_string(data.name or "")
        if name and name != category.name:
            if await self.category_repo.exists_by_name(name, exclude_id=category_id):
                raise DuplicateEntryError(detail="Category name already exists")
            category.slug = await self._checked_slug(name, exclude_id=category_id)
            category.name = name

        if data.description is not None:
            category.description = data.description

        return CategoryResponse.model_validate(await self.category_repo.save(category))

    async def delete_category(self, category_id: int) -> None:
        """
        Delete a category. Its posts become uncategorized.

        Raises:
            RecordNotFoundError: If the category does not exist
        """
        await self._get(category_id)
        await self.category_repo.delete(category_id)
        logger.info(f"Category {category_id} deleted")


class TagService:
    """Admin management and public listing of tags."""

    def __init__(self, tag_repo: TagRepository) -> None:
        self.tag_repo = tag_repo

    async def _get(self, tag_id: int) -> TagDB:
        tag = await self.tag_repo.get_by_id(tag_id)
        if tag is None:
            raise RecordNotFoundError(detail="Tag not found")
        return tag

    async def _checked_slug(self, name: str, exclude_id: int | None = None) -> str:
        slug = _slug_for(name)
        if await self.tag_repo.exists_by_slug(slug, exclude_id=exclude_id):
            raise DuplicateEntryError(detail="Tag slug already exists")
        return slug

    async def list_tags(self) -> TagListResponse:
        tags = await self.tag_repo.list_all()
        return TagListResponse(tags=[TagResponse.model_validate(t) for t in tags], total=len(tags))

    async def create_tag(self, data: TagCreate) -> TagResponse:
        """
        Create a tag; the slug is derived from the name.

        Raises:
            ValidationError: If the name is blank, malformed or yields an empty slug
            DuplicateEntryError: If the name or slug is taken
        """
        name = data.name.strip()
        if not name:
            raise ValidationError(detail="Tag name is required").with_details(field="name")
        validate_tag_name(name)
        if await self.tag_repo.exists_by_name(name):
            raise DuplicateEntryError(detail="Tag name already exists")

        tag = await self.tag_repo.add(TagDB(name=name, slug=await self._checked_slug(name)))
        logger.info(f"Tag {tag.id} created")
        return TagResponse.model_validate(tag)

    async def update_tag(self, tag_id: int, data: TagUpdate) -> TagResponse:
        """
        Rename a tag.

        Raises:
            RecordNotFoundError: If the tag does not exist
            DuplicateEntryError: If the new name or slug is taken
        """
        tag = await self._get(tag_id)

        name = (data.name or "").strip()
        if name and name != tag.name:
            validate_tag_name(name)
            if await self.tag_repo.exists_by_name(name, exclude_id=tag_id):
                raise DuplicateEntryError(detail="Tag name already exists")
            tag.slug = await self._checked_slug(name, exclude_id=tag_id)
            tag.name = name

        return TagResponse.model_validate(await self.tag_repo.save(tag))

    async def delete_tag(self, tag_id: int) -> None:
        """
        Delete a tag and its post associations.

        Raises:
            RecordNotFoundError: If the tag does not exist
        """
        await self._get(tag_id)
        await self.tag_repo.delete(tag_id)
        logger.info(f"Tag {tag_id} deleted")
