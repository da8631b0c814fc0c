# app/routes/taxonomy.py

"""Public category and tag listings, and the published posts filed under each."""

from fastapi import APIRouter
from fastapi.responses import ORJSONResponse

from app.dependencies import CategoryServiceDep, PaginationDep, PostServiceDep, TagServiceDep
from app.schemas.post import PostListResponse
from app.schemas.taxonomy import CategoryListResponse, TagListResponse

router = APIRouter(tags=["🏷️ Taxonomy"])


@router.get(
    "/categories",
    response_class=ORJSONResponse,
    response_model=CategoryListResponse,
    summary="List categories",
    operation_id="categories_list",
)
async def list_categories(category_service: CategoryServiceDep) -> CategoryListResponse:
    return await category_service.list_categories()


@router.get(
    "/categories/{slug}/posts",
    response_class=ORJSONResponse,
    response_model=PostListResponse,
    summary="List posts in a category",
    responses={404: {"description": "Category not found"}},
    operation_id="categories_posts",
)
async def list_category_posts(
    slug: str,
    pagination: PaginationDep,
    post_service: PostServiceDep,
) -> PostListResponse:
    return await post_service.list_by_category(slug, pagination)


@router.get(
    "/tags",
    response_class=ORJSONResponse,
    response_model=TagListResponse,
    summary="List tags",
    operation_id="tags_list",
)
async def list_tags(tag_service: TagServiceDep) -> TagListResponse:
    return await tag_service.list_tags()


@router.get(
    "/tags/{slug}/posts",
    response_class=ORJSONResponse,
    response_model=PostListResponse,
    summary="List posts with a tag",
    responses={404: {"description": "Tag not found"}},
    operation_id="tags_posts",
)
async def list_tag_posts(
    slug: str,
    pagination: PaginationDep,
    post_service: PostServiceDep,
) -> PostListResponse:
    return await post_service.list_by_tag(slug, pagination)
