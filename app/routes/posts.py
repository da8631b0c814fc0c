# app/routes/posts.py

"""
Post Routes.

Public reading, search and view counting; admin authoring; likes and
bookmarks for signed-in users.

Summary
-------
Endpoints include:
  - List published posts
  - Search posts
  - List my bookmarks
  - Get post by id
  - Record a view
  - Create / update / delete post (admin)
  - Like / unlike, bookmark / unbookmark

Visibility
----------
Drafts, scheduled posts and posts with a future ``published_at`` are
answered with ``404`` unless the caller is an admin.
"""

from typing import Annotated

from fastapi import APIRouter, Header, Query
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from app.dependencies import (
    AdminUserDep,
    ClientIPDep,
    OptionalUserDep,
    PaginationDep,
    PostServiceDep,
    UserDBDep,
)
from app.schemas.post import (
    InteractionResponse,
    PostCreate,
    PostListResponse,
    PostResponse,
    PostSearchResponse,
    PostUpdate,
    ViewResponse,
)

router = APIRouter(prefix="/posts", tags=["📝 Posts"])

NOT_FOUND_EXAMPLE = {
    "description": "Post not found",
    "content": {
        "application/json": {
            "example": {"detail": "Post with ID 1 not found", "code": "NOT_FOUND"},
        },
    },
}
CONFLICT_EXAMPLE = {
    "description": "Already done",
    "content": {
        "application/json": {
            "example": {"detail": "Post already liked", "code": "ALREADY_EXISTS"},
        },
    },
}


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=PostListResponse,
    summary="List published posts",
    description="Published posts, newest publication first.",
    operation_id="posts_list",
)
async def list_posts(
    pagination: PaginationDep,
    post_service: PostServiceDep,
) -> PostListResponse:
    return await post_service.list_published(pagination)


@router.get(
    "/search",
    response_class=ORJSONResponse,
    response_model=PostSearchResponse,
    summary="Search posts",
    description=(
        'Search titles, content and excerpts. Supports quoted phrases ("async io") '
        "and excluded terms (-draft)."
    ),
    operation_id="posts_search",
)
async def search_posts(
    q: Annotated[str, Query(min_length=1, max_length=200, description="Search query")],
    pagination: PaginationDep,
    post_service: PostServiceDep,
) -> PostSearchResponse:
    return await post_service.search(q, pagination)


@router.get(
    "/bookmarks",
    response_class=ORJSONResponse,
    response_model=PostListResponse,
    summary="List my bookmarks",
    description="Posts bookmarked by the caller, most recently bookmarked first.",
    operation_id="posts_bookmarks",
)
async def list_bookmarks(
    user: UserDBDep,
    pagination: PaginationDep,
    post_service: PostServiceDep,
) -> PostListResponse:
    return await post_service.list_bookmarks(user, pagination)


@router.get(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    summary="Get post by id",
    description="Includes whether the caller liked and bookmarked the post.",
    responses={404: NOT_FOUND_EXAMPLE},
    operation_id="posts_get",
)
async def get_post(
    post_id: int,
    post_service: PostServiceDep,
    viewer: OptionalUserDep,
) -> PostResponse:
    return await post_service.get_post(post_id, viewer)


@router.post(
    "/{post_id}/view",
    response_class=ORJSONResponse,
    response_model=ViewResponse,
    summary="Record a view",
    description="Counts at most one view per client IP per post every 24 hours.",
    responses={404: NOT_FOUND_EXAMPLE},
    operation_id="posts_view",
)
async def record_view(
    post_id: int,
    ip: ClientIPDep,
    post_service: PostServiceDep,
    user_agent: Annotated[str | None, Header()] = None,
) -> ViewResponse:
    return await post_service.record_view(post_id, ip, user_agent)


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    status_code=HTTP_201_CREATED,
    summary="Create post",
    description="Admin only. The slug defaults to the slugified title.",
    responses={409: {"description": "Slug already exists"}},
    operation_id="posts_create",
)
async def create_post(
    data: PostCreate,
    admin: AdminUserDep,
    post_service: PostServiceDep,
) -> PostResponse:
    return await post_service.create_post(admin, data)


@router.put(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    summary="Update post",
    description="Admin only. Omitted fields are left as they are.",
    responses={404: NOT_FOUND_EXAMPLE, 409: {"description": "Slug already exists"}},
    operation_id="posts_update",
)
async def update_post(
    post_id: int,
    data: PostUpdate,
    admin: AdminUserDep,
    post_service: PostServiceDep,
) -> PostResponse:
    return await post_service.update_post(post_id, data)


@router.delete(
    "/{post_id}",
    status_code=HTTP_204_NO_CONTENT,
    summary="Delete post",
    description="Admin only.",
    responses={404: NOT_FOUND_EXAMPLE},
    operation_id="posts_delete",
)
async def delete_post(
    post_id: int,
    admin: AdminUserDep,
    post_service: PostServiceDep,
) -> Response:
    await post_service.delete_post(post_id)
    return Response(status_code=HTTP_204_NO_CONTENT)


@router.post(
    "/{post_id}/like",
    response_class=ORJSONResponse,
    response_model=InteractionResponse,
    summary="Like post",
    responses={404: NOT_FOUND_EXAMPLE, 409: CONFLICT_EXAMPLE},
    operation_id="posts_like",
)
async def like_post(
    post_id: int,
    user: UserDBDep,
    post_service: PostServiceDep,
) -> InteractionResponse:
    return await post_service.like_post(post_id, user)


@router.delete(
    "/{post_id}/like",
    response_class=ORJSONResponse,
    response_model=InteractionResponse,
    summary="Unlike post",
    responses={404: NOT_FOUND_EXAMPLE},
    operation_id="posts_unlike",
)
async def unlike_post(
    post_id: int,
    user: UserDBDep,
    post_service: PostServiceDep,
) -> InteractionResponse:
    return await post_service.unlike_post(post_id, user)


@router.post(
    "/{post_id}/bookmark",
    response_class=ORJSONResponse,
    response_model=InteractionResponse,
    summary="Bookmark post",
    responses={404: NOT_FOUND_EXAMPLE, 409: CONFLICT_EXAMPLE},
    operation_id="posts_bookmark",
)
async def bookmark_post(
    post_id: int,
    user: UserDBDep,
    post_service: PostServiceDep,
) -> InteractionResponse:
    return await post_service.bookmark_post(post_id, user)


@router.delete(
    "/{post_id}/bookmark",
    response_class=ORJSONResponse,
    response_model=InteractionResponse,
    summary="Remove bookmark",
    responses={404: NOT_FOUND_EXAMPLE},
    operation_id="posts_unbookmark",
)
async def unbookmark_post(
    post_id: int,
    user: UserDBDep,
    post_service: PostServiceDep,
) -> InteractionResponse:
    return await post_service.unbookmark_post(post_id, user)
