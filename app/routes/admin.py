# app/routes/admin.py

"""
Admin Routes.

Endpoints for administrative operations requiring the admin role:
dashboard statistics, user and comment moderation, and management of
categories and tags.

Every endpoint answers ``401`` without a valid token and ``403`` for a
non-admin caller.
"""

from typing import Annotated

from fastapi import APIRouter, Query
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from app.dependencies import (
    AdminServiceDep,
    AdminUserDep,
    CategoryServiceDep,
    TagServiceDep,
)
from app.schemas.admin import (
    AdminCommentListResponse,
    AdminUserListResponse,
    DashboardResponse,
)
from app.schemas.taxonomy import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    TagCreate,
    TagResponse,
    TagUpdate,
)

router = APIRouter(prefix="/admin", tags=["👑 Admin"])

FORBIDDEN_EXAMPLE = {
    "description": "Forbidden",
    "content": {
        "application/json": {
            "example": {"detail": "Admin privileges required", "code": "INSUFFICIENT_PERMISSION"},
        },
    },
}

PageQuery = Annotated[int | None, Query(description="Page number, 1-based")]
LimitQuery = Annotated[int | None, Query(description="Items per page")]


@router.get(
    "/dashboard",
    response_class=ORJSONResponse,
    response_model=DashboardResponse,
    summary="Dashboard statistics",
    responses={403: FORBIDDEN_EXAMPLE},
    operation_id="admin_dashboard",
)
async def dashboard(admin: AdminUserDep, admin_service: AdminServiceDep) -> DashboardResponse:
    return await admin_service.dashboard()


@router.get(
    "/users",
    response_class=ORJSONResponse,
    response_model=AdminUserListResponse,
    summary="List all users (admin only)",
    description="Newest first. Out of range page or limit values fall back to defaults.",
    responses={403: FORBIDDEN_EXAMPLE},
    operation_id="admin_list_users",
)
async def list_users(
    admin: AdminUserDep,
    admin_service: AdminServiceDep,
    page: PageQuery = None,
    limit: LimitQuery = None,
) -> AdminUserListResponse:
    return await admin_service.list_users(page, limit)


@router.delete(
    "/users/{user_id}",
    status_code=HTTP_204_NO_CONTENT,
    summary="Delete a user",
    description="Soft-deletes the user. Admin accounts cannot be deleted.",
    responses={403: FORBIDDEN_EXAMPLE, 404: {"description": "User not found"}},
    operation_id="admin_delete_user",
)
async def delete_user(
    user_id: int,
    admin: AdminUserDep,
    admin_service: AdminServiceDep,
) -> Response:
    await admin_service.delete_user(user_id)
    return Response(status_code=HTTP_204_NO_CONTENT)


@router.get(
    "/comments",
    response_class=ORJSONResponse,
    response_model=AdminCommentListResponse,
    summary="List all comments",
    responses={403: FORBIDDEN_EXAMPLE},
    operation_id="admin_list_comments",
)
async def list_comments(
    admin: AdminUserDep,
    admin_service: AdminServiceDep,
    page: PageQuery = None,
    limit: LimitQuery = None,
) -> AdminCommentListResponse:
    return await admin_service.list_comments(page, limit)


@router.delete(
    "/comments/{comment_id}",
    status_code=HTTP_204_NO_CONTENT,
    summary="Delete any comment",
    responses={403: FORBIDDEN_EXAMPLE, 404: {"description": "Comment not found"}},
    operation_id="admin_delete_comment",
)
async def delete_comment(
    comment_id: int,
    admin: AdminUserDep,
    admin_service: AdminServiceDep,
) -> Response:
    await admin_service.delete_comment(comment_id)
    return Response(status_code=HTTP_204_NO_CONTENT)


# Categories


@router.post(
    "/categories",
    response_class=ORJSONResponse,
    response_model=CategoryResponse,
    status_code=HTTP_201_CREATED,
    summary="Create category",
    responses={403: FORBIDDEN_EXAMPLE, 409: {"description": "Category already exists"}},
    operation_id="admin_create_category",
)
async def create_category(
    data: CategoryCreate,
    admin: AdminUserDep,
    category_service: CategoryServiceDep,
) -> CategoryResponse:
    return await category_service.create_category(data)


@router.put(
    "/categories/{category_id}",
    response_class=ORJSONResponse,
    response_model=CategoryResponse,
    summary="Update category",
    responses={403: FORBIDDEN_EXAMPLE, 404: {"description": "Category not found"}},
    operation_id="admin_update_category",
)
async def update_category(
    category_id: int,
    data: CategoryUpdate,
    admin: AdminUserDep,
    category_service: CategoryServiceDep,
) -> CategoryResponse:
    return await category_service.update_category(category_id, data)


@router.delete(
    "/categories/{category_id}",
    status_code=HTTP_204_NO_CONTENT,
    summary="Delete category",
    description="Posts in the category are kept and become uncategorized.",
    responses={403: FORBIDDEN_EXAMPLE, 404: {"description": "Category not found"}},
    operation_id="admin_delete_category",
)
async def delete_category(
    category_id: int,
    admin: AdminUserDep,
    category_service: CategoryServiceDep,
) -> Response:
    await category_service.delete_category(category_id)
    return Response(status_code=HTTP_204_NO_CONTENT)


# Tags


@router.post(
    "/tags",
    response_class=ORJSONResponse,
    response_model=TagResponse,
    status_code=HTTP_201_CREATED,
    summary="Create tag",
    responses={403: FORBIDDEN_EXAMPLE, 409: {"description": "Tag already exists"}},
    operation_id="admin_create_tag",
)
async def create_tag(
    data: TagCreate,
    admin: AdminUserDep,
    tag_service: TagServiceDep,
) -> TagResponse:
    return await tag_service.create_tag(data)


@router.put(
    "/tags/{tag_id}",
    response_class=ORJSONResponse,
    response_model=TagResponse,
    summary="Update tag",
    responses={403: FORBIDDEN_EXAMPLE, 404: {"description": "Tag not found"}},
    operation_id="admin_update_tag",
)
async def update_tag(
    tag_id: int,
    data: TagUpdate,
    admin: AdminUserDep,
    tag_service: TagServiceDep,
) -> TagResponse:
    return await tag_service.update_tag(tag_id, data)


@router.delete(
    "/tags/{tag_id}",
    status_code=HTTP_204_NO_CONTENT,
    summary="Delete tag",
    responses={403: FORBIDDEN_EXAMPLE, 404: {"description": "Tag not found"}},
    operation_id="admin_delete_tag",
)
async def delete_tag(
    tag_id: int,
    admin: AdminUserDep,
    tag_service: TagServiceDep,
) -> Response:
    await tag_service.delete_tag(tag_id)
    return Response(status_code=HTTP_204_NO_CONTENT)
