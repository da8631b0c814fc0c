# app/routes/comments.py

"""
Comment Routes.

Comments and replies can be written by signed-in users or by anonymous
visitors who leave a name and a password. The password is what lets an
anonymous author edit or delete the comment later: it travels in the body
for an edit and in the ``X-Comment-Password`` header for a delete.

Write endpoints share a stricter per-IP rate limit than the rest of the API.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Header
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from app.dependencies import CommentServiceDep, OptionalUserDep, PaginationDep, UserDBDep
from app.managers.rate_limiter import comment_rate_limit
from app.schemas.comment import CommentCreate, CommentListResponse, CommentResponse, CommentUpdate
from app.schemas.post import InteractionResponse

router = APIRouter(prefix="/comments", tags=["💬 Comments"])

FORBIDDEN_EXAMPLE = {
    "description": "Not the author",
    "content": {
        "application/json": {
            "example": {
                "detail": "You do not have permission to modify this comment",
                "code": "FORBIDDEN",
            },
        },
    },
}


@router.get(
    "/post/{post_id}",
    response_class=ORJSONResponse,
    response_model=CommentListResponse,
    summary="List comments of a post",
    description="Top level comments, oldest first. Replies are fetched per comment.",
    responses={404: {"description": "Post not found"}},
    operation_id="comments_list",
)
async def list_comments(
    post_id: int,
    pagination: PaginationDep,
    comment_service: CommentServiceDep,
    viewer: OptionalUserDep,
) -> CommentListResponse:
    return await comment_service.list_by_post(post_id, pagination, viewer)


@router.post(
    "/post/{post_id}",
    response_class=ORJSONResponse,
    response_model=CommentResponse,
    status_code=HTTP_201_CREATED,
    summary="Comment on a post",
    description="Anonymous callers must provide author_name and author_password.",
    responses={404: {"description": "Post not found"}, 429: {"description": "Too many comments"}},
    dependencies=[Depends(comment_rate_limit)],
    operation_id="comments_create",
)
async def create_comment(
    post_id: int,
    data: CommentCreate,
    comment_service: CommentServiceDep,
    user: OptionalUserDep,
) -> CommentResponse:
    return await comment_service.create_comment(post_id, data, user)


@router.get(
    "/{comment_id}/replies",
    response_class=ORJSONResponse,
    response_model=CommentListResponse,
    summary="List replies",
    responses={404: {"description": "Comment not found"}},
    operation_id="comments_replies",
)
async def list_replies(
    comment_id: int,
    pagination: PaginationDep,
    comment_service: CommentServiceDep,
    viewer: OptionalUserDep,
) -> CommentListResponse:
    return await comment_service.list_replies(comment_id, pagination, viewer)


@router.post(
    "/{comment_id}/replies",
    response_class=ORJSONResponse,
    response_model=CommentResponse,
    status_code=HTTP_201_CREATED,
    summary="Reply to a comment",
    responses={404: {"description": "Comment not found"}, 429: {"description": "Too many comments"}},
    dependencies=[Depends(comment_rate_limit)],
    operation_id="comments_reply",
)
async def create_reply(
    comment_id: int,
    data: CommentCreate,
    comment_service: CommentServiceDep,
    user: OptionalUserDep,
) -> CommentResponse:
    return await comment_service.create_reply(comment_id, data, user)


@router.put(
    "/{comment_id}",
    response_class=ORJSONResponse,
    response_model=CommentResponse,
    summary="Edit a comment",
    responses={403: FORBIDDEN_EXAMPLE, 404: {"description": "Comment not found"}},
    dependencies=[Depends(comment_rate_limit)],
    operation_id="comments_update",
)
async def update_comment(
    comment_id: int,
    data: CommentUpdate,
    comment_service: CommentServiceDep,
    user: OptionalUserDep,
) -> CommentResponse:
    return await comment_service.update_comment(comment_id, data, user)


@router.delete(
    "/{comment_id}",
    status_code=HTTP_204_NO_CONTENT,
    summary="Delete a comment",
    responses={403: FORBIDDEN_EXAMPLE, 404: {"description": "Comment not found"}},
    dependencies=[Depends(comment_rate_limit)],
    operation_id="comments_delete",
)
async def delete_comment(
    comment_id: int,
    comment_service: CommentServiceDep,
    user: OptionalUserDep,
    x_comment_password: Annotated[str | None, Header()] = None,
) -> Response:
    await comment_service.delete_comment(comment_id, user, x_comment_password)
    return Response(status_code=HTTP_204_NO_CONTENT)


@router.post(
    "/{comment_id}/like",
    response_class=ORJSONResponse,
    response_model=InteractionResponse,
    summary="Like a comment",
    responses={404: {"description": "Comment not found"}, 409: {"description": "Already liked"}},
    dependencies=[Depends(comment_rate_limit)],
    operation_id="comments_like",
)
async def like_comment(
    comment_id: int,
    user: UserDBDep,
    comment_service: CommentServiceDep,
) -> InteractionResponse:
    return await comment_service.like_comment(comment_id, user)


@router.delete(
    "/{comment_id}/like",
    response_class=ORJSONResponse,
    response_model=InteractionResponse,
    summary="Unlike a comment",
    responses={404: {"description": "Like not found"}},
    dependencies=[Depends(comment_rate_limit)],
    operation_id="comments_unlike",
)
async def unlike_comment(
    comment_id: int,
    user: UserDBDep,
    comment_service: CommentServiceDep,
) -> InteractionResponse:
    return await comment_service.unlike_comment(comment_id, user)
