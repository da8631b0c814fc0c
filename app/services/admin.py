"""Administrative use cases: dashboard, user and comment moderation."""

from app.errors import ForbiddenError, RecordNotFoundError
from app.models import CommentDB
from app.monitoring import get_logger
from app.repositories import CommentRepository, PostRepository, UserRepository
from app.schemas.admin import (
    AdminCommentListResponse,
    AdminCommentResponse,
    AdminUserListResponse,
    DashboardResponse,
)
from app.schemas.common import PaginationResponse
from app.schemas.user import UserResponse
from app.utils.pagination import normalize_pagination

logger = get_logger(__name__)


def _admin_comment(comment: CommentDB) -> AdminCommentResponse:
    response = AdminCommentResponse.model_validate(comment)
    response.post_title = comment.post.title if comment.post else None
    response.user_name = comment.user.nickname if comment.user else None
    return response


class AdminService:
    """Site-wide statistics and moderation."""

    def __init__(
        self,
        user_repo: UserRepository,
        post_repo: PostRepository,
        comment_repo: CommentRepository,
    ) -> None:
        self.user_repo = user_repo
        self.post_repo = post_repo
        self.comment_repo = comment_repo

    async def dashboard(self) -> DashboardResponse:
        return DashboardResponse(
            total_users=await self.user_repo.count(),
            total_posts=await self.post_repo.count(),
            published_posts=await self.post_repo.count_published(),
            total_comments=await self.comment_repo.count(),
        )

    async def list_users(self, page: int | None, limit: int | None) -> AdminUserListResponse:
        """Users newest first; out of range page/limit values fall back to defaults."""
        pagination = normalize_pagination(page, limit)
        users, total = await self.user_repo.list_paginated(pagination)
        return AdminUserListResponse(
            users=[UserResponse.model_validate(u) for u in users],
            pagination=PaginationResponse.build(pagination.page, pagination.limit, total),
        )

    async def delete_user(self, user_id: int) -> None:
        """
        Soft-delete a user.

        Raises:
            RecordNotFoundError: If the user does not exist
            ForbiddenError: If the user is an admin
        """
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise RecordNotFoundError(detail="User not found")
        if user.is_admin:
            raise ForbiddenError(detail="cannot delete admin user")

        await self.user_repo.delete(user_id)
        logger.info(f"User {user_id} deleted by admin")

    async def list_comments(self, page: int | None, limit: int | None) -> AdminCommentListResponse:
        pagination = normalize_pagination(page, limit)
        comments, total = await self.comment_repo.list_paginated(pagination)
        return AdminCommentListResponse(
            comments=[_admin_comment(c) for c in comments],
            pagination=PaginationResponse.build(pagination.page, pagination.limit, total),
        )

    async def delete_comment(self, comment_id: int) -> None:
        """
        Soft-delete any comment and decrement its post's comment count.

        Raises:
            RecordNotFoundError: If the comment does not exist
        """
        comment = await self.comment_repo.get_by_id(comment_id)
        if comment is None:
            raise RecordNotFoundError(detail="Comment not found")

        await self.comment_repo.delete(comment_id)
        await self.post_repo.decrement_comment_count(comment.post_id)
        logger.info(f"Comment {comment_id} deleted by admin")
