"""
Comment service.

Signed-in users comment as themselves. Anonymous visitors leave a name and
a password; the bcrypt hash of that password is what later authorizes
them to edit or delete the comment.
"""

from app.errors import DuplicateEntryError, ForbiddenError, RecordNotFoundError, ValidationError
from app.managers.password_manager import hash_password, verify_password
from app.models import CommentDB, NotificationType, PostDB, UserDB
from app.monitoring import get_logger
from app.repositories import CommentRepository, PostRepository
from app.schemas.comment import CommentCreate, CommentListResponse, CommentResponse, CommentUpdate
from app.schemas.common import PaginationResponse
from app.schemas.post import InteractionResponse
from app.services.notification import NotificationService
from app.utils.pagination import Pagination
from app.utils.text import strip_html, truncate
from app.utils.validators import sanitize_string, validate_email

logger = get_logger(__name__)

PREVIEW_LENGTH = 80


def _clean_content(raw: str) -> str:
    content = strip_html(raw).strip()
    if not content:
        raise ValidationError(detail="Comment content cannot be empty").with_details(
            field="content",
        )
    return content


class CommentService:
    """Use cases around comments and replies."""

    def __init__(
        self,
        comment_repo: CommentRepository,
        post_repo: PostRepository,
        notifications: NotificationService,
    ) -> None:
        self.comment_repo = comment_repo
        self.post_repo = post_repo
        self.notifications = notifications

    async def _get_post(self, post_id: int, viewer: UserDB | None) -> PostDB:
        post = await self.post_repo.get_by_id(post_id)
        if post is None or (not post.is_published and not (viewer and viewer.is_admin)):
            raise RecordNotFoundError(detail=f"Post with ID {post_id} not found")
        return post

    async def _get_comment(self, comment_id: int) -> CommentDB:
        comment = await self.comment_repo.get_by_id(comment_id)
        if comment is None:
            raise RecordNotFoundError(detail=f"Comment with ID {comment_id} not found")
        return comment

    async def _to_list(
        self,
        comments: list[CommentDB],
        total: int,
        pagination: Pagination,
        viewer: UserDB | None,
    ) -> CommentListResponse:
        liked: set[int] = set()
        if viewer is not None and viewer.id is not None:
            ids = [c.id for c in comments if c.id is not None]
            liked = await self.comment_repo.liked_ids(viewer.id, ids)

        items = []
        for comment in comments:
            item = CommentResponse.model_validate(comment)
            item.is_liked = comment.id in liked
            items.append(item)

        return CommentListResponse(
            comments=items,
            pagination=PaginationResponse.build(pagination.page, pagination.limit, total),
        )

    async def _authorize(
        self,
        comment: CommentDB,
        user: UserDB | None,
        author_password: str | None,
    ) -> None:
        """
        Allow the owner, an admin, or whoever knows an anonymous comment's password.

        Raises:
            ForbiddenError: For everybody else
        """
        if user is not None and (user.is_admin or comment.user_id == user.id):
            return
        if (
            comment.is_anonymous
            and author_password
            and await verify_password(author_password, comment.author_password)
        ):
            return
        raise ForbiddenError(detail="You do not have permission to modify this comment")

    # Reading

    async def list_by_post(
        self,
        post_id: int,
        pagination: Pagination,
        viewer: UserDB | None = None,
    ) -> CommentListResponse:
        """
        Top level comments of a post, oldest first.

        Raises:
            RecordNotFoundError: If the post is missing or not visible
        """
        await self._get_post(post_id, viewer)
        comments, total = await self.comment_repo.list_by_post(post_id, pagination)
        return await self._to_list(comments, total, pagination, viewer)

    async def list_replies(
        self,
        comment_id: int,
        pagination: Pagination,
        viewer: UserDB | None = None,
    ) -> CommentListResponse:
        await self._get_comment(comment_id)
        replies, total = await self.comment_repo.list_replies(comment_id, pagination)
        return await self._to_list(replies, total, pagination, viewer)

    # Writing

    async def _create(
        self,
        post: PostDB,
        parent: CommentDB | None,
        data: CommentCreate,
        user: UserDB | None,
    ) -> CommentResponse:
        content = _clean_content(data.content)

        if user is not None:
            comment = CommentDB(
                content=content,
                post_id=post.id,
                parent_id=parent.id if parent else None,
                user_id=user.id,
            )
        else:
            author_name = sanitize_string(data.author_name or "")
            if not author_name or not data.author_password:
                raise ValidationError(
                    detail="author_name and author_password are required for anonymous comments",
                ).with_details(field="author_name")
            author_email = (data.author_email or "").strip().lower() or None
            if author_email:
                validate_email(author_email)
            comment = CommentDB(
                content=content,
                post_id=post.id,
                parent_id=parent.id if parent else None,
                author_name=author_name,
                author_email=author_email,
                author_password=await hash_password(data.author_password),
            )

        comment = await self.comment_repo.add(comment)
        if post.id is None or comment.id is None:
            msg = "Comment was not persisted"
            raise ValueError(msg)
        await self.post_repo.increment_comment_count(post.id)

        actor_name = user.nickname if user else comment.author_name or "Anonymous"
        preview = truncate(content, PREVIEW_LENGTH)
        link = f"/posts/{post.id}#comment-{comment.id}"

        if parent is not None:
            await self.notifications.notify(
                recipient_id=parent.user_id,
                actor=user,
                type=NotificationType.COMMENT_REPLY,
                title="New reply",
                message=f"{actor_name} replied to your comment: {preview}",
                post_id=post.id,
                comment_id=comment.id,
                link=link,
            )

        if parent is None or parent.user_id != post.author_id:
            await self.notifications.notify(
                recipient_id=post.author_id,
                actor=user,
                type=NotificationType.POST_COMMENT,
                title="New comment",
                message=f'{actor_name} commented on "{post.title}": {preview}',
                post_id=post.id,
                comment_id=comment.id,
                link=link,
            )

        comment = await self.comment_repo.get_or_raise(comment.id, refresh=True)
        return CommentResponse.model_validate(comment)

    async def create_comment(
        self,
        post_id: int,
        data: CommentCreate,
        user: UserDB | None = None,
    ) -> CommentResponse:
        """
        Comment on a post.

        Raises:
            RecordNotFoundError: If the post is missing or not visible
            ValidationError: If the content is empty or anonymous fields are missing
        """
        post = await self._get_post(post_id, user)
        return await self._create(post, None, data, user)

    async def create_reply(
        self,
        comment_id: int,
        data: CommentCreate,
        user: UserDB | None = None,
    ) -> CommentResponse:
        """
        Reply to a comment. The reply belongs to the parent's post.

        Raises:
            RecordNotFoundError: If the parent comment or its post is missing
        """
        parent = await self._get_comment(comment_id)
        post = await self._get_post(parent.post_id, user)
        return await self._create(post, parent, data, user)

    async def update_comment(
        self,
        comment_id: int,
        data: CommentUpdate,
        user: UserDB | None = None,
    ) -> CommentResponse:
        """
        Edit a comment's content.

        Raises:
            RecordNotFoundError: If the comment does not exist
            ForbiddenError: If the caller may not edit it
        """
        comment = await self._get_comment(comment_id)
        await self._authorize(comment, user, data.author_password)

        comment.content = _clean_content(data.content)
        comment.is_edited = True
        comment = await self.comment_repo.save(comment)
        return CommentResponse.model_validate(comment)

    async def delete_comment(
        self,
        comment_id: int,
        user: UserDB | None = None,
        author_password: str | None = None,
    ) -> None:
        """
        Soft-delete a comment and decrement the post's comment count.

        Raises:
            RecordNotFoundError: If the comment does not exist
            ForbiddenError: If the caller may not delete it
        """
        comment = await self._get_comment(comment_id)
        await self._authorize(comment, user, author_password)

        await self.comment_repo.delete(comment_id)
        await self.post_repo.decrement_comment_count(comment.post_id)
        logger.info(f"Comment {comment_id} deleted")

    # Likes

    async def like_comment(self, comment_id: int, user: UserDB) -> InteractionResponse:
        """
        Like a comment and notify its author.

        Raises:
            RecordNotFoundError: If the comment does not exist
            DuplicateEntryError: If the user already liked it
        """
        comment = await self._get_comment(comment_id)
        if user.id is None:
            raise RecordNotFoundError(detail="User not found")
        if await self.comment_repo.has_liked(user.id, comment_id):
            raise DuplicateEntryError(detail="Comment already liked")

        await self.comment_repo.like(user.id, comment_id)
        await self.notifications.notify(
            recipient_id=comment.user_id,
            actor=user,
            type=NotificationType.COMMENT_LIKE,
            title="New like",
            message=f"{user.nickname} liked your comment: {truncate(comment.content, PREVIEW_LENGTH)}",
            post_id=comment.post_id,
            comment_id=comment_id,
            link=f"/posts/{comment.post_id}#comment-{comment_id}",
        )

        comment = await self.comment_repo.get_or_raise(comment_id, refresh=True)
        return InteractionResponse(active=True, count=comment.like_count)

    async def unlike_comment(self, comment_id: int, user: UserDB) -> InteractionResponse:
        """
        Remove the user's like from a comment.

        Raises:
            RecordNotFoundError: If the comment does not exist or was not liked
        """
        await self._get_comment(comment_id)
        if user.id is None or not await self.comment_repo.unlike(user.id, comment_id):
            raise RecordNotFoundError(detail="Like not found")

        comment = await self.comment_repo.get_or_raise(comment_id, refresh=True)
        return InteractionResponse(active=False, count=comment.like_count)
