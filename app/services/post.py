"""
Post service.

Reader-facing listing, search and views; admin authoring; likes and
bookmarks with their owner notifications. Category and tag ``post_count``
values follow every assignment change made here.
"""

from datetime import datetime

from app.configs import EXCERPT_LENGTH, MAX_TAGS_PER_POST
from app.errors import DuplicateEntryError, RecordNotFoundError, ValidationError
from app.managers.view_tracker import ViewTracker
from app.models import CategoryDB, NotificationType, PostDB, PostStatus, TagDB, UserDB
from app.monitoring import get_logger
from app.repositories import CategoryRepository, PostRepository, TagRepository
from app.schemas.common import PaginationResponse
from app.schemas.post import (
    InteractionResponse,
    PostCreate,
    PostListResponse,
    PostResponse,
    PostSearchResponse,
    PostSearchResult,
    PostUpdate,
    ViewResponse,
)
from app.services.notification import NotificationService
from app.utils.helpers import utc_now
from app.utils.network import hash_ip, normalize_ip
from app.utils.pagination import Pagination
from app.utils.search import extract_snippet, highlight_matches, parse_search_query
from app.utils.text import extract_excerpt, markdown_to_text, sanitize_html, slugify

logger = get_logger(__name__)

SIMPLE_FIELDS = ("title", "featured_image", "meta_title", "meta_description", "meta_keywords")


def _post_not_found(post_id: int) -> RecordNotFoundError:
    return RecordNotFoundError(detail=f"Post with ID {post_id} not found")


def _publication_time(
    status: str,
    published_at: datetime | None,
    current: datetime | None = None,
) -> datetime | None:
    """
    Resolve ``published_at`` for a status.

    Publishing without a date means "now"; scheduling requires a date.
    """
    if published_at is not None:
        return published_at
    if status == PostStatus.PUBLISHED:
        return current or utc_now()
    if status == PostStatus.SCHEDULED and current is None:
        raise ValidationError(detail="published_at is required for scheduled posts").with_details(
            field="published_at",
        )
    return current


class PostService:
    """Use cases around posts."""

    def __init__(
        self,
        post_repo: PostRepository,
        category_repo: CategoryRepository,
        tag_repo: TagRepository,
        notifications: NotificationService,
        view_tracker: ViewTracker,
    ) -> None:
        self.post_repo = post_repo
        self.category_repo = category_repo
        self.tag_repo = tag_repo
        self.notifications = notifications
        self.view_tracker = view_tracker

    # Helpers

    async def _to_response(self, post: PostDB, viewer: UserDB | None = None) -> PostResponse:
        response = PostResponse.model_validate(post)
        if viewer is not None and viewer.id is not None and post.id is not None:
            response.is_liked = await self.post_repo.has_liked(viewer.id, post.id)
            response.is_bookmarked = await self.post_repo.has_bookmarked(viewer.id, post.id)
        return response

    @staticmethod
    def _to_list(
        posts: list[PostDB],
        total: int,
        pagination: Pagination,
        *,
        bookmarked: bool = False,
    ) -> PostListResponse:
        items = [PostResponse.model_validate(post) for post in posts]
        for item in items:
            item.is_bookmarked = bookmarked
        return PostListResponse(
            posts=items,
            pagination=PaginationResponse.build(pagination.page, pagination.limit, total),
        )

    async def _get_visible(self, post_id: int, viewer: UserDB | None) -> PostDB:
        """Load a post that ``viewer`` may see; drafts are admin only."""
        post = await self.post_repo.get_by_id(post_id)
        if post is None:
            raise _post_not_found(post_id)
        if not post.is_published and not (viewer is not None and viewer.is_admin):
            raise _post_not_found(post_id)
        return post

    async def _reload(self, post_id: int) -> PostDB:
        return await self.post_repo.get_or_raise(post_id, refresh=True)

    async def _checked_slug(self, raw: str, exclude_id: int | None = None) -> str:
        slug = slugify(raw)
        if not slug:
            raise ValidationError(detail="Slug must contain letters or numbers").with_details(
                field="slug",
            )
        if await self.post_repo.slug_exists(slug, exclude_id=exclude_id):
            raise DuplicateEntryError(detail="Slug already exists").with_details(field="slug")
        return slug

    async def _resolve_category(self, category_id: int | None) -> CategoryDB | None:
        if category_id is None:
            return None
        category = await self.category_repo.get_by_id(category_id)
        if category is None:
            raise RecordNotFoundError(detail="Category not found").with_details(
                category_id=category_id,
            )
        return category

    async def _resolve_tags(self, tag_ids: list[int]) -> list[TagDB]:
        unique_ids = list(dict.fromkeys(tag_ids))
        if len(unique_ids) > MAX_TAGS_PER_POST:
            raise ValidationError(
                detail=f"A post can have at most {MAX_TAGS_PER_POST} tags",
            ).with_details(field="tag_ids")

        tags = await self.tag_repo.get_many(unique_ids)
        missing = sorted(set(unique_ids) - {tag.id for tag in tags})
        if missing:
            raise RecordNotFoundError(detail="Tag not found").with_details(tag_ids=missing)
        return tags

    # Reading

    async def list_published(self, pagination: Pagination) -> PostListResponse:
        posts, total = await self.post_repo.list_published(pagination)
        return self._to_list(posts, total, pagination)

    async def get_post(self, post_id: int, viewer: UserDB | None = None) -> PostResponse:
        """
        Load a post with the viewer's like/bookmark state.

        Raises:
            RecordNotFoundError: If the post is missing or not visible
        """
        post = await self._get_visible(post_id, viewer)
        return await self._to_response(post, viewer)

    async def search(self, query: str, pagination: Pagination) -> PostSearchResponse:
        """
        Search published posts.

        Raises:
            ValidationError: If the query has nothing to look for
        """
        parsed = parse_search_query(query or "")
        if parsed.is_empty:
            raise ValidationError(detail="Search query is required").with_details(field="q")

        posts, total = await self.post_repo.search(parsed, pagination)
        first = parsed.needles[0]
        results = []
        for post in posts:
            result = PostSearchResult.model_validate(post)
            result.snippet = extract_snippet(markdown_to_text(post.content), first)
            result.highlighted_title = highlight_matches(post.title, parsed.needles)
            results.append(result)

        return PostSearchResponse(
            query=query.strip(),
            posts=results,
            pagination=PaginationResponse.build(pagination.page, pagination.limit, total),
        )

    async def list_by_category(self, slug: str, pagination: Pagination) -> PostListResponse:
        category = await self.category_repo.get_by_slug(slug)
        if category is None or category.id is None:
            raise RecordNotFoundError(detail="Category not found")
        posts, total = await self.post_repo.list_by_category(category.id, pagination)
        return self._to_list(posts, total, pagination)

    async def list_by_tag(self, slug: str, pagination: Pagination) -> PostListResponse:
        tag = await self.tag_repo.get_by_slug(slug)
        if tag is None or tag.id is None:
            raise RecordNotFoundError(detail="Tag not found")
        posts, total = await self.post_repo.list_by_tag(tag.id, pagination)
        return self._to_list(posts, total, pagination)

    async def record_view(
        self,
        post_id: int,
        ip_address: str,
        user_agent: str | None = None,
    ) -> ViewResponse:
        """
        Count a view unless this IP already viewed the post within the dedup window.

        Raises:
            RecordNotFoundError: If the post is missing or not visible
        """
        post = await self._get_visible(post_id, None)
        ip = normalize_ip(ip_address)

        if self.view_tracker.has_viewed(post_id, ip):
            return ViewResponse(counted=False, view_count=post.view_count)

        await self.post_repo.increment_view_count(post_id)
        await self.post_repo.record_view(post_id, hash_ip(ip), user_agent)
        self.view_tracker.mark_viewed(post_id, ip)

        post = await self._reload(post_id)
        return ViewResponse(counted=True, view_count=post.view_count)

    # Authoring

    async def create_post(self, author: UserDB, data: PostCreate) -> PostResponse:
        """
        Create a post as ``author``.

        Raises:
            ValidationError: If the slug is empty or too many tags are given
            DuplicateEntryError: If the slug is taken
            RecordNotFoundError: If the category or a tag does not exist
        """
        slug = await self._checked_slug(data.slug or data.title)
        category = await self._resolve_category(data.category_id)
        tags = await self._resolve_tags(data.tag_ids)

        content = sanitize_html(data.content)
        post = PostDB(
            title=data.title.strip(),
            slug=slug,
            content=content,
            excerpt=data.excerpt or extract_excerpt(content, EXCERPT_LENGTH),
            featured_image=data.featured_image,
            status=data.status,
            published_at=_publication_time(data.status, data.published_at),
            meta_title=data.meta_title,
            meta_description=data.meta_description,
            meta_keywords=data.meta_keywords,
            author_id=author.id,
            category_id=category.id if category else None,
        )
        post.tags = tags
        post = await self.post_repo.add(post)
        if post.id is None:
            msg = "Post was not assigned an ID"
            raise ValueError(msg)

        if category is not None and category.id is not None:
            await self.category_repo.increment_post_count(category.id)
        for tag in tags:
            if tag.id is not None:
                await self.tag_repo.increment_post_count(tag.id)

        logger.info(f"Post {post.id} created by user {author.id}")
        return await self._to_response(await self._reload(post.id))

    async def update_post(self, post_id: int, data: PostUpdate) -> PostResponse:
        """
        Update the fields set on ``data``.

        Raises:
            RecordNotFoundError: If the post, category or a tag does not exist
            DuplicateEntryError: If the new slug is taken
            ValidationError: If the new slug is empty or too many tags are given
        """
        post = await self.post_repo.get_by_id(post_id)
        if post is None:
            raise _post_not_found(post_id)

        fields = data.model_dump(exclude_unset=True)

        if fields.get("slug"):
            slug = slugify(fields["slug"])
            if slug != post.slug:
                post.slug = await self._checked_slug(slug, exclude_id=post_id)

        for name in SIMPLE_FIELDS:
            if name in fields and (fields[name] is not None or name != "title"):
                setattr(post, name, fields[name])

        if fields.get("content"):
            post.content = sanitize_html(fields["content"])
        if "excerpt" in fields:
            post.excerpt = fields["excerpt"] or extract_excerpt(post.content, EXCERPT_LENGTH)

        status = fields.get("status") or post.status
        if "status" in fields or "published_at" in fields:
            post.published_at = _publication_time(
                status,
                fields.get("published_at"),
                post.published_at,
            )
            post.status = status

        if "category_id" in fields and fields["category_id"] != post.category_id:
            category = await self._resolve_category(fields["category_id"])
            if post.category_id is not None:
                await self.category_repo.decrement_post_count(post.category_id)
            if category is not None and category.id is not None:
                await self.category_repo.increment_post_count(category.id)
            post.category_id = category.id if category else None

        if fields.get("tag_ids") is not None:
            tags = await self._resolve_tags(fields["tag_ids"])
            old_ids = {tag.id for tag in post.tags}
            new_ids = {tag.id for tag in tags}
            for tag_id in old_ids - new_ids:
                if tag_id is not None:
                    await self.tag_repo.decrement_post_count(tag_id)
            for tag_id in new_ids - old_ids:
                if tag_id is not None:
                    await self.tag_repo.increment_post_count(tag_id)
            post.tags = tags

        await self.post_repo.save(post)
        return await self._to_response(await self._reload(post_id))

    async def delete_post(self, post_id: int) -> None:
        """
        Soft-delete a post and release its category and tag counts.

        Raises:
            RecordNotFoundError: If the post does not exist
        """
        post = await self.post_repo.get_by_id(post_id)
        if post is None:
            raise _post_not_found(post_id)

        if post.category_id is not None:
            await self.category_repo.decrement_post_count(post.category_id)
        for tag in post.tags:
            if tag.id is not None:
                await self.tag_repo.decrement_post_count(tag.id)

        await self.post_repo.delete(post_id)
        logger.info(f"Post {post_id} deleted")

    # Likes and bookmarks

    async def like_post(self, post_id: int, user: UserDB) -> InteractionResponse:
        """
        Like a post and notify its author.

        Raises:
            RecordNotFoundError: If the post is missing or not visible
            DuplicateEntryError: If the user already liked it
        """
        post = await self._get_visible(post_id, user)
        if user.id is None:
            raise _post_not_found(post_id)
        if await self.post_repo.has_liked(user.id, post_id):
            raise DuplicateEntryError(detail="Post already liked")

        await self.post_repo.like(user.id, post_id)
        await self.notifications.notify(
            recipient_id=post.author_id,
            actor=user,
            type=NotificationType.POST_LIKE,
            title="New like",
            message=f'{user.nickname} liked your post "{post.title}"',
            post_id=post_id,
            link=f"/posts/{post_id}",
        )

        post = await self._reload(post_id)
        return InteractionResponse(active=True, count=post.like_count)

    async def unlike_post(self, post_id: int, user: UserDB) -> InteractionResponse:
        """
        Remove the user's like.

        Raises:
            RecordNotFoundError: If the post does not exist or was not liked
        """
        await self._get_visible(post_id, user)
        if user.id is None or not await self.post_repo.unlike(user.id, post_id):
            raise RecordNotFoundError(detail="Like not found")

        post = await self._reload(post_id)
        return InteractionResponse(active=False, count=post.like_count)

    async def bookmark_post(self, post_id: int, user: UserDB) -> InteractionResponse:
        """
        Bookmark a post and notify its author.

        Raises:
            RecordNotFoundError: If the post is missing or not visible
            DuplicateEntryError: If the post is already bookmarked
        """
        post = await self._get_visible(post_id, user)
        if user.id is None:
            raise _post_not_found(post_id)
        if await self.post_repo.has_bookmarked(user.id, post_id):
            raise DuplicateEntryError(detail="Post already bookmarked")

        await self.post_repo.bookmark(user.id, post_id)
        await self.notifications.notify(
            recipient_id=post.author_id,
            actor=user,
            type=NotificationType.POST_BOOKMARK,
            title="New bookmark",
            message=f'{user.nickname} bookmarked your post "{post.title}"',
            post_id=post_id,
            link=f"/posts/{post_id}",
        )

        post = await self._reload(post_id)
        return InteractionResponse(active=True, count=post.bookmark_count)

    async def unbookmark_post(self, post_id: int, user: UserDB) -> InteractionResponse:
        await self._get_visible(post_id, user)
        if user.id is None or not await self.post_repo.unbookmark(user.id, post_id):
            raise RecordNotFoundError(detail="Bookmark not found")

        post = await self._reload(post_id)
        return InteractionResponse(active=False, count=post.bookmark_count)

    async def list_bookmarks(self, user: UserDB, pagination: Pagination) -> PostListResponse:
        if user.id is None:
            return self._to_list([], 0, pagination)
        posts, total = await self.post_repo.list_bookmarked(user.id, pagination)
        return self._to_list(posts, total, pagination, bookmarked=True)
