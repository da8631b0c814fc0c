# tests/repositories/test_comment_repository.py
"""Tests for CommentRepository."""

from collections.abc import Awaitable, Callable

import pytest

from app.errors import DuplicateEntryError
from app.models import CommentDB, PostDB, UserDB
from app.repositories import CommentRepository
from app.utils.pagination import Pagination


@pytest.fixture
async def post(create_post: Callable[..., Awaitable[PostDB]]) -> PostDB:
    return await create_post("discussed")


@pytest.fixture
def add_comment(
    comment_repo: CommentRepository,
    post: PostDB,
) -> Callable[..., Awaitable[CommentDB]]:
    async def add(content: str, **overrides: object) -> CommentDB:
        assert post.id is not None
        values: dict[str, object] = {"content": content, "post_id": post.id}
        values.update(overrides)
        return await comment_repo.add(CommentDB(**values))

    return add


async def test_threads_read_oldest_first(
    comment_repo: CommentRepository,
    post: PostDB,
    reader: UserDB,
    add_comment: Callable[..., Awaitable[CommentDB]],
) -> None:
    first = await add_comment("first", user_id=reader.id)
    second = await add_comment("second", author_name="Guest", author_password="hash")
    await add_comment("reply to first", parent_id=first.id, user_id=reader.id)
    await add_comment("another reply", parent_id=first.id, author_name="Guest")
    assert post.id is not None and first.id is not None

    top_level, total = await comment_repo.list_by_post(post.id, Pagination())
    replies, reply_total = await comment_repo.list_replies(first.id, Pagination())

    assert [c.content for c in top_level] == ["first", "second"]
    assert total == 2
    assert second.is_anonymous is True
    assert [c.content for c in replies] == ["reply to first", "another reply"]
    assert reply_total == 2


async def test_deleted_comment_keeps_replies(
    comment_repo: CommentRepository,
    post: PostDB,
    add_comment: Callable[..., Awaitable[CommentDB]],
) -> None:
    parent = await add_comment("parent")
    await add_comment("child", parent_id=parent.id)
    assert post.id is not None and parent.id is not None

    assert await comment_repo.delete(parent.id) is True

    top_level, _ = await comment_repo.list_by_post(post.id, Pagination())
    replies, _ = await comment_repo.list_replies(parent.id, Pagination())
    assert top_level == []
    assert [c.content for c in replies] == ["child"]
    assert await comment_repo.count() == 1


async def test_admin_listing_newest_first(
    comment_repo: CommentRepository,
    add_comment: Callable[..., Awaitable[CommentDB]],
) -> None:
    await add_comment("one")
    await add_comment("two")
    await add_comment("three")

    comments, total = await comment_repo.list_paginated(Pagination(page=1, limit=2))

    assert [c.content for c in comments] == ["three", "two"]
    assert total == 3


async def test_likes(
    comment_repo: CommentRepository,
    reader: UserDB,
    add_comment: Callable[..., Awaitable[CommentDB]],
) -> None:
    liked = await add_comment("liked")
    other = await add_comment("not liked")
    assert reader.id is not None and liked.id is not None and other.id is not None

    await comment_repo.like(reader.id, liked.id)

    assert await comment_repo.has_liked(reader.id, liked.id) is True
    assert await comment_repo.liked_ids(reader.id, [liked.id, other.id]) == {liked.id}
    assert await comment_repo.liked_ids(reader.id, []) == set()
    assert (await comment_repo.get_or_raise(liked.id, refresh=True)).like_count == 1

    assert await comment_repo.unlike(reader.id, liked.id) is True
    assert await comment_repo.unlike(reader.id, liked.id) is False
    assert (await comment_repo.get_or_raise(liked.id, refresh=True)).like_count == 0


async def test_duplicate_like(
    comment_repo: CommentRepository,
    reader: UserDB,
    add_comment: Callable[..., Awaitable[CommentDB]],
) -> None:
    comment = await add_comment("popular")
    assert reader.id is not None and comment.id is not None
    await comment_repo.like(reader.id, comment.id)

    with pytest.raises(DuplicateEntryError, match="Comment already liked"):
        await comment_repo.like(reader.id, comment.id)
