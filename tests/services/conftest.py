# tests/services/conftest.py
"""Pytest fixtures for service tests. Repositories are replaced by mocks."""

from collections.abc import Callable
from datetime import timedelta
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.clients.memory_client import MemoryClient
from app.managers.view_tracker import ViewTracker
from app.models import CategoryDB, CommentDB, PostDB, PostStatus, TagDB
from app.services import NotificationService
from app.utils.helpers import utc_now


def make_post(**overrides: Any) -> PostDB:
    """Build a published post owned by the admin (user 1)."""
    now = utc_now()
    values: dict[str, Any] = {
        "id": 10,
        "title": "Writing a blog backend",
        "slug": "writing-a-blog-backend",
        "content": "FastAPI makes async services pleasant to write.",
        "excerpt": "FastAPI makes async services pleasant to write.",
        "status": PostStatus.PUBLISHED,
        "published_at": now - timedelta(hours=1),
        "author_id": 1,
        "created_at": now,
        "updated_at": now,
    }
    values.update(overrides)
    return PostDB(**values)


def make_comment(**overrides: Any) -> CommentDB:
    now = utc_now()
    values: dict[str, Any] = {
        "id": 100,
        "content": "Nice post",
        "post_id": 10,
        "user_id": 2,
        "created_at": now,
        "updated_at": now,
    }
    values.update(overrides)
    return CommentDB(**values)


def make_category(**overrides: Any) -> CategoryDB:
    now = utc_now()
    values: dict[str, Any] = {
        "id": 5,
        "name": "Technology",
        "slug": "technology",
        "created_at": now,
        "updated_at": now,
    }
    values.update(overrides)
    return CategoryDB(**values)


def make_tag(tag_id: int, name: str) -> TagDB:
    now = utc_now()
    return TagDB(id=tag_id, name=name, slug=name.lower(), created_at=now, updated_at=now)


def assign_id(record_id: int) -> AsyncMock:
    """Mimic ``repo.add``: the database assigns the primary key."""

    async def add(record: Any) -> Any:
        record.id = record_id
        return record

    return AsyncMock(side_effect=add)


@pytest.fixture
def mock_user_repo() -> MagicMock:
    mock = MagicMock()
    mock.exists_by_email = AsyncMock(return_value=False)
    mock.exists_by_nickname = AsyncMock(return_value=False)
    mock.get_by_email = AsyncMock(return_value=None)
    mock.get_by_id = AsyncMock(return_value=None)
    mock.add = assign_id(2)
    mock.update_last_login = AsyncMock(side_effect=lambda user: user)
    mock.save = AsyncMock(side_effect=lambda record: record)
    mock.delete = AsyncMock(return_value=True)
    mock.count = AsyncMock(return_value=0)
    mock.list_paginated = AsyncMock(return_value=([], 0))
    return mock


@pytest.fixture
def mock_post_repo() -> MagicMock:
    mock = MagicMock()
    mock.get_by_id = AsyncMock(return_value=make_post())
    mock.get_or_raise = AsyncMock(return_value=make_post())
    mock.slug_exists = AsyncMock(return_value=False)
    mock.add = assign_id(10)
    mock.save = AsyncMock(side_effect=lambda record: record)
    mock.delete = AsyncMock(return_value=True)
    mock.has_liked = AsyncMock(return_value=False)
    mock.has_bookmarked = AsyncMock(return_value=False)
    mock.like = AsyncMock()
    mock.unlike = AsyncMock(return_value=True)
    mock.bookmark = AsyncMock()
    mock.unbookmark = AsyncMock(return_value=True)
    mock.search = AsyncMock(return_value=([], 0))
    mock.list_published = AsyncMock(return_value=([], 0))
    mock.list_by_category = AsyncMock(return_value=([], 0))
    mock.list_by_tag = AsyncMock(return_value=([], 0))
    mock.list_bookmarked = AsyncMock(return_value=([], 0))
    mock.increment_view_count = AsyncMock()
    mock.record_view = AsyncMock()
    mock.increment_comment_count = AsyncMock()
    mock.decrement_comment_count = AsyncMock()
    mock.count = AsyncMock(return_value=0)
    mock.count_published = AsyncMock(return_value=0)
    return mock


@pytest.fixture
def mock_comment_repo() -> MagicMock:
    mock = MagicMock()
    mock.get_by_id = AsyncMock(return_value=make_comment())
    mock.get_or_raise = AsyncMock(side_effect=lambda *a, **kw: make_comment())
    mock.add = assign_id(100)
    mock.save = AsyncMock(side_effect=lambda record: record)
    mock.delete = AsyncMock(return_value=True)
    mock.has_liked = AsyncMock(return_value=False)
    mock.liked_ids = AsyncMock(return_value=set())
    mock.like = AsyncMock()
    mock.unlike = AsyncMock(return_value=True)
    mock.list_by_post = AsyncMock(return_value=([], 0))
    mock.list_replies = AsyncMock(return_value=([], 0))
    mock.list_paginated = AsyncMock(return_value=([], 0))
    mock.count = AsyncMock(return_value=0)
    return mock


@pytest.fixture
def mock_category_repo() -> MagicMock:
    mock = MagicMock()
    mock.get_by_id = AsyncMock(return_value=make_category())
    mock.get_by_slug = AsyncMock(return_value=make_category())
    mock.list_all = AsyncMock(return_value=[])
    mock.exists_by_name = AsyncMock(return_value=False)
    mock.exists_by_slug = AsyncMock(return_value=False)
    mock.add = assign_id(5)
    mock.save = AsyncMock(side_effect=lambda record: record)
    mock.delete = AsyncMock(return_value=True)
    mock.increment_post_count = AsyncMock()
    mock.decrement_post_count = AsyncMock()
    return mock


@pytest.fixture
def mock_tag_repo() -> MagicMock:
    mock = MagicMock()
    mock.get_many = AsyncMock(return_value=[])
    mock.get_by_id = AsyncMock(return_value=make_tag(1, "Python"))
    mock.get_by_slug = AsyncMock(return_value=make_tag(1, "Python"))
    mock.list_all = AsyncMock(return_value=[])
    mock.delete = AsyncMock(return_value=True)
    mock.exists_by_name = AsyncMock(return_value=False)
    mock.exists_by_slug = AsyncMock(return_value=False)
    mock.add = assign_id(1)
    mock.save = AsyncMock(side_effect=lambda record: record)
    mock.increment_post_count = AsyncMock()
    mock.decrement_post_count = AsyncMock()
    return mock


@pytest.fixture
def mock_notification_repo() -> MagicMock:
    mock = MagicMock()
    mock.add = assign_id(1000)
    mock.get_for_user = AsyncMock(return_value=None)
    mock.mark_as_read = AsyncMock(side_effect=lambda notification: notification)
    mock.list_for_user = AsyncMock(return_value=([], 0))
    mock.list_unread = AsyncMock(return_value=([], 0))
    mock.mark_all_as_read = AsyncMock(return_value=0)
    mock.count_unread = AsyncMock(return_value=0)
    return mock


@pytest.fixture
def notification_service(mock_notification_repo: MagicMock) -> NotificationService:
    return NotificationService(mock_notification_repo)


@pytest.fixture
def mock_notifications() -> MagicMock:
    """Notification service double for asserting fan-out."""
    mock = MagicMock()
    mock.notify = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def view_tracker() -> ViewTracker:
    return ViewTracker(MemoryClient(), ttl=86400)


@pytest.fixture
def post_factory() -> Callable[..., PostDB]:
    return make_post


@pytest.fixture
def comment_factory() -> Callable[..., CommentDB]:
    return make_comment


@pytest.fixture
def category_factory() -> Callable[..., CategoryDB]:
    return make_category


@pytest.fixture
def tag_factory() -> Callable[[int, str], TagDB]:
    return make_tag
