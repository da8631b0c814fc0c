# tests/repositories/conftest.py
"""
Fixtures for repository tests.

Every test gets its own in-memory SQLite database so that rows, counters
and the event loop never leak between tests.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import timedelta
from typing import Any

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import app.models  # noqa: F401
from app.db.database import _enable_sqlite_foreign_keys
from app.models import CategoryDB, PostDB, PostStatus, TagDB, UserDB
from app.repositories import (
    CategoryRepository,
    CommentRepository,
    NotificationRepository,
    PostRepository,
    TagRepository,
    UserRepository,
)
from app.utils.helpers import utc_now


@pytest.fixture
async def session() -> AsyncGenerator[AsyncSession]:
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    _enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with maker() as db_session:
        yield db_session

    await engine.dispose()


@pytest.fixture
def user_repo(session: AsyncSession) -> UserRepository:
    return UserRepository(session)


@pytest.fixture
def post_repo(session: AsyncSession) -> PostRepository:
    return PostRepository(session)


@pytest.fixture
def comment_repo(session: AsyncSession) -> CommentRepository:
    return CommentRepository(session)


@pytest.fixture
def notification_repo(session: AsyncSession) -> NotificationRepository:
    return NotificationRepository(session)


@pytest.fixture
def category_repo(session: AsyncSession) -> CategoryRepository:
    return CategoryRepository(session)


@pytest.fixture
def tag_repo(session: AsyncSession) -> TagRepository:
    return TagRepository(session)


@pytest.fixture
async def author(user_repo: UserRepository) -> UserDB:
    return await user_repo.add(
        UserDB(email="admin@example.com", password="hashed", nickname="admin", is_admin=True),
    )


@pytest.fixture
async def reader(user_repo: UserRepository) -> UserDB:
    return await user_repo.add(
        UserDB(email="reader@example.com", password="hashed", nickname="reader"),
    )


@pytest.fixture
async def category(category_repo: CategoryRepository) -> CategoryDB:
    return await category_repo.add(CategoryDB(name="Technology", slug="technology"))


@pytest.fixture
async def tag(tag_repo: TagRepository) -> TagDB:
    return await tag_repo.add(TagDB(name="python", slug="python"))


@pytest.fixture
def create_post(
    post_repo: PostRepository,
    author: UserDB,
) -> Callable[..., Awaitable[PostDB]]:
    """Insert a post; published an hour ago unless overridden."""

    async def create(slug: str, **overrides: Any) -> PostDB:
        values: dict[str, Any] = {
            "title": slug.replace("-", " ").title(),
            "slug": slug,
            "content": f"Content of {slug}",
            "status": PostStatus.PUBLISHED,
            "published_at": utc_now() - timedelta(hours=1),
            "author_id": author.id,
        }
        values.update(overrides)
        return await post_repo.add(PostDB(**values))

    return create
