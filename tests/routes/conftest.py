# tests/routes/conftest.py
"""
Pytest fixtures for route tests.

Services are replaced through ``app.dependency_overrides`` so that the
HTTP layer (status codes, error bodies, headers, auth) is tested without
a database.
"""

from collections.abc import AsyncGenerator, Callable
from unittest.mock import MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from app.dependencies import (
    get_admin_service,
    get_auth_service,
    get_category_service,
    get_comment_service,
    get_current_user,
    get_notification_service,
    get_optional_user,
    get_post_service,
    get_tag_service,
    get_user_service,
)
from app.main import app
from app.models import UserDB
from app.schemas.comment import CommentResponse
from app.schemas.post import PostResponse
from app.schemas.user import AuthorResponse
from app.utils.helpers import utc_now

SERVICE_GETTERS = {
    "auth": get_auth_service,
    "user": get_user_service,
    "post": get_post_service,
    "comment": get_comment_service,
    "admin": get_admin_service,
    "category": get_category_service,
    "tag": get_tag_service,
    "notification": get_notification_service,
}


def _provide(value: object) -> Callable[[], object]:
    # Overrides are introspected by FastAPI, so they must take no parameters
    return lambda: value


@pytest.fixture
def services() -> dict[str, MagicMock]:
    """One mock per service, installed as dependency overrides."""
    mocks = {name: MagicMock(name=f"{name}_service") for name in SERVICE_GETTERS}
    for name, getter in SERVICE_GETTERS.items():
        app.dependency_overrides[getter] = _provide(mocks[name])
    return mocks


@pytest.fixture
async def client(services: dict[str, MagicMock]) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing."""
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def login_as() -> Callable[[UserDB | None], None]:
    """Make every auth dependency resolve to ``user`` (None means anonymous)."""

    def login(user: UserDB | None) -> None:
        app.dependency_overrides[get_optional_user] = _provide(user)
        if user is not None:
            app.dependency_overrides[get_current_user] = _provide(user)

    return login


@pytest.fixture
def post_response() -> Callable[..., PostResponse]:
    def build(**overrides: object) -> PostResponse:
        now = utc_now()
        values: dict[str, object] = {
            "id": 10,
            "title": "Writing a blog backend",
            "slug": "writing-a-blog-backend",
            "content": "FastAPI makes async services pleasant to write.",
            "status": "published",
            "published_at": now,
            "author": AuthorResponse(id=1, nickname="admin"),
            "created_at": now,
            "updated_at": now,
        }
        values.update(overrides)
        return PostResponse.model_validate(values)

    return build


@pytest.fixture
def comment_response() -> Callable[..., CommentResponse]:
    def build(**overrides: object) -> CommentResponse:
        now = utc_now()
        values: dict[str, object] = {
            "id": 100,
            "content": "Nice post",
            "post_id": 10,
            "user_id": 2,
            "user": AuthorResponse(id=2, nickname="reader"),
            "created_at": now,
            "updated_at": now,
        }
        values.update(overrides)
        return CommentResponse.model_validate(values)

    return build
