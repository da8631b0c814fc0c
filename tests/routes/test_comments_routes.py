# tests/routes/test_comments_routes.py
"""Tests for comment routes."""

from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import AsyncClient

from app.configs import settings
from app.errors import ForbiddenError, RecordNotFoundError, ValidationError
from app.main import app
from app.managers.rate_limiter import RateLimiter, get_api_limiter, get_comment_limiter
from app.models import UserDB
from app.schemas.comment import CommentResponse
from app.schemas.post import InteractionResponse

PREFIX = "/api/v1/comments"


class TestCreate:
    async def test_anonymous_comment(
        self,
        client: AsyncClient,
        services: dict[str, MagicMock],
        comment_response: Callable[..., CommentResponse],
    ) -> None:
        services["comment"].create_comment = AsyncMock(
            return_value=comment_response(
                user_id=None,
                user=None,
                author_name="Guest",
                is_anonymous=True,
            ),
        )

        response = await client.post(
            f"{PREFIX}/post/10",
            json={"content": "Hello", "author_name": "Guest", "author_password": "pass1234"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["author_name"] == "Guest"
        assert body["is_anonymous"] is True
        assert "author_password" not in body
        assert "author_email" not in body

        post_id, data, user = services["comment"].create_comment.await_args.args
        assert post_id == 10
        assert data.author_password == "pass1234"
        assert user is None

    async def test_signed_in_comment(
        self,
        client: AsyncClient,
        services: dict[str, MagicMock],
        login_as: Callable[[UserDB | None], None],
        sample_user: UserDB,
        comment_response: Callable[..., CommentResponse],
    ) -> None:
        login_as(sample_user)
        services["comment"].create_comment = AsyncMock(return_value=comment_response())

        response = await client.post(f"{PREFIX}/post/10", json={"content": "Hello"})

        assert response.status_code == 201
        assert response.json()["user"]["nickname"] == "reader"
        assert services["comment"].create_comment.await_args.args[2] is sample_user

    async def test_missing_anonymous_fields(
        self,
        client: AsyncClient,
        services: dict[str, MagicMock],
    ) -> None:
        services["comment"].create_comment = AsyncMock(
            side_effect=ValidationError(
                detail="author_name and author_password are required for anonymous comments",
            ).with_details(field="author_name"),
        )

        response = await client.post(f"{PREFIX}/post/10", json={"content": "Hello"})

        assert response.status_code == 400
        assert response.json()["details"] == {"field": "author_name"}

    async def test_empty_content_is_400(self, client: AsyncClient) -> None:
        response = await client.post(f"{PREFIX}/post/10", json={"content": ""})
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "content"

    async def test_reply(
        self,
        client: AsyncClient,
        services: dict[str, MagicMock],
        login_as: Callable[[UserDB | None], None],
        sample_user: UserDB,
        comment_response: Callable[..., CommentResponse],
    ) -> None:
        login_as(sample_user)
        services["comment"].create_reply = AsyncMock(
            return_value=comment_response(id=101, parent_id=100),
        )

        response = await client.post(f"{PREFIX}/100/replies", json={"content": "Agreed"})

        assert response.status_code == 201
        assert response.json()["parent_id"] == 100

    async def test_comment_writes_are_rate_limited(
        self,
        client: AsyncClient,
        services: dict[str, MagicMock],
        monkeypatch: pytest.MonkeyPatch,
        comment_response: Callable[..., CommentResponse],
    ) -> None:
        monkeypatch.setattr(settings, "RATELIMIT_ENABLED", True)
        limiter = RateLimiter(rate=1, window=60, name="comment-test")
        app.dependency_overrides[get_comment_limiter] = lambda: limiter
        services["comment"].create_comment = AsyncMock(return_value=comment_response())
        payload = {"content": "Hi", "author_name": "Guest", "author_password": "pass1234"}

        first = await client.post(f"{PREFIX}/post/10", json=payload)
        second = await client.post(f"{PREFIX}/post/10", json=payload)

        assert first.status_code == 201
        assert second.status_code == 429
        assert second.headers["Retry-After"] == "60"


class TestModify:
    async def test_edit_with_password_in_body(
        self,
        client: AsyncClient,
        services: dict[str, MagicMock],
        comment_response: Callable[..., CommentResponse],
    ) -> None:
        services["comment"].update_comment = AsyncMock(
            return_value=comment_response(content="Fixed", is_edited=True),
        )

        response = await client.put(
            f"{PREFIX}/100",
            json={"content": "Fixed", "author_password": "pass1234"},
        )

        assert response.status_code == 200
        assert response.json()["is_edited"] is True
        comment_id, data, user = services["comment"].update_comment.await_args.args
        assert comment_id == 100
        assert data.author_password == "pass1234"
        assert user is None

    async def test_delete_with_password_header(
        self,
        client: AsyncClient,
        services: dict[str, MagicMock],
    ) -> None:
        services["comment"].delete_comment = AsyncMock(return_value=None)

        response = await client.delete(
            f"{PREFIX}/100",
            headers={"X-Comment-Password": "pass1234"},
        )

        assert response.status_code == 204
        services["comment"].delete_comment.assert_awaited_once_with(100, None, "pass1234")

    async def test_delete_someone_elses_comment(
        self,
        client: AsyncClient,
        services: dict[str, MagicMock],
        login_as: Callable[[UserDB | None], None],
        sample_user: UserDB,
    ) -> None:
        login_as(sample_user)
        services["comment"].delete_comment = AsyncMock(
            side_effect=ForbiddenError(
                detail="You do not have permission to modify this comment",
            ),
        )

        response = await client.delete(f"{PREFIX}/100")

        assert response.status_code == 403
        assert response.json() == {
            "detail": "You do not have permission to modify this comment",
            "code": "FORBIDDEN",
        }
        services["comment"].delete_comment.assert_awaited_once_with(100, sample_user, None)


class TestLikes:
    async def test_like_requires_login(self, client: AsyncClient) -> None:
        response = await client.post(f"{PREFIX}/100/like")
        assert response.status_code == 401

    async def test_like(
        self,
        client: AsyncClient,
        services: dict[str, MagicMock],
        login_as: Callable[[UserDB | None], None],
        sample_user: UserDB,
    ) -> None:
        login_as(sample_user)
        services["comment"].like_comment = AsyncMock(
            return_value=InteractionResponse(active=True, count=1),
        )

        response = await client.post(f"{PREFIX}/100/like")

        assert response.status_code == 200
        assert response.json() == {"active": True, "count": 1}

    async def test_unlike_without_like(
        self,
        client: AsyncClient,
        services: dict[str, MagicMock],
        login_as: Callable[[UserDB | None], None],
        sample_user: UserDB,
    ) -> None:
        login_as(sample_user)
        services["comment"].unlike_comment = AsyncMock(
            side_effect=RecordNotFoundError(detail="Like not found"),
        )

        response = await client.delete(f"{PREFIX}/100/like")

        assert response.status_code == 404
        assert response.json()["detail"] == "Like not found"

    async def test_likes_share_the_comment_limit(
        self,
        client: AsyncClient,
        services: dict[str, MagicMock],
        login_as: Callable[[UserDB | None], None],
        sample_user: UserDB,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        login_as(sample_user)
        monkeypatch.setattr(settings, "RATELIMIT_ENABLED", True)
        rate = settings.RATELIMIT_COMMENT_REQUESTS
        comment_limiter = RateLimiter(
            rate=rate,
            window=settings.RATELIMIT_COMMENT_WINDOW,
            name="comment-like-test",
        )
        api_limiter = RateLimiter(rate=1000, window=60, name="api-test")
        app.dependency_overrides[get_comment_limiter] = lambda: comment_limiter
        app.dependency_overrides[get_api_limiter] = lambda: api_limiter
        services["comment"].like_comment = AsyncMock(
            return_value=InteractionResponse(active=True, count=1),
        )
        services["comment"].unlike_comment = AsyncMock(
            return_value=InteractionResponse(active=False, count=0),
        )

        statuses: list[int] = []
        for i in range(rate + 1):
            method = client.post if i % 2 == 0 else client.delete
            statuses.append((await method(f"{PREFIX}/100/like")).status_code)

        assert statuses == [200] * rate + [429]
        assert services["comment"].like_comment.await_count + (
            services["comment"].unlike_comment.await_count
        ) == rate
