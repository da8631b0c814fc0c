# tests/routes/test_main_app.py
"""Application-wide behaviour: health, middleware headers, error format, rate limiting."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import AsyncClient

from app.configs import settings
from app.dependencies import get_auth_service
from app.main import app
from app.managers.rate_limiter import RateLimiter, get_api_limiter
from app.schemas.comment import CommentListResponse
from app.schemas.common import PaginationResponse
from app.schemas.taxonomy import CategoryListResponse
from app.services import AuthService


async def test_health(client: AsyncClient) -> None:
    response = await client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["env"] == settings.SERVER_ENV
    assert body["version"] == app.version
    assert "timestamp" in body


class TestMiddleware:
    async def test_security_headers(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["X-XSS-Protection"] == "1; mode=block"
        assert response.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"
        assert "Strict-Transport-Security" not in response.headers

    async def test_request_id_is_generated(self, client: AsyncClient) -> None:
        response = await client.get("/health")
        assert len(response.headers["X-Request-ID"]) == 32

    async def test_request_id_is_echoed(self, client: AsyncClient) -> None:
        response = await client.get("/health", headers={"X-Request-ID": "trace-123"})
        assert response.headers["X-Request-ID"] == "trace-123"


class TestErrorFormat:
    async def test_request_validation_is_400(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/auth/register", json={"email": "a@example.com"})

        assert response.status_code == 400
        body = response.json()
        assert body["detail"] == "Validation failed"
        assert body["code"] == "VALIDATION_ERROR"
        fields = {error["field"]: error["type"] for error in body["errors"]}
        assert fields == {"password": "missing", "nickname": "missing"}

    async def test_constraint_context_is_reported(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/auth/register",
            json={"email": "a@example.com", "password": "short", "nickname": "writer"},
        )

        assert response.status_code == 400
        (error,) = response.json()["errors"]
        assert error["field"] == "password"
        assert error["context"] == {"min_length": 8}

    async def test_missing_token(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/auth/me")

        assert response.status_code == 401
        assert response.json() == {
            "detail": "Missing authorization header",
            "code": "UNAUTHORIZED",
        }
        assert response.headers["WWW-Authenticate"] == "Bearer"

    async def test_garbage_token(self, client: AsyncClient) -> None:
        app.dependency_overrides[get_auth_service] = lambda: AuthService(MagicMock())

        response = await client.get(
            "/api/v1/auth/me",
            headers={"Authorization": "Bearer not-a-jwt"},
        )

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_TOKEN"

    async def test_optional_auth_ignores_bad_token(
        self,
        client: AsyncClient,
        services: dict[str, MagicMock],
    ) -> None:
        app.dependency_overrides[get_auth_service] = lambda: AuthService(MagicMock())
        services["comment"].list_by_post = AsyncMock(
            return_value=CommentListResponse(
                comments=[],
                pagination=PaginationResponse.build(1, 20, 0),
            ),
        )

        response = await client.get(
            "/api/v1/comments/post/10",
            headers={"Authorization": "Bearer not-a-jwt"},
        )

        assert response.status_code == 200
        args = services["comment"].list_by_post.await_args.args
        assert args[0] == 10
        assert args[2] is None


class TestRateLimit:
    @pytest.fixture
    def strict_limiter(self, monkeypatch: pytest.MonkeyPatch) -> RateLimiter:
        limiter = RateLimiter(rate=1, window=60, name="test")
        monkeypatch.setattr(settings, "RATELIMIT_ENABLED", True)
        app.dependency_overrides[get_api_limiter] = lambda: limiter
        return limiter

    async def test_second_request_is_limited(
        self,
        client: AsyncClient,
        services: dict[str, MagicMock],
        strict_limiter: RateLimiter,
    ) -> None:
        services["category"].list_categories = AsyncMock(
            return_value=CategoryListResponse(categories=[], total=0),
        )

        first = await client.get("/api/v1/categories")
        second = await client.get("/api/v1/categories")

        assert first.status_code == 200
        assert second.status_code == 429
        assert second.json()["code"] == "RATE_LIMIT_EXCEEDED"
        assert second.headers["Retry-After"] == "60"
        assert second.headers["X-RateLimit-Limit"] == "1"
        assert second.headers["X-RateLimit-Remaining"] == "0"
        assert second.headers["X-RateLimit-Window"] == "60"
        services["category"].list_categories.assert_awaited_once()

    async def test_health_is_not_limited(
        self,
        client: AsyncClient,
        strict_limiter: RateLimiter,
    ) -> None:
        for _ in range(3):
            assert (await client.get("/health")).status_code == 200
