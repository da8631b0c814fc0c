# tests/routes/test_auth_routes.py
"""Tests for authentication and profile routes."""

from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock

from httpx import AsyncClient

from app.errors import DuplicateEntryError, InvalidCredentialsError, PasswordTooWeakError
from app.models import UserDB
from app.schemas.auth import AuthResponse, TokenResponse
from app.schemas.common import MessageResponse
from app.schemas.user import UserResponse

PREFIX = "/api/v1/auth"


def auth_response(user: UserDB) -> AuthResponse:
    return AuthResponse(
        access_token="access",
        refresh_token="refresh",
        user=UserResponse.model_validate(user),
    )


async def test_register(
    client: AsyncClient,
    services: dict[str, MagicMock],
    sample_user: UserDB,
) -> None:
    services["auth"].register = AsyncMock(return_value=auth_response(sample_user))

    response = await client.post(
        f"{PREFIX}/register",
        json={"email": "reader@example.com", "password": "S3cure!pass", "nickname": "reader"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["nickname"] == "reader"
    assert "password" not in body["user"]


async def test_register_weak_password(
    client: AsyncClient,
    services: dict[str, MagicMock],
) -> None:
    services["auth"].register = AsyncMock(side_effect=PasswordTooWeakError())

    response = await client.post(
        f"{PREFIX}/register",
        json={"email": "reader@example.com", "password": "password1", "nickname": "reader"},
    )

    assert response.status_code == 400
    assert response.json()["code"] == "PASSWORD_TOO_WEAK"


async def test_register_taken_email(
    client: AsyncClient,
    services: dict[str, MagicMock],
) -> None:
    services["auth"].register = AsyncMock(
        side_effect=DuplicateEntryError(detail="Email already exists").with_details(field="email"),
    )

    response = await client.post(
        f"{PREFIX}/register",
        json={"email": "reader@example.com", "password": "S3cure!pass", "nickname": "reader"},
    )

    assert response.status_code == 409
    assert response.json()["details"] == {"field": "email"}


async def test_login_failure(client: AsyncClient, services: dict[str, MagicMock]) -> None:
    services["auth"].login = AsyncMock(side_effect=InvalidCredentialsError())

    response = await client.post(
        f"{PREFIX}/login",
        json={"email": "reader@example.com", "password": "wrong"},
    )

    assert response.status_code == 401
    assert response.json() == {"detail": "Invalid email or password", "code": "UNAUTHORIZED"}
    assert response.headers["WWW-Authenticate"] == "Bearer"


async def test_refresh(client: AsyncClient, services: dict[str, MagicMock]) -> None:
    services["auth"].refresh = AsyncMock(return_value=TokenResponse(access_token="new-access"))

    response = await client.post(f"{PREFIX}/refresh", json={"refresh_token": "refresh"})

    assert response.status_code == 200
    assert response.json() == {"access_token": "new-access", "token_type": "bearer"}
    services["auth"].refresh.assert_awaited_once_with("refresh")


async def test_logout(
    client: AsyncClient,
    services: dict[str, MagicMock],
    login_as: Callable[[UserDB | None], None],
    sample_user: UserDB,
) -> None:
    login_as(sample_user)
    services["auth"].logout = MagicMock(
        return_value=MessageResponse(message="Logged out successfully"),
    )

    response = await client.post(f"{PREFIX}/logout")

    assert response.status_code == 200
    assert response.json()["message"] == "Logged out successfully"


async def test_me(
    client: AsyncClient,
    services: dict[str, MagicMock],
    login_as: Callable[[UserDB | None], None],
    sample_user: UserDB,
) -> None:
    login_as(sample_user)
    services["user"].get_profile = AsyncMock(return_value=UserResponse.model_validate(sample_user))

    response = await client.get(f"{PREFIX}/me")

    assert response.status_code == 200
    assert response.json()["email"] == "reader@example.com"
    services["user"].get_profile.assert_awaited_once_with(2)


async def test_update_me(
    client: AsyncClient,
    services: dict[str, MagicMock],
    login_as: Callable[[UserDB | None], None],
    sample_user: UserDB,
) -> None:
    login_as(sample_user)
    services["user"].update_profile = AsyncMock(
        return_value=UserResponse.model_validate(sample_user),
    )

    response = await client.put(f"{PREFIX}/me", json={"bio": "Hello"})

    assert response.status_code == 200
    user_id, data = services["user"].update_profile.await_args.args
    assert user_id == 2
    assert data.bio == "Hello"
    assert data.nickname is None
