# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Settings are read at import time, so the test environment must be in place
# before anything from ``app`` is imported.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["SERVER_ENV"] = "test"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET"] = "test-access-secret"
os.environ["JWT_REFRESH_SECRET"] = "test-refresh-secret"
os.environ["RATELIMIT_ENABLED"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["LOG_TO_FILE"] = "false"

from datetime import timedelta

import pytest

from app.managers.token_manager import create_access_token
from app.models import UserDB
from app.utils.helpers import utc_now


@pytest.fixture
def sample_user() -> UserDB:
    """Create a regular reader account."""
    return UserDB(
        id=2,
        email="reader@example.com",
        password="$2b$04$abcdefghijklmnopqrstuu5T7c1v8Xz9x1q2w3e4r5t6y7u8i9o0pa",
        nickname="reader",
        is_admin=False,
        created_at=utc_now(),
        updated_at=utc_now(),
    )


@pytest.fixture
def admin_user() -> UserDB:
    """Create the blog owner account."""
    return UserDB(
        id=1,
        email="admin@example.com",
        password="$2b$04$abcdefghijklmnopqrstuu5T7c1v8Xz9x1q2w3e4r5t6y7u8i9o0pa",
        nickname="admin",
        is_admin=True,
        created_at=utc_now(),
        updated_at=utc_now(),
    )


@pytest.fixture
def sample_access_token(sample_user: UserDB) -> str:
    assert sample_user.id is not None
    return create_access_token(
        sample_user.id,
        sample_user.email,
        expires_delta=timedelta(minutes=30),
    )


@pytest.fixture
def auth_headers(sample_access_token: str) -> dict[str, str]:
    """Create auth headers with a valid access token."""
    return {"Authorization": f"Bearer {sample_access_token}"}
