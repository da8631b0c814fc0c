# tests/managers/test_password_manager.py
"""Tests for bcrypt password hashing."""

import pytest

from app.managers.password_manager import PasswordHasher, hash_password, verify_password


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


class TestPasswordHasher:
    """Tests for the synchronous hasher."""

    def test_hash_and_verify(self, hasher: PasswordHasher) -> None:
        hashed = hasher.hash("S3cure!pass")
        assert hashed.startswith("$2b$04$")
        assert hasher.verify("S3cure!pass", hashed)
        assert not hasher.verify("wrong!pass1", hashed)

    def test_hashes_are_salted(self, hasher: PasswordHasher) -> None:
        assert hasher.hash("S3cure!pass") != hasher.hash("S3cure!pass")

    def test_empty_password_rejected(self, hasher: PasswordHasher) -> None:
        with pytest.raises(ValueError, match="empty"):
            hasher.hash("")

    def test_missing_hash_never_verifies(self, hasher: PasswordHasher) -> None:
        assert not hasher.verify("anything1!", None)
        assert not hasher.verify("anything1!", "")

    def test_corrupted_hash_does_not_raise(self, hasher: PasswordHasher) -> None:
        assert not hasher.verify("anything1!", "not-a-bcrypt-hash")

    def test_needs_rehash_when_cost_changes(self, hasher: PasswordHasher) -> None:
        hashed = hasher.hash("S3cure!pass")
        assert not hasher.needs_rehash(hashed)
        assert PasswordHasher(rounds=5).needs_rehash(hashed)


async def test_async_helpers_roundtrip() -> None:
    """The module level coroutines run the shared hasher off the event loop."""
    hashed = await hash_password("S3cure!pass")
    assert await verify_password("S3cure!pass", hashed)
    assert not await verify_password("other!pass1", hashed)
