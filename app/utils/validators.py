"""
Input validators shared by the services.

Each ``validate_*`` function returns ``None`` on success and raises the
matching :mod:`app.errors.validation` error otherwise.
"""

from re import compile as re_compile
from string import punctuation
from urllib.parse import urlparse

from app.errors.validation import (
    InvalidEmailError,
    InvalidURLError,
    PasswordTooWeakError,
    ValidationError,
)
from app.utils.text import collapse_whitespace

EMAIL_PATTERN = re_compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
NICKNAME_PATTERN = re_compile(r"^[a-zA-Z0-9_-]+$")
TAG_NAME_PATTERN = re_compile(r"^[a-zA-Z0-9가-힣-]+$")
CATEGORY_SLUG_PATTERN = re_compile(r"^[a-z0-9-]+$")

MAX_EMAIL_LENGTH = 254
MIN_PASSWORD_LENGTH = 8
MIN_NICKNAME_LENGTH = 2
MAX_NICKNAME_LENGTH = 20
MAX_TAG_NAME_LENGTH = 30
MAX_CATEGORY_SLUG_LENGTH = 50


def is_valid_email(email: str) -> bool:
    return len(email) <= MAX_EMAIL_LENGTH and EMAIL_PATTERN.match(email) is not None


def is_valid_password(password: str) -> bool:
    """
    Check password strength.

    A valid password has at least 8 characters and contains a letter, a
    digit and a punctuation or symbol character.
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        return False
    has_letter = any(ch.isalpha() for ch in password)
    has_number = any(ch.isdigit() for ch in password)
    has_special = any(ch in punctuation or not (ch.isalnum() or ch.isspace()) for ch in password)
    return has_letter and has_number and has_special


def is_valid_nickname(nickname: str) -> bool:
    return (
        MIN_NICKNAME_LENGTH <= len(nickname) <= MAX_NICKNAME_LENGTH
        and NICKNAME_PATTERN.match(nickname) is not None
    )


def is_valid_url(url: str) -> bool:
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def is_valid_tag_name(name: str) -> bool:
    return 1 <= len(name) <= MAX_TAG_NAME_LENGTH and TAG_NAME_PATTERN.match(name) is not None


def is_valid_category_slug(slug: str) -> bool:
    return (
        1 <= len(slug) <= MAX_CATEGORY_SLUG_LENGTH
        and CATEGORY_SLUG_PATTERN.match(slug) is not None
    )


def sanitize_string(value: str) -> str:
    """Trim and collapse internal whitespace."""
    return collapse_whitespace(value)


def validate_email(email: str) -> None:
    if not is_valid_email(email):
        raise InvalidEmailError


def validate_password(password: str) -> None:
    if not is_valid_password(password):
        raise PasswordTooWeakError


def validate_nickname(nickname: str) -> None:
    if not is_valid_nickname(nickname):
        raise ValidationError(
            detail="Nickname must be 2-20 characters (letters, numbers, _ and - only)",
        ).with_details(field="nickname")


def validate_url(url: str) -> None:
    if not is_valid_url(url):
        raise InvalidURLError


def validate_tag_name(name: str) -> None:
    if not is_valid_tag_name(name):
        raise ValidationError(
            detail="Tag name must be 1-30 characters (letters, numbers, Hangul and - only)",
        ).with_details(field="name")
