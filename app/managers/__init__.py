from app.managers.password_manager import (
    PasswordHasher,
    get_password_hasher,
    hash_password,
    verify_password,
)
from app.managers.rate_limiter import (
    RateLimiter,
    api_limiter,
    api_rate_limit,
    comment_limiter,
    comment_rate_limit,
)
from app.managers.token_manager import (
    create_access_token,
    create_refresh_token,
    decode_access_token,
    decode_refresh_token,
)
from app.managers.view_tracker import ViewTracker, get_view_tracker, memory_client, view_tracker

__all__ = [
    "PasswordHasher",
    "RateLimiter",
    "ViewTracker",
    "api_limiter",
    "api_rate_limit",
    "comment_limiter",
    "comment_rate_limit",
    "create_access_token",
    "create_refresh_token",
    "decode_access_token",
    "decode_refresh_token",
    "get_password_hasher",
    "get_view_tracker",
    "hash_password",
    "memory_client",
    "verify_password",
    "view_tracker",
]
