from starlette.status import HTTP_429_TOO_MANY_REQUESTS

from app.errors.base import BaseAppError, ErrorCode, create_exception_handler
from app.monitoring import get_logger

logger = get_logger(__name__)


class RateLimitExceededError(BaseAppError):
    """Raised when a client exhausts its request quota."""

    code = ErrorCode.RATE_LIMIT_EXCEEDED

    def __init__(
        self,
        limit: int,
        window: int,
        retry_after: int,
        detail: str = "Too many requests. Please try again later.",
    ) -> None:
        super().__init__(detail, HTTP_429_TOO_MANY_REQUESTS)
        self.headers.update(
            {
                "Retry-After": str(retry_after),
                "X-RateLimit-Limit": str(limit),
                "X-RateLimit-Remaining": "0",
                "X-RateLimit-Window": str(window),
            },
        )


rate_limit_exception_handler = create_exception_handler(logger)
