"""Authentication and authorization errors."""

from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from app.errors.base import BaseAppError, ErrorCode, create_exception_handler
from app.monitoring import get_logger

logger = get_logger(__name__)

BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


class UserAuthenticationError(BaseAppError):
    """Base class for authentication errors."""

    code = ErrorCode.UNAUTHORIZED

    def __init__(
        self,
        detail: str = "Authentication required",
        status_code: int = HTTP_401_UNAUTHORIZED,
    ) -> None:
        super().__init__(detail, status_code)
        self.headers.update(BEARER_CHALLENGE)


class InvalidCredentialsError(UserAuthenticationError):
    """Raised when the email/password pair does not match a user."""

    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class InvalidTokenError(UserAuthenticationError):
    """Raised when a JWT is malformed, forged or of the wrong type."""

    code = ErrorCode.INVALID_TOKEN

    def __init__(self, detail: str = "Invalid token") -> None:
        super().__init__(detail)


class ExpiredTokenError(UserAuthenticationError):
    """Raised when a JWT is past its expiry."""

    code = ErrorCode.EXPIRED_TOKEN

    def __init__(self, detail: str = "Token has expired") -> None:
        super().__init__(detail)


class ForbiddenError(BaseAppError):
    """Raised when the caller may not perform the action."""

    code = ErrorCode.FORBIDDEN

    def __init__(self, detail: str = "Access forbidden") -> None:
        super().__init__(detail, HTTP_403_FORBIDDEN)


class InsufficientPermissionError(ForbiddenError):
    """Raised when an admin-only action is attempted by a regular user."""

    code = ErrorCode.INSUFFICIENT_PERMISSION

    def __init__(self, detail: str = "Admin privileges required") -> None:
        super().__init__(detail)


auth_exception_handler = create_exception_handler(logger)
