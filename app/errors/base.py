from collections.abc import Awaitable, Callable
from typing import Any, Self

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR
from structlog.stdlib import BoundLogger

from app.utils.helpers import host


class ErrorCode:
    """Machine readable error codes returned alongside ``detail``."""

    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    INVALID_TOKEN = "INVALID_TOKEN"
    EXPIRED_TOKEN = "EXPIRED_TOKEN"
    INSUFFICIENT_PERMISSION = "INSUFFICIENT_PERMISSION"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_EMAIL = "INVALID_EMAIL"
    INVALID_URL = "INVALID_URL"
    PASSWORD_TOO_WEAK = "PASSWORD_TOO_WEAK"
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    CONFLICT = "CONFLICT"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


class BaseAppError(Exception):
    """Base exception class for application errors."""

    code: str = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        detail: str = "Internal Server Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
        code: str | None = None,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code
        self.code = code or type(self).code
        self.details: dict[str, Any] = {}
        self.headers: dict[str, str] = {}

    def with_details(self, **details: Any) -> Self:
        """Attach extra context that is rendered under ``details``."""
        self.details.update(details)
        return self

    def with_error(self, error: BaseException) -> Self:
        """Record the underlying error as this error's cause."""
        self.__cause__ = error
        return self

    def __str__(self) -> str:
        if self.__cause__ is not None:
            return f"{self.detail}: {self.__cause__}"
        return self.detail


def error_content(exc: Exception) -> dict[str, Any]:
    """Build the JSON body for an application error."""
    content: dict[str, Any] = {
        "detail": getattr(exc, "detail", "Internal Server Error"),
        "code": getattr(exc, "code", ErrorCode.INTERNAL_ERROR),
    }
    if details := getattr(exc, "details", None):
        content["details"] = details
    return content


def create_exception_handler(
    logger: BoundLogger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create a standardized exception handler for the application.

    Args:
        logger: Logger instance to use for logging exceptions.

    Returns:
        A callable exception handler.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        status_code = getattr(exc, "status_code", HTTP_500_INTERNAL_SERVER_ERROR)
        content = error_content(exc)

        if status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                f"{exc} for ip: {host(request)} for endpoint {request.url.path}",
                exc_info=exc,
            )
        else:
            logger.warning(
                f"{content['detail']} for ip: {host(request)} for endpoint {request.url.path}",
            )

        return ORJSONResponse(
            content=content,
            status_code=status_code,
            headers=getattr(exc, "headers", None) or None,
        )

    return handler
