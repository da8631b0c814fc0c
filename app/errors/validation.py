"""Validation errors and request validation handling for FastAPI."""

from typing import Any, cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_400_BAD_REQUEST

from app.errors.base import BaseAppError, ErrorCode, create_exception_handler
from app.monitoring import get_logger
from app.utils.helpers import host

logger = get_logger(__name__)

PASSWORD_REQUIREMENTS = (
    "Password does not meet requirements (min 8 chars, letters+numbers+special chars)"
)


class ValidationError(BaseAppError):
    """Raised when input fails a business validation rule."""

    code = ErrorCode.VALIDATION_ERROR

    def __init__(self, detail: str = "Validation failed") -> None:
        super().__init__(detail, HTTP_400_BAD_REQUEST)


class InvalidEmailError(ValidationError):
    code = ErrorCode.INVALID_EMAIL

    def __init__(self, detail: str = "Invalid email format") -> None:
        super().__init__(detail)


class InvalidURLError(ValidationError):
    code = ErrorCode.INVALID_URL

    def __init__(self, detail: str = "Invalid URL format") -> None:
        super().__init__(detail)


class PasswordTooWeakError(ValidationError):
    code = ErrorCode.PASSWORD_TOO_WEAK

    def __init__(self, detail: str = PASSWORD_REQUIREMENTS) -> None:
        super().__init__(detail)


validation_error_handler = create_exception_handler(logger)


def _serializable(value: Any) -> Any:
    return str(value) if isinstance(value, Exception) else value


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle Pydantic request validation errors with a cleaner response format.

    Args:
        request: The incoming request.
        exc: The RequestValidationError exception.

    Returns:
        ORJSONResponse with formatted validation errors.
    """
    exec_error = cast(RequestValidationError, exc)

    formatted_errors = []
    for error in exec_error.errors():
        formatted_error = {
            "field": ".".join(str(loc) for loc in error.get("loc", [])[1:]),  # Skip 'body'
            "message": error.get("msg", "Invalid value"),
            "type": error.get("type", "validation_error"),
        }
        if "ctx" in error:
            formatted_error["context"] = {k: _serializable(v) for k, v in error["ctx"].items()}
        formatted_errors.append(formatted_error)

    logger.warning(
        f"Validation error for ip: {host(request)} at endpoint {request.url.path}",
        errors=formatted_errors,
    )

    return ORJSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content={
            "detail": "Validation failed",
            "code": ErrorCode.VALIDATION_ERROR,
            "errors": formatted_errors,
        },
    )
