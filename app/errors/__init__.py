from app.errors.auth import (
    ExpiredTokenError,
    ForbiddenError,
    InsufficientPermissionError,
    InvalidCredentialsError,
    InvalidTokenError,
    UserAuthenticationError,
    auth_exception_handler,
)
from app.errors.base import BaseAppError, ErrorCode, create_exception_handler
from app.errors.database import (
    ConflictError,
    DatabaseConnectionError,
    DatabaseError,
    DuplicateEntryError,
    RecordNotFoundError,
    database_exception_handler,
)
from app.errors.password_hasher import PasswordHashingError, password_hashing_exception_handler
from app.errors.rate_limit import RateLimitExceededError, rate_limit_exception_handler
from app.errors.validation import (
    InvalidEmailError,
    InvalidURLError,
    PasswordTooWeakError,
    ValidationError,
    validation_error_handler,
    validation_exception_handler,
)

__all__ = [
    "BaseAppError",
    "ConflictError",
    "DatabaseConnectionError",
    "DatabaseError",
    "DuplicateEntryError",
    "ErrorCode",
    "ExpiredTokenError",
    "ForbiddenError",
    "InsufficientPermissionError",
    "InvalidCredentialsError",
    "InvalidEmailError",
    "InvalidTokenError",
    "InvalidURLError",
    "PasswordHashingError",
    "PasswordTooWeakError",
    "RateLimitExceededError",
    "RecordNotFoundError",
    "UserAuthenticationError",
    "ValidationError",
    "auth_exception_handler",
    "create_exception_handler",
    "database_exception_handler",
    "password_hashing_exception_handler",
    "rate_limit_exception_handler",
    "validation_error_handler",
    "validation_exception_handler",
]
