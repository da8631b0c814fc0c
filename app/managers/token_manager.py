"""Token manager for issuing and validating access and refresh JWTs."""

from datetime import UTC, datetime, timedelta
from typing import Literal
from uuid import uuid4

from jose import ExpiredSignatureError, JWTError, jwt

from app.configs import settings
from app.errors import ExpiredTokenError, InvalidTokenError
from app.schemas.auth import TokenData

TokenType = Literal["access", "refresh"]


def _secret_for(token_type: TokenType) -> str:
    return settings.JWT_SECRET if token_type == "access" else settings.JWT_REFRESH_SECRET


def create_access_token(
    user_id: int,
    email: str,
    *,
    is_admin: bool = False,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a short lived access token.

    Args:
        user_id: User primary key
        email: User email
        is_admin: Whether the user has admin rights
        expires_delta: Optional expiration time delta

    Returns:
        str: Encoded JWT access token
    """
    now = datetime.now(UTC)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))

    to_encode = {
        "sub": str(user_id),
        "user_id": user_id,
        "email": email,
        "is_admin": is_admin,
        "jti": str(uuid4()),
        "iat": now,
        "exp": expire,
        "iss": settings.JWT_ISSUER,
        "type": "access",
    }
    return jwt.encode(to_encode, _secret_for("access"), algorithm=settings.JWT_ALGORITHM)


def create_refresh_token(
    user_id: int,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a long lived refresh token signed with the refresh secret.

    Args:
        user_id: User primary key
        expires_delta: Optional expiration time delta

    Returns:
        str: Encoded JWT refresh token
    """
    now = datetime.now(UTC)
    expire = now + (expires_delta or timedelta(hours=settings.REFRESH_TOKEN_EXPIRE_HOURS))

    to_encode = {
        "sub": str(user_id),
        "user_id": user_id,
        "jti": str(uuid4()),
        "iat": now,
        "exp": expire,
        "iss": settings.JWT_ISSUER,
        "type": "refresh",
    }
    return jwt.encode(to_encode, _secret_for("refresh"), algorithm=settings.JWT_ALGORITHM)


def _decode_token(token: str, expected_type: TokenType) -> TokenData:
    """
    Decode and validate a JWT token.

    Args:
        token: JWT token string
        expected_type: Expected token type ('access' or 'refresh')

    Returns:
        TokenData: Decoded claims

    Raises:
        ExpiredTokenError: If the token is past its expiry
        InvalidTokenError: For any other validation failure
    """
    try:
        payload = jwt.decode(
            token,
            _secret_for(expected_type),
            algorithms=[settings.JWT_ALGORITHM],
            issuer=settings.JWT_ISSUER,
        )
    except ExpiredSignatureError as e:
        raise ExpiredTokenError from e
    except JWTError as e:
        raise InvalidTokenError from e

    user_id = payload.get("user_id")
    jti = payload.get("jti")
    token_type = payload.get("type")

    if not isinstance(user_id, int) or not jti or token_type != expected_type:
        raise InvalidTokenError

    return TokenData(
        user_id=user_id,
        email=payload.get("email"),
        is_admin=bool(payload.get("is_admin", False)),
        jti=jti,
        token_type=token_type,
    )


def decode_access_token(token: str) -> TokenData:
    """Decode and validate an access token."""
    return _decode_token(token, "access")


def decode_refresh_token(token: str) -> TokenData:
    """Decode and validate a refresh token."""
    return _decode_token(token, "refresh")
