"""Authentication request, response and token payload schemas."""

from pydantic import BaseModel, Field

from app.schemas.user import UserResponse


class TokenData(BaseModel):
    """Validated claims extracted from a JWT."""

    user_id: int
    email: str | None = None
    is_admin: bool = False
    jti: str
    token_type: str


class RegisterRequest(BaseModel):
    """Registration request body."""

    email: str = Field(..., max_length=254, examples=["writer@example.com"])
    password: str = Field(..., min_length=8, max_length=128, examples=["S3cure!pass"])
    nickname: str = Field(..., min_length=2, max_length=20, examples=["writer"])


class LoginRequest(BaseModel):
    """Login request body."""

    email: str = Field(..., max_length=254, examples=["writer@example.com"])
    password: str = Field(..., min_length=1, max_length=128)


class RefreshTokenRequest(BaseModel):
    """Refresh request body."""

    refresh_token: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """New access token issued from a refresh token."""

    access_token: str
    token_type: str = "bearer"


class AuthResponse(BaseModel):
    """Tokens and profile returned after registration or login."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: UserResponse
