# app/routes/auth.py

"""
Authentication Routes.

Registration, login, token refresh and the caller's own profile.

Summary
-------
Endpoints include:
  - Register
  - Login
  - Refresh access token
  - Logout
  - Get / update current user

Tokens
------
Login and registration return an access token (short lived, signed with
``JWT_SECRET``) and a refresh token (long lived, signed with
``JWT_REFRESH_SECRET``). Send the access token as ``Authorization: Bearer``.
"""

from fastapi import APIRouter
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from app.dependencies import AuthServiceDep, UserDBDep, UserServiceDep
from app.schemas.auth import (
    AuthResponse,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    TokenResponse,
)
from app.schemas.common import MessageResponse
from app.schemas.user import UserResponse, UserUpdate

router = APIRouter(prefix="/auth", tags=["🔐 Auth"])

UNAUTHORIZED_EXAMPLE = {
    "description": "Unauthorized",
    "content": {
        "application/json": {
            "example": {"detail": "Invalid email or password", "code": "UNAUTHORIZED"},
        },
    },
}


@router.post(
    "/register",
    response_class=ORJSONResponse,
    response_model=AuthResponse,
    status_code=HTTP_201_CREATED,
    summary="Register a new user",
    description="Create an account and receive an access and a refresh token.",
    responses={
        400: {
            "description": "Invalid email, weak password or invalid nickname",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "Invalid email format",
                        "code": "INVALID_EMAIL",
                    },
                },
            },
        },
        409: {
            "description": "Email or nickname taken",
            "content": {
                "application/json": {
                    "example": {"detail": "Email already exists", "code": "ALREADY_EXISTS"},
                },
            },
        },
    },
    operation_id="auth_register",
)
async def register(data: RegisterRequest, auth_service: AuthServiceDep) -> AuthResponse:
    return await auth_service.register(data)


@router.post(
    "/login",
    response_class=ORJSONResponse,
    response_model=AuthResponse,
    summary="Login",
    description="Authenticate with email and password.",
    responses={401: UNAUTHORIZED_EXAMPLE},
    operation_id="auth_login",
)
async def login(data: LoginRequest, auth_service: AuthServiceDep) -> AuthResponse:
    return await auth_service.login(data)


@router.post(
    "/refresh",
    response_class=ORJSONResponse,
    response_model=TokenResponse,
    summary="Refresh access token",
    description="Exchange a refresh token for a new access token.",
    responses={401: UNAUTHORIZED_EXAMPLE},
    operation_id="auth_refresh",
)
async def refresh(data: RefreshTokenRequest, auth_service: AuthServiceDep) -> TokenResponse:
    return await auth_service.refresh(data.refresh_token)


@router.post(
    "/logout",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Logout",
    description="Tokens are stateless; the client is expected to discard them.",
    operation_id="auth_logout",
)
async def logout(user: UserDBDep, auth_service: AuthServiceDep) -> MessageResponse:
    return auth_service.logout()


@router.get(
    "/me",
    response_class=ORJSONResponse,
    response_model=UserResponse,
    summary="Get current user",
    responses={401: UNAUTHORIZED_EXAMPLE},
    operation_id="auth_me",
)
async def get_me(user: UserDBDep, user_service: UserServiceDep) -> UserResponse:
    return await user_service.get_profile(user.id or 0)


@router.put(
    "/me",
    response_class=ORJSONResponse,
    response_model=UserResponse,
    summary="Update current user",
    description="Change nickname, avatar URL or bio. Omitted fields are left as they are.",
    responses={401: UNAUTHORIZED_EXAMPLE},
    operation_id="auth_update_me",
)
async def update_me(
    data: UserUpdate,
    user: UserDBDep,
    user_service: UserServiceDep,
) -> UserResponse:
    return await user_service.update_profile(user.id or 0, data)
