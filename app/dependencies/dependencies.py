# app/dependencies/dependencies.py

"""Request-scoped dependencies: sessions, repositories, services and callers."""

from typing import Annotated

from fastapi import Depends, Query, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_session
from app.errors import InsufficientPermissionError, UserAuthenticationError
from app.managers.view_tracker import ViewTracker, get_view_tracker
from app.models import UserDB
from app.monitoring import get_logger
from app.repositories import (
    CategoryRepository,
    CommentRepository,
    NotificationRepository,
    PostRepository,
    TagRepository,
    UserRepository,
)
from app.services import (
    AdminService,
    AuthService,
    CategoryService,
    CommentService,
    NotificationService,
    PostService,
    TagService,
    UserService,
)
from app.utils.network import client_ip
from app.utils.pagination import Pagination, normalize_pagination

logger = get_logger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)

SessionDep = Annotated[AsyncSession, Depends(get_session)]


# Repositories


def get_user_repository(session: SessionDep) -> UserRepository:
    """
    Resolve the `UserRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    UserRepository
        Repository instance bound to the session.
    """
    return UserRepository(session)


def get_post_repository(session: SessionDep) -> PostRepository:
    return PostRepository(session)


def get_comment_repository(session: SessionDep) -> CommentRepository:
    return CommentRepository(session)


def get_category_repository(session: SessionDep) -> CategoryRepository:
    return CategoryRepository(session)


def get_tag_repository(session: SessionDep) -> TagRepository:
    return TagRepository(session)


def get_notification_repository(session: SessionDep) -> NotificationRepository:
    return NotificationRepository(session)


UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]
PostRepoDep = Annotated[PostRepository, Depends(get_post_repository)]
CommentRepoDep = Annotated[CommentRepository, Depends(get_comment_repository)]
CategoryRepoDep = Annotated[CategoryRepository, Depends(get_category_repository)]
TagRepoDep = Annotated[TagRepository, Depends(get_tag_repository)]
NotificationRepoDep = Annotated[NotificationRepository, Depends(get_notification_repository)]


# Services


def get_auth_service(user_repo: UserRepoDep) -> AuthService:
    return AuthService(user_repo)


def get_user_service(user_repo: UserRepoDep) -> UserService:
    return UserService(user_repo)


def get_notification_service(notification_repo: NotificationRepoDep) -> NotificationService:
    return NotificationService(notification_repo)


NotificationServiceDep = Annotated[NotificationService, Depends(get_notification_service)]


def get_post_service(
    post_repo: PostRepoDep,
    category_repo: CategoryRepoDep,
    tag_repo: TagRepoDep,
    notifications: NotificationServiceDep,
    view_tracker: Annotated[ViewTracker, Depends(get_view_tracker)],
) -> PostService:
    """
    Resolve the `PostService` dependency.

    All repositories share the request's session, so counters, links and
    notifications written by one use case commit together.
    """
    return PostService(post_repo, category_repo, tag_repo, notifications, view_tracker)


def get_comment_service(
    comment_repo: CommentRepoDep,
    post_repo: PostRepoDep,
    notifications: NotificationServiceDep,
) -> CommentService:
    return CommentService(comment_repo, post_repo, notifications)


def get_admin_service(
    user_repo: UserRepoDep,
    post_repo: PostRepoDep,
    comment_repo: CommentRepoDep,
) -> AdminService:
    return AdminService(user_repo, post_repo, comment_repo)


def get_category_service(category_repo: CategoryRepoDep) -> CategoryService:
    return CategoryService(category_repo)


def get_tag_service(tag_repo: TagRepoDep) -> TagService:
    return TagService(tag_repo)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
PostServiceDep = Annotated[PostService, Depends(get_post_service)]
CommentServiceDep = Annotated[CommentService, Depends(get_comment_service)]
AdminServiceDep = Annotated[AdminService, Depends(get_admin_service)]
CategoryServiceDep = Annotated[CategoryService, Depends(get_category_service)]
TagServiceDep = Annotated[TagService, Depends(get_tag_service)]


# Callers


async def get_current_user(
    token: Annotated[str | None, Depends(oauth2_scheme)],
    auth_service: AuthServiceDep,
) -> UserDB:
    """
    Get the authenticated user from the bearer token.

    Parameters
    ----------
    token : str | None
        Bearer token, if any.
    auth_service : AuthService
        Service resolving tokens to users.

    Returns
    -------
    UserDB
        Current authenticated user.

    Raises
    ------
    UserAuthenticationError
        If the token is missing, invalid, expired or its user is gone.
    """
    if not token:
        raise UserAuthenticationError("Missing authorization header")
    return await auth_service.get_user_from_token(token)


async def get_optional_user(
    token: Annotated[str | None, Depends(oauth2_scheme)],
    auth_service: AuthServiceDep,
) -> UserDB | None:
    """Resolve the caller when a valid token is sent; anonymous otherwise."""
    if not token:
        return None
    try:
        return await auth_service.get_user_from_token(token)
    except UserAuthenticationError as e:
        logger.debug(f"Ignoring unusable bearer token on optional route: {e.detail}")
        return None


async def get_admin_user(user: Annotated[UserDB, Depends(get_current_user)]) -> UserDB:
    """
    Require an administrator.

    Raises
    ------
    InsufficientPermissionError
        If the caller is not an admin.
    """
    if not user.is_admin:
        raise InsufficientPermissionError
    return user


UserDBDep = Annotated[UserDB, Depends(get_current_user)]
OptionalUserDep = Annotated[UserDB | None, Depends(get_optional_user)]
AdminUserDep = Annotated[UserDB, Depends(get_admin_user)]


# Request details


def get_pagination(
    page: Annotated[int | None, Query(description="Page number (1-based)")] = None,
    limit: Annotated[int | None, Query(description="Page size (1-100)")] = None,
) -> Pagination:
    """Out of range values fall back to defaults instead of failing the request."""
    return normalize_pagination(page, limit)


def get_client_ip(request: Request) -> str:
    return client_ip(request)


PaginationDep = Annotated[Pagination, Depends(get_pagination)]
ClientIPDep = Annotated[str, Depends(get_client_ip)]
