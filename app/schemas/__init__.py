from app.schemas.admin import (
    AdminCommentListResponse,
    AdminCommentResponse,
    AdminUserListResponse,
    DashboardResponse,
)
from app.schemas.auth import (
    AuthResponse,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    TokenData,
    TokenResponse,
)
from app.schemas.comment import (
    CommentCreate,
    CommentListResponse,
    CommentResponse,
    CommentUpdate,
)
from app.schemas.common import HealthResponse, MessageResponse, PaginationResponse
from app.schemas.notification import (
    MarkAllReadResponse,
    NotificationListResponse,
    NotificationResponse,
)
from app.schemas.post import (
    InteractionResponse,
    PostCreate,
    PostListResponse,
    PostResponse,
    PostSearchResponse,
    PostSearchResult,
    PostUpdate,
    ViewResponse,
)
from app.schemas.taxonomy import (
    CategoryCreate,
    CategoryListResponse,
    CategoryResponse,
    CategoryUpdate,
    TagCreate,
    TagListResponse,
    TagResponse,
    TagUpdate,
)
from app.schemas.user import AuthorResponse, UserResponse, UserUpdate

__all__ = [
    "AdminCommentListResponse",
    "AdminCommentResponse",
    "AdminUserListResponse",
    "AuthResponse",
    "AuthorResponse",
    "CategoryCreate",
    "CategoryListResponse",
    "CategoryResponse",
    "CategoryUpdate",
    "CommentCreate",
    "CommentListResponse",
    "CommentResponse",
    "CommentUpdate",
    "DashboardResponse",
    "HealthResponse",
    "InteractionResponse",
    "LoginRequest",
    "MarkAllReadResponse",
    "MessageResponse",
    "NotificationListResponse",
    "NotificationResponse",
    "PaginationResponse",
    "PostCreate",
    "PostListResponse",
    "PostResponse",
    "PostSearchResponse",
    "PostSearchResult",
    "PostUpdate",
    "RefreshTokenRequest",
    "RegisterRequest",
    "TagCreate",
    "TagListResponse",
    "TagResponse",
    "TagUpdate",
    "TokenData",
    "TokenResponse",
    "UserResponse",
    "UserUpdate",
    "ViewResponse",
]
