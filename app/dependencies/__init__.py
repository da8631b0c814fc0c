# app/dependencies/__init__.py

from app.dependencies.dependencies import (
    AdminServiceDep,
    AdminUserDep,
    AuthServiceDep,
    CategoryServiceDep,
    ClientIPDep,
    CommentServiceDep,
    NotificationServiceDep,
    OptionalUserDep,
    PaginationDep,
    PostServiceDep,
    TagServiceDep,
    UserDBDep,
    UserServiceDep,
    get_admin_service,
    get_admin_user,
    get_auth_service,
    get_category_service,
    get_comment_service,
    get_current_user,
    get_notification_service,
    get_optional_user,
    get_post_service,
    get_tag_service,
    get_user_service,
)

__all__ = [
    "AdminServiceDep",
    "AdminUserDep",
    "AuthServiceDep",
    "CategoryServiceDep",
    "ClientIPDep",
    "CommentServiceDep",
    "NotificationServiceDep",
    "OptionalUserDep",
    "PaginationDep",
    "PostServiceDep",
    "TagServiceDep",
    "UserDBDep",
    "UserServiceDep",
    "get_admin_service",
    "get_admin_user",
    "get_auth_service",
    "get_category_service",
    "get_comment_service",
    "get_current_user",
    "get_notification_service",
    "get_optional_user",
    "get_post_service",
    "get_tag_service",
    "get_user_service",
]
