from app.services.admin import AdminService
from app.services.auth import AuthService
from app.services.comment import CommentService
from app.services.notification import NotificationService
from app.services.post import PostService
from app.services.taxonomy import CategoryService, TagService
from app.services.user import UserService

__all__ = [
    "AdminService",
    "AuthService",
    "CategoryService",
    "CommentService",
    "NotificationService",
    "PostService",
    "TagService",
    "UserService",
]
