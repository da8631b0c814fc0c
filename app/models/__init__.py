"""Database models for the application."""

from app.models.comment import CommentDB
from app.models.interaction import BookmarkDB, LikeDB
from app.models.notification import NotificationDB, NotificationType
from app.models.post import PostDB, PostStatus, PostTagLink, ViewLogDB
from app.models.taxonomy import CategoryDB, TagDB
from app.models.user import UserDB

__all__ = [
    "BookmarkDB",
    "CategoryDB",
    "CommentDB",
    "LikeDB",
    "NotificationDB",
    "NotificationType",
    "PostDB",
    "PostStatus",
    "PostTagLink",
    "TagDB",
    "UserDB",
    "ViewLogDB",
]
