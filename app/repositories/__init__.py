"""Repository layer for database operations."""

from app.repositories.base import BaseRepository
from app.repositories.comment import CommentRepository
from app.repositories.notification import NotificationRepository
from app.repositories.post import PostRepository
from app.repositories.taxonomy import CategoryRepository, TagRepository
from app.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "CategoryRepository",
    "CommentRepository",
    "NotificationRepository",
    "PostRepository",
    "TagRepository",
    "UserRepository",
]
