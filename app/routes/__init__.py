from app.routes.admin import router as admin_router
from app.routes.auth import router as auth_router
from app.routes.comments import router as comments_router
from app.routes.notifications import router as notifications_router
from app.routes.posts import router as posts_router
from app.routes.taxonomy import router as taxonomy_router

__all__ = [
    "admin_router",
    "auth_router",
    "comments_router",
    "notifications_router",
    "posts_router",
    "taxonomy_router",
]
