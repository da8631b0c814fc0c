from app.configs.settings import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_LIMIT,
    EXCERPT_LENGTH,
    MAX_PAGE_LIMIT,
    MAX_TAGS_PER_POST,
    Settings,
    settings,
)

__all__ = [
    "DEFAULT_PAGE",
    "DEFAULT_PAGE_LIMIT",
    "EXCERPT_LENGTH",
    "MAX_PAGE_LIMIT",
    "MAX_TAGS_PER_POST",
    "Settings",
    "settings",
]
