"""Page/limit normalization shared by list endpoints."""

from dataclasses import dataclass
from math import ceil

from app.configs import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT


@dataclass(frozen=True)
class Pagination:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_PAGE_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def normalize_pagination(page: int | None, limit: int | None) -> Pagination:
    """
    Clamp raw page/limit values to safe defaults.

    A page below 1 becomes 1. A limit outside ``1..MAX_PAGE_LIMIT`` falls
    back to ``DEFAULT_PAGE_LIMIT``.

    Examples:
    --------
    >>> normalize_pagination(0, 500)
    Pagination(page=1, limit=20)
    """
    page = page if page and page >= 1 else DEFAULT_PAGE
    if not limit or limit < 1 or limit > MAX_PAGE_LIMIT:
        limit = DEFAULT_PAGE_LIMIT
    return Pagination(page=page, limit=limit)


def total_pages(total: int, limit: int) -> int:
    if limit <= 0:
        return 0
    return ceil(total / limit)
