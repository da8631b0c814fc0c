# tests/utils/test_pagination.py
"""Tests for app/utils/pagination.py and the pagination response schema."""

import pytest

from app.schemas.common import PaginationResponse
from app.utils.pagination import Pagination, normalize_pagination, total_pages


@pytest.mark.parametrize(
    ("page", "limit", "expected"),
    [
        (None, None, Pagination(page=1, limit=20)),
        (0, 500, Pagination(page=1, limit=20)),
        (-3, 0, Pagination(page=1, limit=20)),
        (3, 50, Pagination(page=3, limit=50)),
        (2, 100, Pagination(page=2, limit=100)),
        (2, 101, Pagination(page=2, limit=20)),
    ],
)
def test_normalize_pagination(page: int | None, limit: int | None, expected: Pagination) -> None:
    """Out of range values fall back to defaults."""
    assert normalize_pagination(page, limit) == expected


def test_offset() -> None:
    assert Pagination(page=3, limit=10).offset == 20


@pytest.mark.parametrize(
    ("total", "limit", "expected"),
    [(0, 20, 0), (1, 20, 1), (40, 20, 2), (41, 20, 3), (10, 0, 0)],
)
def test_total_pages(total: int, limit: int, expected: int) -> None:
    assert total_pages(total, limit) == expected


def test_pagination_response_build() -> None:
    response = PaginationResponse.build(page=2, limit=10, total=25)
    assert response.model_dump() == {"page": 2, "limit": 10, "total": 25, "total_pages": 3}
