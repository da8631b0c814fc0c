# tests/services/test_admin_service.py
"""Tests for AdminService."""

from collections.abc import Callable
from unittest.mock import MagicMock

import pytest

from app.errors import ForbiddenError, RecordNotFoundError
from app.models import CommentDB, UserDB
from app.services import AdminService
from app.utils.pagination import Pagination


@pytest.fixture
def admin_service(
    mock_user_repo: MagicMock,
    mock_post_repo: MagicMock,
    mock_comment_repo: MagicMock,
) -> AdminService:
    return AdminService(mock_user_repo, mock_post_repo, mock_comment_repo)


async def test_dashboard(
    admin_service: AdminService,
    mock_user_repo: MagicMock,
    mock_post_repo: MagicMock,
    mock_comment_repo: MagicMock,
) -> None:
    mock_user_repo.count.return_value = 4
    mock_post_repo.count.return_value = 7
    mock_post_repo.count_published.return_value = 5
    mock_comment_repo.count.return_value = 12

    response = await admin_service.dashboard()

    assert response.model_dump() == {
        "total_users": 4,
        "total_posts": 7,
        "published_posts": 5,
        "total_comments": 12,
    }


class TestUsers:
    async def test_list_normalizes_pagination(
        self,
        admin_service: AdminService,
        mock_user_repo: MagicMock,
        sample_user: UserDB,
    ) -> None:
        mock_user_repo.list_paginated.return_value = ([sample_user], 41)

        response = await admin_service.list_users(0, 500)

        mock_user_repo.list_paginated.assert_awaited_once_with(Pagination(page=1, limit=20))
        assert [u.nickname for u in response.users] == ["reader"]
        assert response.pagination.total_pages == 3

    async def test_delete_regular_user(
        self,
        admin_service: AdminService,
        mock_user_repo: MagicMock,
        sample_user: UserDB,
    ) -> None:
        mock_user_repo.get_by_id.return_value = sample_user
        await admin_service.delete_user(2)
        mock_user_repo.delete.assert_awaited_once_with(2)

    async def test_cannot_delete_admin(
        self,
        admin_service: AdminService,
        mock_user_repo: MagicMock,
        admin_user: UserDB,
    ) -> None:
        mock_user_repo.get_by_id.return_value = admin_user

        with pytest.raises(ForbiddenError) as exc_info:
            await admin_service.delete_user(1)

        assert exc_info.value.detail == "cannot delete admin user"
        assert exc_info.value.status_code == 403
        mock_user_repo.delete.assert_not_awaited()

    async def test_delete_missing_user(self, admin_service: AdminService) -> None:
        with pytest.raises(RecordNotFoundError):
            await admin_service.delete_user(99)


class TestComments:
    async def test_list_comments(
        self,
        admin_service: AdminService,
        mock_comment_repo: MagicMock,
        comment_factory: Callable[..., CommentDB],
    ) -> None:
        anonymous = comment_factory(
            id=101,
            user_id=None,
            author_name="Guest",
            author_email="guest@example.com",
        )
        mock_comment_repo.list_paginated.return_value = ([anonymous], 1)

        response = await admin_service.list_comments(2, 10)

        mock_comment_repo.list_paginated.assert_awaited_once_with(Pagination(page=2, limit=10))
        assert response.comments[0].author_email == "guest@example.com"
        assert response.comments[0].user_name is None

    async def test_delete_comment_decrements_count(
        self,
        admin_service: AdminService,
        mock_comment_repo: MagicMock,
        mock_post_repo: MagicMock,
    ) -> None:
        await admin_service.delete_comment(100)
        mock_comment_repo.delete.assert_awaited_once_with(100)
        mock_post_repo.decrement_comment_count.assert_awaited_once_with(10)

    async def test_delete_missing_comment(
        self,
        admin_service: AdminService,
        mock_comment_repo: MagicMock,
        mock_post_repo: MagicMock,
    ) -> None:
        mock_comment_repo.get_by_id.return_value = None
        with pytest.raises(RecordNotFoundError):
            await admin_service.delete_comment(100)
        mock_post_repo.decrement_comment_count.assert_not_awaited()
