# tests/services/test_comment_service.py
"""Tests for CommentService."""

from collections.abc import Callable
from unittest.mock import MagicMock

import pytest

from app.errors import (
    DuplicateEntryError,
    ForbiddenError,
    InvalidEmailError,
    RecordNotFoundError,
    ValidationError,
)
from app.managers.password_manager import hash_password, verify_password
from app.models import CommentDB, NotificationType, PostDB, PostStatus, UserDB
from app.schemas.comment import CommentCreate, CommentUpdate
from app.services import CommentService, NotificationService
from app.utils.helpers import utc_now
from app.utils.pagination import Pagination


@pytest.fixture
def comment_service(
    mock_comment_repo: MagicMock,
    mock_post_repo: MagicMock,
    mock_notifications: MagicMock,
) -> CommentService:
    return CommentService(mock_comment_repo, mock_post_repo, mock_notifications)


@pytest.fixture
def other_user() -> UserDB:
    return UserDB(
        id=3,
        email="other@example.com",
        password="x",
        nickname="other",
        created_at=utc_now(),
        updated_at=utc_now(),
    )


@pytest.fixture
async def anonymous_comment(comment_factory: Callable[..., CommentDB]) -> CommentDB:
    return comment_factory(
        user_id=None,
        author_name="Guest",
        author_password=await hash_password("pass1234"),
    )


class TestCreate:
    """Comments and replies."""

    async def test_user_comment_notifies_post_author(
        self,
        comment_service: CommentService,
        mock_comment_repo: MagicMock,
        mock_post_repo: MagicMock,
        mock_notifications: MagicMock,
        sample_user: UserDB,
    ) -> None:
        response = await comment_service.create_comment(
            10,
            CommentCreate(content="<b>Great</b> post"),
            sample_user,
        )

        created: CommentDB = mock_comment_repo.add.await_args.args[0]
        assert created.content == "Great post"
        assert created.user_id == 2
        assert created.author_password is None
        assert response.id == 100
        mock_post_repo.increment_comment_count.assert_awaited_once_with(10)

        kwargs = mock_notifications.notify.await_args.kwargs
        assert kwargs["recipient_id"] == 1
        assert kwargs["type"] == NotificationType.POST_COMMENT
        assert kwargs["link"] == "/posts/10#comment-100"

    async def test_anonymous_comment_hashes_password(
        self,
        comment_service: CommentService,
        mock_comment_repo: MagicMock,
        mock_notifications: MagicMock,
    ) -> None:
        await comment_service.create_comment(
            10,
            CommentCreate(
                content="Hello",
                author_name="  Guest  ",
                author_email="Guest@Example.com",
                author_password="pass1234",
            ),
        )

        created: CommentDB = mock_comment_repo.add.await_args.args[0]
        assert created.user_id is None
        assert created.author_name == "Guest"
        assert created.author_email == "guest@example.com"
        assert created.author_password != "pass1234"
        assert await verify_password("pass1234", created.author_password)
        assert mock_notifications.notify.await_args.kwargs["actor"] is None

    @pytest.mark.parametrize(
        "data",
        [
            CommentCreate(content="Hello", author_password="pass1234"),
            CommentCreate(content="Hello", author_name="Guest"),
            CommentCreate(content="Hello", author_name="   ", author_password="pass1234"),
        ],
    )
    async def test_anonymous_requires_name_and_password(
        self,
        comment_service: CommentService,
        mock_comment_repo: MagicMock,
        data: CommentCreate,
    ) -> None:
        with pytest.raises(ValidationError, match="author_name and author_password"):
            await comment_service.create_comment(10, data)
        mock_comment_repo.add.assert_not_awaited()

    async def test_anonymous_invalid_email(self, comment_service: CommentService) -> None:
        with pytest.raises(InvalidEmailError):
            await comment_service.create_comment(
                10,
                CommentCreate(
                    content="Hi",
                    author_name="Guest",
                    author_email="nope",
                    author_password="pass1234",
                ),
            )

    async def test_markup_only_content_is_empty(
        self,
        comment_service: CommentService,
        sample_user: UserDB,
    ) -> None:
        with pytest.raises(ValidationError, match="empty"):
            await comment_service.create_comment(10, CommentCreate(content="<p> </p>"), sample_user)

    async def test_hidden_post(
        self,
        comment_service: CommentService,
        mock_post_repo: MagicMock,
        post_factory: Callable[..., PostDB],
        sample_user: UserDB,
    ) -> None:
        mock_post_repo.get_by_id.return_value = post_factory(status=PostStatus.DRAFT)
        with pytest.raises(RecordNotFoundError):
            await comment_service.create_comment(10, CommentCreate(content="Hi"), sample_user)

    async def test_reply_notifies_parent_and_post_author(
        self,
        comment_service: CommentService,
        mock_comment_repo: MagicMock,
        mock_notifications: MagicMock,
        comment_factory: Callable[..., CommentDB],
        sample_user: UserDB,
    ) -> None:
        mock_comment_repo.get_by_id.return_value = comment_factory(id=50, user_id=3)

        await comment_service.create_reply(50, CommentCreate(content="Agreed"), sample_user)

        created: CommentDB = mock_comment_repo.add.await_args.args[0]
        assert created.parent_id == 50
        assert created.post_id == 10

        calls = [call.kwargs for call in mock_notifications.notify.await_args_list]
        assert [(c["recipient_id"], c["type"]) for c in calls] == [
            (3, NotificationType.COMMENT_REPLY),
            (1, NotificationType.POST_COMMENT),
        ]

    async def test_reply_to_post_author_notifies_once(
        self,
        comment_service: CommentService,
        mock_comment_repo: MagicMock,
        mock_notifications: MagicMock,
        comment_factory: Callable[..., CommentDB],
        sample_user: UserDB,
    ) -> None:
        mock_comment_repo.get_by_id.return_value = comment_factory(id=50, user_id=1)

        await comment_service.create_reply(50, CommentCreate(content="Thanks"), sample_user)

        assert mock_notifications.notify.await_count == 1
        assert mock_notifications.notify.await_args.kwargs["type"] == NotificationType.COMMENT_REPLY


class TestModify:
    """Edit and delete authorization."""

    async def test_owner_can_edit(
        self,
        comment_service: CommentService,
        mock_comment_repo: MagicMock,
        sample_user: UserDB,
    ) -> None:
        response = await comment_service.update_comment(
            100,
            CommentUpdate(content="<i>Edited</i>"),
            sample_user,
        )
        assert response.content == "Edited"
        assert response.is_edited is True
        mock_comment_repo.save.assert_awaited_once()

    async def test_other_user_cannot_edit(
        self,
        comment_service: CommentService,
        mock_comment_repo: MagicMock,
        other_user: UserDB,
    ) -> None:
        with pytest.raises(ForbiddenError):
            await comment_service.update_comment(100, CommentUpdate(content="Mine now"), other_user)
        mock_comment_repo.save.assert_not_awaited()

    async def test_admin_can_delete_any_comment(
        self,
        comment_service: CommentService,
        mock_comment_repo: MagicMock,
        mock_post_repo: MagicMock,
        admin_user: UserDB,
    ) -> None:
        await comment_service.delete_comment(100, admin_user)
        mock_comment_repo.delete.assert_awaited_once_with(100)
        mock_post_repo.decrement_comment_count.assert_awaited_once_with(10)

    async def test_anonymous_delete_with_password(
        self,
        comment_service: CommentService,
        mock_comment_repo: MagicMock,
        anonymous_comment: CommentDB,
    ) -> None:
        mock_comment_repo.get_by_id.return_value = anonymous_comment
        await comment_service.delete_comment(100, None, "pass1234")
        mock_comment_repo.delete.assert_awaited_once_with(100)

    @pytest.mark.parametrize("password", [None, "", "wrong-pass"])
    async def test_anonymous_delete_with_bad_password(
        self,
        comment_service: CommentService,
        mock_comment_repo: MagicMock,
        anonymous_comment: CommentDB,
        password: str | None,
    ) -> None:
        mock_comment_repo.get_by_id.return_value = anonymous_comment
        with pytest.raises(ForbiddenError):
            await comment_service.delete_comment(100, None, password)
        mock_comment_repo.delete.assert_not_awaited()

    async def test_password_does_not_unlock_user_comments(
        self,
        comment_service: CommentService,
    ) -> None:
        with pytest.raises(ForbiddenError):
            await comment_service.delete_comment(100, None, "pass1234")

    async def test_anonymous_edit_with_password(
        self,
        comment_service: CommentService,
        mock_comment_repo: MagicMock,
        anonymous_comment: CommentDB,
    ) -> None:
        mock_comment_repo.get_by_id.return_value = anonymous_comment
        response = await comment_service.update_comment(
            100,
            CommentUpdate(content="Fixed typo", author_password="pass1234"),
        )
        assert response.content == "Fixed typo"
        assert response.is_anonymous is True

    async def test_missing_comment(
        self,
        comment_service: CommentService,
        mock_comment_repo: MagicMock,
        admin_user: UserDB,
    ) -> None:
        mock_comment_repo.get_by_id.return_value = None
        with pytest.raises(RecordNotFoundError):
            await comment_service.delete_comment(100, admin_user)


class TestListingAndLikes:
    """Listing with like state, and comment likes."""

    async def test_list_marks_liked_comments(
        self,
        comment_service: CommentService,
        mock_comment_repo: MagicMock,
        comment_factory: Callable[..., CommentDB],
        sample_user: UserDB,
    ) -> None:
        mock_comment_repo.list_by_post.return_value = (
            [comment_factory(id=100), comment_factory(id=101)],
            2,
        )
        mock_comment_repo.liked_ids.return_value = {101}

        response = await comment_service.list_by_post(10, Pagination(), sample_user)

        assert [c.is_liked for c in response.comments] == [False, True]
        mock_comment_repo.liked_ids.assert_awaited_once_with(2, [100, 101])

    async def test_anonymous_listing_skips_like_lookup(
        self,
        comment_service: CommentService,
        mock_comment_repo: MagicMock,
    ) -> None:
        await comment_service.list_by_post(10, Pagination())
        mock_comment_repo.liked_ids.assert_not_awaited()

    async def test_like_twice(
        self,
        comment_service: CommentService,
        mock_comment_repo: MagicMock,
        sample_user: UserDB,
    ) -> None:
        mock_comment_repo.has_liked.return_value = True
        with pytest.raises(DuplicateEntryError):
            await comment_service.like_comment(100, sample_user)

    async def test_liking_own_comment_stores_no_notification(
        self,
        mock_comment_repo: MagicMock,
        mock_post_repo: MagicMock,
        mock_notification_repo: MagicMock,
        notification_service: NotificationService,
        sample_user: UserDB,
    ) -> None:
        service = CommentService(mock_comment_repo, mock_post_repo, notification_service)

        response = await service.like_comment(100, sample_user)

        assert response.active is True
        mock_comment_repo.like.assert_awaited_once_with(2, 100)
        mock_notification_repo.add.assert_not_awaited()

    async def test_unlike_without_like(
        self,
        comment_service: CommentService,
        mock_comment_repo: MagicMock,
        sample_user: UserDB,
    ) -> None:
        mock_comment_repo.unlike.return_value = False
        with pytest.raises(RecordNotFoundError, match="Like not found"):
            await comment_service.unlike_comment(100, sample_user)
