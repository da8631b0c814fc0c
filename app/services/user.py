"""User profile service."""

from app.errors import DuplicateEntryError, RecordNotFoundError
from app.models import UserDB
from app.repositories import UserRepository
from app.schemas.user import UserResponse, UserUpdate
from app.utils.validators import sanitize_string, validate_nickname, validate_url


class UserService:
    """Read and update the caller's own profile."""

    def __init__(self, user_repo: UserRepository) -> None:
        self.user_repo = user_repo

    async def _get_user(self, user_id: int) -> UserDB:
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise RecordNotFoundError(detail="User not found")
        return user

    async def get_profile(self, user_id: int) -> UserResponse:
        """
        Load a user's profile.

        Raises:
            RecordNotFoundError: If the user does not exist
        """
        return UserResponse.model_validate(await self._get_user(user_id))

    async def update_profile(self, user_id: int, data: UserUpdate) -> UserResponse:
        """
        Update nickname, avatar and bio.

        The nickname is validated and checked for duplicates only when it
        changes. An empty ``avatar_url`` clears the avatar.

        Raises:
            RecordNotFoundError: If the user does not exist
            ValidationError: If the nickname is invalid
            InvalidURLError: If the avatar URL is invalid
            DuplicateEntryError: If the nickname is taken
        """
        user = await self._get_user(user_id)

        if data.nickname is not None:
            nickname = data.nickname.strip()
            if nickname != user.nickname:
                validate_nickname(nickname)
                if await self.user_repo.exists_by_nickname(nickname, exclude_id=user_id):
                    raise DuplicateEntryError(detail="Nickname already exists").with_details(
                        field="nickname",
                    )
                user.nickname = nickname

        if data.avatar_url is not None:
            avatar_url = data.avatar_url.strip()
            if avatar_url:
                validate_url(avatar_url)
            user.avatar_url = avatar_url or None

        if data.bio is not None:
            user.bio = sanitize_string(data.bio) or None

        return UserResponse.model_validate(await self.user_repo.save(user))
