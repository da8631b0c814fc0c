"""Authentication service: registration, login and token exchange."""

from app.errors import (
    DatabaseError,
    DuplicateEntryError,
    InvalidCredentialsError,
    PasswordHashingError,
    UserAuthenticationError,
)
from app.managers.password_manager import get_password_hasher, hash_password, verify_password
from app.managers.token_manager import (
    create_access_token,
    create_refresh_token,
    decode_access_token,
    decode_refresh_token,
)
from app.models import UserDB
from app.monitoring import get_logger
from app.repositories import UserRepository
from app.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, TokenResponse
from app.schemas.common import MessageResponse
from app.schemas.user import UserResponse
from app.utils.validators import validate_email, validate_nickname, validate_password

logger = get_logger(__name__)


class AuthService:
    """Service for handling user authentication."""

    def __init__(self, user_repo: UserRepository) -> None:
        """
        Initialize the auth service.

        Args:
            user_repo: User repository for database operations
        """
        self.user_repo = user_repo

    def create_tokens_for_user(self, user: UserDB) -> AuthResponse:
        """
        Issue an access and a refresh token for a user.

        Args:
            user: User entity

        Returns:
            AuthResponse: Token pair plus the user's profile
        """
        if user.id is None:
            msg = "Cannot issue tokens for an unsaved user"
            raise ValueError(msg)

        return AuthResponse(
            access_token=create_access_token(user.id, user.email, is_admin=user.is_admin),
            refresh_token=create_refresh_token(user.id),
            user=UserResponse.model_validate(user),
        )

    async def register(self, data: RegisterRequest) -> AuthResponse:
        """
        Register a new user account.

        Args:
            data: Registration request

        Returns:
            AuthResponse: Tokens and the created user

        Raises:
            InvalidEmailError: If the email is malformed
            PasswordTooWeakError: If the password misses a character class
            ValidationError: If the nickname is invalid
            DuplicateEntryError: If the email or nickname is taken
        """
        email = data.email.strip().lower()
        nickname = data.nickname.strip()

        validate_email(email)
        validate_password(data.password)
        validate_nickname(nickname)

        if await self.user_repo.exists_by_email(email):
            raise DuplicateEntryError(detail="Email already exists").with_details(field="email")
        if await self.user_repo.exists_by_nickname(nickname):
            raise DuplicateEntryError(detail="Nickname already exists").with_details(
                field="nickname",
            )

        user = UserDB(
            email=email,
            password=await hash_password(data.password),
            nickname=nickname,
            is_admin=False,
        )
        user = await self.user_repo.add(user)
        logger.info(f"Registered user {user.id}")
        return self.create_tokens_for_user(user)

    async def authenticate_user(self, email: str, password: str) -> UserDB:
        """
        Check an email/password pair.

        Unknown emails still pay for one bcrypt verification.

        Raises:
            InvalidEmailError: If the email is malformed
            InvalidCredentialsError: If authentication fails
        """
        email = email.strip().lower()
        validate_email(email)

        user = await self.user_repo.get_by_email(email)
        if not await verify_password(password, user.password if user else None) or not user:
            raise InvalidCredentialsError
        return user

    async def login(self, data: LoginRequest) -> AuthResponse:
        """
        Authenticate and issue tokens.

        A failure to record ``last_login_at`` or to upgrade an outdated hash
        is logged and does not fail the login.
        """
        user = await self.authenticate_user(data.email, data.password)
        # A failed flush rolls the session back and expires `user`
        issued = self.create_tokens_for_user(user)

        try:
            if get_password_hasher().needs_rehash(user.password):
                user.password = await hash_password(data.password)
            user = await self.user_repo.update_last_login(user)
        except (DatabaseError, PasswordHashingError):
            logger.warning(f"Failed to update last login for user {issued.user.id}", exc_info=True)
            return issued

        return issued.model_copy(update={"user": UserResponse.model_validate(user)})

    async def refresh(self, refresh_token: str) -> TokenResponse:
        """
        Exchange a refresh token for a new access token.

        Raises:
            InvalidTokenError: If the refresh token is invalid
            ExpiredTokenError: If the refresh token is expired
            UserAuthenticationError: If the user no longer exists
        """
        token_data = decode_refresh_token(refresh_token)

        user = await self.user_repo.get_by_id(token_data.user_id)
        if not user or user.id is None:
            raise UserAuthenticationError("User not found")

        return TokenResponse(
            access_token=create_access_token(user.id, user.email, is_admin=user.is_admin),
        )

    @staticmethod
    def logout() -> MessageResponse:
        """Tokens are stateless; the client discards them."""
        return MessageResponse(message="Logged out successfully")

    async def get_user_from_token(self, token: str) -> UserDB:
        """
        Resolve the user behind an access token.

        Raises:
            InvalidTokenError: If the token is invalid
            ExpiredTokenError: If the token is expired
            UserAuthenticationError: If the user was deleted
        """
        token_data = decode_access_token(token)
        user = await self.user_repo.get_by_id(token_data.user_id)
        if not user:
            raise UserAuthenticationError("User not found")
        return user
