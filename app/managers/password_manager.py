"""
Password hashing module using bcrypt with passlib's CryptContext.

Hashing is CPU bound, so the module-level coroutines run the hasher in a
thread pool and retry transient backend failures.
"""

from asyncio import get_event_loop
from concurrent.futures import ThreadPoolExecutor

from passlib.context import CryptContext
from passlib.exc import InternalBackendError

from app.configs import settings
from app.decorators.with_retry import with_retry
from app.errors import PasswordHashingError
from app.monitoring import get_logger

executor = ThreadPoolExecutor(max_workers=4)

logger = get_logger(__name__)


class PasswordHasher:
    """
    A password hashing and verification manager using bcrypt.

    This class wraps passlib's CryptContext to provide:
    - Password hashing with a configurable bcrypt cost
    - Password verification
    - Rehash detection when the configured cost changes
    """

    def __init__(self, rounds: int = settings.BCRYPT_ROUNDS) -> None:
        """
        Initialize the PasswordHasher.

        Args:
            rounds: bcrypt cost factor (log2 of the iteration count)
        """
        self.rounds = rounds
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )
        logger.info(f"PasswordHasher initialized with bcrypt cost {rounds}")

    def hash(self, password: str) -> str:
        """
        Hash a plaintext password.

        Args:
            password: The plaintext password to hash

        Returns:
            str: The bcrypt hash

        Raises:
            ValueError: If password is empty
            PasswordHashingError: If hashing fails

        Example:
            >>> hasher = PasswordHasher()
            >>> hasher.hash("s3cret!pw").startswith("$2b$")
            True
        """
        if not password:
            msg = "Password cannot be empty"
            raise ValueError(msg)

        try:
            return self.pwd_context.hash(password)
        except (ValueError, InternalBackendError, UnicodeError) as e:
            logger.exception("Error hashing password")
            mssg = "Failed to hash password"
            raise PasswordHashingError(mssg) from e

    def verify(self, password: str, hashed_password: str | None) -> bool:
        """
        Verify a plaintext password against a hash.

        A missing hash still burns one verification so that unknown accounts
        take as long as wrong passwords.

        Returns:
            bool: True if password matches, False otherwise
        """
        if not hashed_password:
            self.pwd_context.dummy_verify()
            return False

        try:
            return self.pwd_context.verify(password, hashed_password)
        except ValueError:
            logger.exception("Stored hash is corrupted or invalid format")
            return False

    def needs_rehash(self, hashed_password: str) -> bool:
        """Whether the hash was produced with outdated parameters."""
        try:
            return self.pwd_context.needs_update(hashed_password)
        except ValueError:
            logger.exception("Error checking hash parameters")
            return False


_default_hasher = PasswordHasher()


def get_password_hasher() -> PasswordHasher:
    """Return the shared password hasher instance."""
    return _default_hasher


@with_retry(base_delay=1, max_delay=10, exec_retry=PasswordHashingError)
async def hash_password(password: str) -> str:
    """
    Hash a password using the default hasher off the event loop.

    Example:
        >>> hashed = await hash_password("my_password1!")
    """
    return await get_event_loop().run_in_executor(
        executor,
        get_password_hasher().hash,
        password,
    )


async def verify_password(password: str, hashed_password: str | None) -> bool:
    """
    Verify a password using the default hasher off the event loop.

    Example:
        >>> is_valid = await verify_password("my_password1!", hashed)
    """
    return await get_event_loop().run_in_executor(
        executor,
        get_password_hasher().verify,
        password,
        hashed_password,
    )
