"""In-memory TTL cache with lazy expiration and a background sweep."""

from asyncio import CancelledError, Task, create_task
from asyncio import sleep as asyncio_sleep
from collections.abc import Callable
from contextlib import suppress
from threading import Lock
from time import monotonic
from typing import Any

from app.monitoring import get_logger

logger = get_logger(__name__)


class MemoryClient:
    """
    A thread-safe in-memory key/value cache with absolute expirations.

    Features:
        - Lazy expiration on ``get``/``exists``
        - Active expiration via background cleanup task
        - Injectable clock for deterministic tests
    """

    DEFAULT_CLEANUP_INTERVAL: int = 300  # seconds

    def __init__(
        self,
        cleanup_interval: float = DEFAULT_CLEANUP_INTERVAL,
        clock: Callable[[], float] = monotonic,
    ) -> None:
        self._cache: dict[str, tuple[Any, float]] = {}
        self._cleanup_interval = cleanup_interval
        self._clock = clock
        self._cleanup_task: Task[None] | None = None
        self._lock = Lock()

    async def start_lifecycle(self) -> None:
        """Start background maintenance tasks."""
        if not self._cleanup_task:
            self._cleanup_task = create_task(self._cleanup_loop())
            logger.info("MemoryClient active expiration task started.")

    async def _cleanup_loop(self) -> None:
        """Background loop to remove expired keys."""
        while True:
            try:
                await asyncio_sleep(self._cleanup_interval)
                if removed := self.purge_expired():
                    logger.debug(f"Memory cleanup: removed {removed} expired keys.")
            except CancelledError:
                break
            except Exception:
                logger.exception("Error in memory cleanup loop")

    async def close(self) -> None:
        """Stop the cleanup task and drop every entry."""
        if self._cleanup_task:
            self._cleanup_task.cancel()
            with suppress(CancelledError):
                await self._cleanup_task
            self._cleanup_task = None
        self.clear()

    def _expired(self, expires_at: float, now: float) -> bool:
        return now >= expires_at

    def set(self, key: str, value: Any, ttl: float) -> None:
        """Store ``value`` under ``key`` for ``ttl`` seconds."""
        with self._lock:
            self._cache[key] = (value, self._clock() + ttl)

    def get(self, key: str) -> Any | None:
        """Return the live value for ``key`` or None."""
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if self._expired(expires_at, self._clock()):
                del self._cache[key]
                return None
            return value

    def exists(self, key: str) -> bool:
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return False
            if self._expired(entry[1], self._clock()):
                del self._cache[key]
                return False
            return True

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._cache.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def size(self) -> int:
        """Number of stored entries, expired ones included until swept."""
        with self._lock:
            return len(self._cache)

    def purge_expired(self) -> int:
        """Remove every expired entry and return how many were dropped."""
        now = self._clock()
        with self._lock:
            expired = [k for k, (_, exp) in self._cache.items() if self._expired(exp, now)]
            for key in expired:
                del self._cache[key]
        return len(expired)
