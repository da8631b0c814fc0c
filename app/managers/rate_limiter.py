"""
In-memory token bucket rate limiting.

Each identifier owns a bucket of ``rate`` tokens. A request spends one
token; once ``window`` seconds have passed since the last refill the bucket
is refilled completely. Stale buckets are dropped by a background task.
"""

from asyncio import CancelledError, Task, create_task
from asyncio import sleep as asyncio_sleep
from collections.abc import Callable
from contextlib import suppress
from dataclasses import dataclass
from math import ceil
from threading import Lock
from time import monotonic
from typing import Annotated

from fastapi import Depends, Request

from app.configs import settings
from app.errors.rate_limit import RateLimitExceededError
from app.monitoring import get_logger
from app.utils.network import client_ip

logger = get_logger(__name__)


@dataclass
class Bucket:
    tokens: int
    last_refill: float


class RateLimiter:
    """
    Thread-safe token bucket limiter keyed by an arbitrary identifier.

    Args:
        rate: Tokens granted per window.
        window: Window length in seconds.
        clock: Monotonic time source, injectable for tests.
    """

    def __init__(
        self,
        rate: int,
        window: float,
        clock: Callable[[], float] = monotonic,
        name: str = "default",
    ) -> None:
        if rate <= 0:
            msg = "rate must be greater than zero"
            raise ValueError(msg)
        if window <= 0:
            msg = "window must be greater than zero"
            raise ValueError(msg)

        self.rate = rate
        self.window = window
        self.name = name
        self._clock = clock
        self._buckets: dict[str, Bucket] = {}
        self._lock = Lock()
        self._cleanup_task: Task[None] | None = None

    def allow(self, identifier: str) -> bool:
        """Spend one token for ``identifier``; return False when none are left."""
        now = self._clock()
        with self._lock:
            bucket = self._buckets.get(identifier)
            if bucket is None:
                self._buckets[identifier] = Bucket(tokens=self.rate - 1, last_refill=now)
                return True

            if now - bucket.last_refill >= self.window:
                bucket.tokens = self.rate
                bucket.last_refill = now

            if bucket.tokens > 0:
                bucket.tokens -= 1
                return True
            return False

    def reset(self, identifier: str) -> None:
        with self._lock:
            self._buckets.pop(identifier, None)

    def get_remaining(self, identifier: str) -> int:
        """Return the tokens ``identifier`` could still spend right now."""
        now = self._clock()
        with self._lock:
            bucket = self._buckets.get(identifier)
            if bucket is None or now - bucket.last_refill >= self.window:
                return self.rate
            return bucket.tokens

    def retry_after(self, identifier: str) -> int:
        """Seconds until the bucket of ``identifier`` is refilled."""
        now = self._clock()
        with self._lock:
            bucket = self._buckets.get(identifier)
            if bucket is None:
                return 0
            return max(0, ceil(bucket.last_refill + self.window - now))

    def cleanup(self, max_age: float) -> int:
        """
        Drop buckets that have not been refilled for more than ``max_age``.

        Returns:
            int: Number of buckets removed
        """
        now = self._clock()
        with self._lock:
            stale = [key for key, b in self._buckets.items() if now - b.last_refill > max_age]
            for key in stale:
                del self._buckets[key]
        return len(stale)

    def __len__(self) -> int:
        with self._lock:
            return len(self._buckets)

    async def start_lifecycle(self) -> None:
        """Start the periodic cleanup task."""
        if self._cleanup_task is None:
            self._cleanup_task = create_task(self._cleanup_loop())
            logger.info(f"Rate limiter '{self.name}' cleanup task started")

    async def _cleanup_loop(self) -> None:
        interval = self.window * 2
        while True:
            try:
                await asyncio_sleep(interval)
                if removed := self.cleanup(interval):
                    logger.debug(f"Rate limiter '{self.name}' removed {removed} stale buckets")
            except CancelledError:
                break
            except Exception:
                logger.exception(f"Error in rate limiter '{self.name}' cleanup loop")

    async def close(self) -> None:
        """Cancel the cleanup task."""
        if self._cleanup_task:
            self._cleanup_task.cancel()
            with suppress(CancelledError):
                await self._cleanup_task
            self._cleanup_task = None


api_limiter = RateLimiter(
    rate=settings.RATELIMIT_API_REQUESTS,
    window=settings.RATELIMIT_API_WINDOW,
    name="api",
)
comment_limiter = RateLimiter(
    rate=settings.RATELIMIT_COMMENT_REQUESTS,
    window=settings.RATELIMIT_COMMENT_WINDOW,
    name="comment",
)


def get_api_limiter() -> RateLimiter:
    return api_limiter


def get_comment_limiter() -> RateLimiter:
    return comment_limiter


def enforce(limiter: RateLimiter, request: Request) -> None:
    """
    Spend a token for the request's client IP or raise.

    Raises:
        RateLimitExceededError: When the client has no tokens left
    """
    if not settings.RATELIMIT_ENABLED:
        return

    identifier = f"ip:{client_ip(request)}"
    if limiter.allow(identifier):
        return

    logger.warning(f"Rate limit '{limiter.name}' exceeded for {identifier} on {request.url.path}")
    raise RateLimitExceededError(
        limit=limiter.rate,
        window=int(limiter.window),
        retry_after=limiter.retry_after(identifier),
    )


async def api_rate_limit(
    request: Request,
    limiter: Annotated[RateLimiter, Depends(get_api_limiter)],
) -> None:
    enforce(limiter, request)


async def comment_rate_limit(
    request: Request,
    limiter: Annotated[RateLimiter, Depends(get_comment_limiter)],
) -> None:
    enforce(limiter, request)
