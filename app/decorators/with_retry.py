"""
Retry decorator for flaky async operations.

Password hashing runs in a thread pool and is the one place that retries:
a transient backend failure surfaces as ``PasswordHashingError`` and gets
a couple more attempts before the request fails.
"""

from collections.abc import Awaitable, Callable

from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)

from app.monitoring import get_logger

logger = get_logger(__name__)

RETRIABLE_EXCEPTIONS: tuple[type[Exception], ...] = (ConnectionError, TimeoutError)


def _log_retry(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    delay = retry_state.next_action.sleep if retry_state.next_action else 0
    name = getattr(retry_state.fn, "__qualname__", "unknown")
    logger.warning(
        f"Retrying {name} in {delay:.2f}s (attempt {retry_state.attempt_number}): {error}",
    )


def with_retry[**P, T](
    max_retries: int = 3,
    base_delay: float = 0.1,
    max_delay: float = 2.0,
    exec_retry: type[Exception] | tuple[type[Exception], ...] = RETRIABLE_EXCEPTIONS,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """
    Retry an async function with jittered exponential backoff.

    Args:
        max_retries: Total number of attempts, the first one included.
        base_delay: Backoff multiplier in seconds.
        max_delay: Upper bound of a single wait in seconds.
        exec_retry: Exception type(s) worth another attempt. Anything else
            propagates immediately.

    The last error is re-raised unchanged once attempts run out.
    """
    return retry(
        stop=stop_after_attempt(max_retries),
        wait=wait_random_exponential(multiplier=base_delay, max=max_delay),
        retry=retry_if_exception_type(exec_retry),
        before_sleep=_log_retry,
        reraise=True,
    )
