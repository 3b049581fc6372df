"""
Bounded retry with exponential backoff for store operations.

Only transient failures are retried: a locked or busy SQLite database
usually clears within milliseconds. Everything else (constraint
violations, bad SQL, missing tables) is raised on the first attempt.

Usage:
    from momentum.voids.retry import with_retry

    @with_retry()
    def complete_next_action(action_id):
        ...

Attempts and base delay come from ``momentum.database.retry`` in
args/momentum.yaml unless passed explicitly.
"""

import functools
import logging
import sqlite3
import time
from typing import Any, Callable, Optional, TypeVar

from . import DEFAULT_MAX_ATTEMPTS, DEFAULT_RETRY_DELAY
from ..config import get_section

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

TRANSIENT_MARKERS = (
    "database is locked",
    "database table is locked",
    "database is busy",
)


def is_transient(exc: BaseException) -> bool:
    """Return True if the store failure is worth retrying."""
    if not isinstance(exc, sqlite3.OperationalError):
        return False
    message = str(exc).lower()
    return any(marker in message for marker in TRANSIENT_MARKERS)


def get_retry_settings() -> tuple:
    """Read (max_attempts, retry_delay) from config, falling back to defaults."""
    retry_config = get_section("database").get("retry", {}) or {}
    max_attempts = int(retry_config.get("max_attempts", DEFAULT_MAX_ATTEMPTS))
    retry_delay = float(retry_config.get("retry_delay_seconds", DEFAULT_RETRY_DELAY))
    return max(1, max_attempts), max(0.0, retry_delay)


def with_retry(
    max_attempts: Optional[int] = None,
    retry_delay: Optional[float] = None,
    retry_on: Callable[[BaseException], bool] = is_transient,
) -> Callable[[F], F]:
    """
    Retry the decorated call on transient failures.

    Args:
        max_attempts: Total attempts including the first (config default 3)
        retry_delay: Base delay in seconds, doubled after each attempt
        retry_on: Predicate deciding which exceptions are retried

    Returns:
        Decorator preserving the wrapped function's signature
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            attempts, delay = get_retry_settings()
            if max_attempts is not None:
                attempts = max(1, max_attempts)
            if retry_delay is not None:
                delay = retry_delay

            for attempt in range(attempts):
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    if not retry_on(e) or attempt >= attempts - 1:
                        raise
                    wait = delay * (2 ** attempt)
                    logger.warning(
                        f"{func.__name__} failed with transient error "
                        f"(attempt {attempt + 1}/{attempts}), retrying in {wait:.2f}s: {e}"
                    )
                    time.sleep(wait)

        return wrapper  # type: ignore[return-value]

    return decorator


__all__ = ["TRANSIENT_MARKERS", "get_retry_settings", "is_transient", "with_retry"]
