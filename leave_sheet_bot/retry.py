"""
Bounded retry with exponential backoff for store writes.
"""

import logging
import time
from collections.abc import Callable
from typing import Any

from leave_sheet_bot.errors import RetryExhaustedError, StoreError

logger = logging.getLogger(__name__)


def backoff_delay(attempt: int, base_delay: float) -> float:
    """Delay after the failed attempt numbered ``attempt`` (0-based): base * 2^attempt."""
    return base_delay * (2**attempt)


def retry_with_backoff(
    func: Callable,
    *args,
    attempts: int = 3,
    base_delay: float = 1.0,
    retry_on: tuple[type[Exception], ...] = (StoreError,),
    sleep: Callable[[float], None] = time.sleep,
    name: str = "operation",
    **kwargs,
) -> Any:
    """
    Call ``func`` up to ``attempts`` times.

    Between attempts it sleeps 1x, 2x, 4x... ``base_delay``. Failures before
    the last attempt are only logged. Exceptions outside ``retry_on`` are
    raised immediately.

    Args:
        func: Function to execute
        *args, **kwargs: Arguments to pass to function
        attempts: Total number of calls allowed
        base_delay: Delay in seconds after the first failure
        retry_on: Exception types treated as transient
        sleep: Sleep function; tests pass a recorder
        name: Name for logging

    Returns:
        Result from function

    Raises:
        RetryExhaustedError: if every attempt failed
    """
    last_error: Exception | None = None

    for attempt in range(attempts):
        try:
            return func(*args, **kwargs)
        except retry_on as e:
            last_error = e
            if attempt + 1 >= attempts:
                break

            delay = backoff_delay(attempt, base_delay)
            logger.warning(
                f"{name} failed ({attempt + 1}/{attempts}): {e}. Retrying in {delay:g} seconds..."
            )
            sleep(delay)

    logger.error(f"{name} failed after {attempts} attempts: {last_error}")
    raise RetryExhaustedError(
        f"{name} failed after {attempts} attempts. {last_error}",
        attempts=attempts,
        last_error=last_error,
    )
