"""
Single-slot cache for the leave sheet scan used by status lookups.

Entries expire purely by age. Writes elsewhere (cancellations, reviewers
editing the sheet) do not invalidate the slot, so a status lookup can be up
to one TTL behind the sheet.
"""

import logging
import time
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300

Snapshot = tuple[dict[str, Any], ...]


class StatusCache:
    """
    One cached snapshot of all leave rows.

    Args:
        ttl_seconds: Age after which the snapshot is a miss
        clock: Monotonic seconds source; tests pass a fake clock
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._snapshot: Snapshot | None = None
        self._captured_at: float | None = None

    def get(self) -> Snapshot | None:
        """Return the snapshot while it is younger than the TTL, else None."""
        if self._snapshot is None or self._captured_at is None:
            return None

        age = self.clock() - self._captured_at
        if age < self.ttl_seconds:
            logger.debug(f"Status cache hit (age={age:.1f}s)")
            return self._snapshot

        logger.debug(f"Status cache expired (age={age:.1f}s)")
        return None

    def put(self, snapshot) -> Snapshot:
        """Replace the slot with ``snapshot`` and stamp it with the current time."""
        self._snapshot = tuple(snapshot)
        self._captured_at = self.clock()
        logger.info(f"Status cache refreshed with {len(self._snapshot)} rows")
        return self._snapshot

    def clear(self) -> None:
        self._snapshot = None
        self._captured_at = None

    def state(self) -> dict:
        """Get current cache state for monitoring."""
        age = None if self._captured_at is None else round(self.clock() - self._captured_at, 2)
        return {
            "ttl_seconds": self.ttl_seconds,
            "cached_rows": None if self._snapshot is None else len(self._snapshot),
            "age_seconds": age,
        }
