"""
Pytest configuration and fixtures.
Shared test utilities and fake collaborators.
"""

from datetime import datetime, timezone

import pytest

from leave_sheet_bot.cache import StatusCache
from leave_sheet_bot.handlers import LeaveCommandHandlers
from leave_sheet_bot.models import SHEET_HEADER
from leave_sheet_bot.store import InMemoryLeaveStore

# 20/02/2025 09:30:00 UTC
FIXED_NOW = datetime(2025, 2, 20, 9, 30, tzinfo=timezone.utc)
FIXED_LEAVE_ID = "LID-1740043800"


class RecordingNotifier:
    """Notifier that keeps messages instead of posting them."""

    def __init__(self):
        self.messages: list[str] = []
        self.errors: list[str] = []

    def notify(self, text: str) -> None:
        self.messages.append(text)

    def notify_error(self, text: str) -> None:
        self.errors.append(text)


class FakeClock:
    """Monotonic clock moved by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_row(
    leave_id: str,
    from_date: str,
    to_date: str | None = None,
    verdict: str = "",
    verdict_reason: str = "",
    requester: str = "Jane Doe",
    reason: str = "Family trip",
    comp_off: str = "2",
) -> list[str]:
    """Build one sheet row laid out like SHEET_HEADER."""
    return [
        leave_id,
        "01/02/2025, 10:00:00",
        requester,
        "",
        from_date,
        to_date or from_date,
        reason,
        comp_off,
        "",
        "",
        verdict,
        verdict_reason,
    ]


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def sheet_rows():
    """Sample sheet relative to FIXED_NOW (20/02/2025)."""
    return [
        list(SHEET_HEADER),
        make_row("LID-1000", "25/02/2025", "27/02/2025", verdict="Approved", verdict_reason="Enjoy"),
        make_row("LID-2000", "01/03/2025", "02/03/2025"),
        make_row("LID-3000", "10/02/2025", "12/02/2025"),
        make_row("LID-4000", "05/03/2025", verdict="Cancelled", verdict_reason="Cancelled by user: plans changed"),
        make_row("LID-5000", "20/02/2025", verdict="Rejected", verdict_reason="Release week"),
    ]


@pytest.fixture
def memory_store(sheet_rows):
    return InMemoryLeaveStore(sheet_rows)


@pytest.fixture
def status_cache(fake_clock):
    return StatusCache(ttl_seconds=300, clock=fake_clock)


@pytest.fixture
def sleeps():
    """Records retry delays instead of sleeping."""
    return []


@pytest.fixture
def handlers(memory_store, status_cache, notifier, sleeps):
    return LeaveCommandHandlers(
        store=memory_store,
        cache=status_cache,
        notifier=notifier,
        retry_attempts=3,
        retry_base_delay=1.0,
        clock=lambda: FIXED_NOW,
        sleep=sleeps.append,
    )
