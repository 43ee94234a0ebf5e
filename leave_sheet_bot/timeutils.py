"""Timezone-aware "now" and "today" for leave date checks."""

from datetime import date, datetime, tzinfo

from dateutil import tz

from leave_sheet_bot.config import settings


def local_tz() -> tzinfo:
    """Return the configured leave timezone, falling back to the system zone."""
    if settings.leave_timezone:
        zone = tz.gettz(settings.leave_timezone)
        if zone is not None:
            return zone
    return tz.tzlocal()


def local_now() -> datetime:
    return datetime.now(local_tz())


def today() -> date:
    """Current calendar date in the leave timezone (midnight-truncated)."""
    return local_now().date()
