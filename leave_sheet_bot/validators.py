"""
Field validators for leave commands.

All checks are pure predicates over strings. Dates are written
``DD/MM/YYYY`` throughout the bot and the sheet.
"""

import re
from datetime import date

from leave_sheet_bot.timeutils import today as local_today

DATE_FORMAT_REGEX = re.compile(r"\d{2}/\d{2}/\d{4}")
LEAVE_ID_REGEX = re.compile(r"LID-\d+")


def is_valid_date_format(value: str) -> bool:
    """
    Structural ``DD/MM/YYYY`` check.

    No calendar check happens here, so ``32/13/9999`` passes.
    """
    if not isinstance(value, str):
        return False
    return DATE_FORMAT_REGEX.fullmatch(value) is not None and value.isascii()


def parse_date(value: str) -> date:
    """
    Parse ``DD/MM/YYYY`` into a date.

    Raises:
        ValueError: if the shape is wrong or the day does not exist
            (e.g. ``31/02/2025``).
    """
    if not is_valid_date_format(value):
        raise ValueError(f"Invalid date format: {value}. Use DD/MM/YYYY.")
    day, month, year = (int(part) for part in value.split("/"))
    return date(year, month, day)


def is_valid_date_range(from_date: str, to_date: str) -> bool:
    """Return True when ``from_date <= to_date``; False if either is unparseable."""
    try:
        return parse_date(from_date) <= parse_date(to_date)
    except ValueError:
        return False


def is_future_date(value: str, today: date | None = None) -> bool:
    """
    Return True if ``value`` is a real calendar date that is today or later.

    Args:
        value: Date in ``DD/MM/YYYY`` form.
        today: Reference date; defaults to today in the leave timezone.
    """
    if not is_valid_date_format(value):
        return False

    try:
        given = parse_date(value)
    except ValueError:
        # Day/month/year did not survive the round trip to a real date
        return False

    return given >= (today or local_today())


def is_valid_leave_id(value: str) -> bool:
    if not isinstance(value, str):
        return False
    return LEAVE_ID_REGEX.fullmatch(value) is not None and value.isascii()
