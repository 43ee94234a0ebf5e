"""
Slash-command handlers: create, look up and cancel leave requests.

Handlers return the success message as text and raise LeaveBotError
subclasses for every rejected command. They never write to the store
before all checks have passed.
"""

import logging
import re
import time
from collections.abc import Callable
from datetime import datetime
from typing import Protocol
from urllib.parse import unquote

from leave_sheet_bot.cache import StatusCache
from leave_sheet_bot.errors import (
    IdentifierCollisionError,
    MalformedInputError,
    ValidationFailedError,
)
from leave_sheet_bot.form_parser import ParsedCommand
from leave_sheet_bot.models import (
    COL_REQUEST_ID,
    COL_VERDICT,
    COL_VERDICT_REASON,
    LeaveRecord,
    Verdict,
)
from leave_sheet_bot.retry import retry_with_backoff
from leave_sheet_bot.store import LeaveRecordStore
from leave_sheet_bot.timeutils import local_now
from leave_sheet_bot.validators import (
    is_future_date,
    is_valid_date_format,
    is_valid_date_range,
    is_valid_leave_id,
    parse_date,
)

logger = logging.getLogger(__name__)

# 25/02/2027-05/03/2027 2 "Vacation"
LEAVE_REQUEST_REGEX = re.compile(r'^(\d{2}/\d{2}/\d{4})-(\d{2}/\d{2}/\d{4})\s+(-?\d+)\s+"(.+?)"$')
LEAVE_REQUEST_USAGE = 'DD/MM/YYYY-DD/MM/YYYY <comp-offs> "<reason>"'

# Slack clients often autocorrect straight quotes
CURLY_QUOTES = str.maketrans({"“": '"', "”": '"', "„": '"', "‟": '"'})

REQUESTED_AT_FORMAT = "%d/%m/%Y, %H:%M:%S"
MIN_CANCEL_REASON_LENGTH = 5
DEFAULT_VERDICT_REASON = "Not Provided"


class Notifier(Protocol):
    def notify(self, text: str) -> None: ...

    def notify_error(self, text: str) -> None: ...


def normalize_request_text(text: str) -> str:
    """URL-decode, straighten quotes and collapse whitespace runs."""
    decoded = unquote(text).translate(CURLY_QUOTES)
    return re.sub(r"\s+", " ", decoded).strip()


def format_confirmation(record: LeaveRecord) -> str:
    return (
        f"✅ *Leave Request Submitted for {record.requester}:*\n"
        f"📅 *From:* {record.from_date}\n"
        f"📅 *To:* {record.to_date}\n"
        f"🔢 *Comp-Offs:* {record.comp_off_count}\n"
        f'📝 *Reason:* "{record.reason}"\n'
        f"🔑 *Leave ID:* {record.id}"
    )


def format_status(leave_id: str, row: dict) -> str:
    verdict_text = str(row.get(COL_VERDICT) or "").strip() or Verdict.PENDING.value
    reason = str(row.get(COL_VERDICT_REASON) or "").strip() or DEFAULT_VERDICT_REASON
    symbol = Verdict.from_text(verdict_text).symbol
    return (
        f"✅ *Leave Status for Request ID: {leave_id}*\n"
        f"🔹 *Verdict:* {verdict_text} {symbol}\n"
        f'🔹 *Reason for Verdict:* "{reason}"'
    )


class LeaveCommandHandlers:
    """
    Create / Status / Cancel over a leave store.

    Args:
        store: Backing leave sheet
        cache: Snapshot cache used by status lookups
        notifier: Audit trail sink
        retry_attempts: Total append attempts
        retry_base_delay: Seconds to wait after the first failed append
        clock: Returns the current aware datetime in the leave timezone
        sleep: Used between append attempts
    """

    def __init__(
        self,
        store: LeaveRecordStore,
        cache: StatusCache,
        notifier: Notifier,
        retry_attempts: int = 3,
        retry_base_delay: float = 1.0,
        clock: Callable[[], datetime] = local_now,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.store = store
        self.cache = cache
        self.notifier = notifier
        self.retry_attempts = retry_attempts
        self.retry_base_delay = retry_base_delay
        self.clock = clock
        self.sleep = sleep

    def create(self, command: ParsedCommand) -> str:
        """
        Handle ``/leave_request DD/MM/YYYY-DD/MM/YYYY <count> "<reason>"``.

        Checks run in order: shape, date format, calendar dates, range,
        comp-off count, no past dates. The request is appended as Pending
        with bounded retries.
        """
        user_name = command.user_name
        self.notifier.notify(f"📩 Raw Request Received from {user_name}:\n{command.raw_text}")

        text = normalize_request_text(command.raw_text)
        self.notifier.notify(f'🔍 Decoded Leave Request Text: "{text}"')

        match = LEAVE_REQUEST_REGEX.match(text)
        if not match:
            raise MalformedInputError(
                f'Incorrect leave request format. Received: "{text}". '
                f"Use {LEAVE_REQUEST_USAGE}."
            )

        from_date, to_date, comp_off, reason = match.groups()

        if not is_valid_date_format(from_date) or not is_valid_date_format(to_date):
            raise MalformedInputError("Invalid date format. Use DD/MM/YYYY.")

        for value in (from_date, to_date):
            try:
                parse_date(value)
            except ValueError:
                raise MalformedInputError(f"Invalid date: {value} is not a calendar date.") from None

        if not is_valid_date_range(from_date, to_date):
            raise ValidationFailedError("'From' date must be earlier than or equal to 'To' date.")

        comp_off_count = int(comp_off)
        if comp_off_count <= 0:
            raise ValidationFailedError("Comp-Off count must be a positive number.")

        now = self.clock()
        today = now.date()
        if not is_future_date(from_date, today) or not is_future_date(to_date, today):
            raise ValidationFailedError("Dates must not be in the past.")

        leave_id = f"LID-{int(now.timestamp())}"
        if self.store.find_by_id(leave_id) is not None:
            logger.error(f"Generated leave ID {leave_id} already exists")
            raise IdentifierCollisionError(
                f"Leave ID {leave_id} already exists. Please submit the request again."
            )

        record = LeaveRecord(
            id=leave_id,
            requested_at=now.strftime(REQUESTED_AT_FORMAT),
            requester=user_name,
            from_date=from_date,
            to_date=to_date,
            reason=reason,
            comp_off_count=comp_off_count,
            verdict=Verdict.PENDING,
        )

        retry_with_backoff(
            self.store.append,
            record,
            attempts=self.retry_attempts,
            base_delay=self.retry_base_delay,
            sleep=self.sleep,
            name="Adding leave request",
        )

        message = format_confirmation(record)
        logger.info(f"Leave request {leave_id} submitted for {user_name}")
        self.notifier.notify(message)
        return message

    def status(self, command: ParsedCommand) -> str:
        """Handle ``/leave_status LID-...`` using the cached sheet snapshot."""
        leave_id = command.raw_text.strip()
        if not is_valid_leave_id(leave_id):
            raise MalformedInputError("Invalid Request ID format. Please use the format 'LID-12345'.")

        snapshot = self.cache.get()
        if snapshot is None:
            rows = self.store.scan_all()
            if not rows:
                raise ValidationFailedError("No leave requests found.")
            snapshot = self.cache.put(rows)

        for row in snapshot:
            if str(row.get(COL_REQUEST_ID, "")).strip() == leave_id:
                message = format_status(leave_id, row)
                logger.info(f"Leave status found for {leave_id}")
                return message

        raise ValidationFailedError(f"No leave request found with ID *{leave_id}*")

    def cancel(self, command: ParsedCommand) -> str:
        """
        Handle ``/leave_cancel LID-... <reason>``.

        Only requests that are not already cancelled and have not started
        can be cancelled. Repeated cancels are rejected, not ignored.
        """
        text = command.raw_text.strip()
        if " " not in text:
            raise MalformedInputError(
                "Invalid input. Please provide the Request ID and reason for cancellation "
                "(e.g., LID-12345 Change in plans)"
            )

        leave_id, _, rest = text.partition(" ")
        reason = rest.strip()

        if len(reason) < MIN_CANCEL_REASON_LENGTH:
            raise MalformedInputError(
                "The cancellation reason is too short. Please provide a more descriptive reason."
            )

        if not is_valid_leave_id(leave_id):
            raise MalformedInputError("Invalid Request ID format. Please use the format 'LID-12345'.")

        record = self.store.find_by_id(leave_id)
        if record is None:
            raise ValidationFailedError(f"Leave request with ID {leave_id} not found.")

        if record.verdict is Verdict.CANCELLED:
            raise ValidationFailedError(f"Leave request {leave_id} is already cancelled.")

        if not is_future_date(record.from_date, self.clock().date()):
            raise ValidationFailedError(
                f"Leave request {leave_id} cannot be cancelled because it has already "
                f"started or is in the past."
            )

        self.store.update_verdict(leave_id, Verdict.CANCELLED, f"Cancelled by user: {reason}")
        logger.info(f"Leave request {leave_id} cancelled by {command.user_name}")
        self.notifier.notify(f"🚫 Leave request {leave_id} cancelled by {command.user_name}: {reason}")
        return f"✅ Leave request {leave_id} has been successfully cancelled."
