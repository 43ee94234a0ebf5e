"""
Leave record model and the sheet column layout it is stored in.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Verdict(Enum):
    """Approval state of a leave request."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    CANCELLED = "Cancelled"

    @property
    def symbol(self) -> str:
        return VERDICT_SYMBOLS[self]

    @classmethod
    def from_text(cls, value: Any) -> "Verdict":
        """
        Read a verdict cell as written by humans in the sheet.

        Matching ignores case and surrounding whitespace. Blank or unknown
        text reads as PENDING.
        """
        text = str(value or "").strip().lower()
        for verdict in cls:
            if verdict.value.lower() == text:
                return verdict
        return cls.PENDING


VERDICT_SYMBOLS = {
    Verdict.APPROVED: "✔️",
    Verdict.REJECTED: "❌",
    Verdict.CANCELLED: "🚫",
    Verdict.PENDING: "⏳",
}


# Canonical header row, one entry per column (1-based column = index + 1).
# Column 4 is blank and columns 9-10 belong to reviewers; this bot never
# reads or writes them.
COL_REQUEST_ID = "Request ID"
COL_REQUESTED_AT = "Requested Date"
COL_REQUESTER = "Requester"
COL_FROM_DATE = "From Date"
COL_TO_DATE = "To Date"
COL_REASON = "Reason"
COL_COMP_OFF = "Comp-Off Count"
COL_VERDICT = "Team Lead Verdict"
COL_VERDICT_REASON = "Reason for Verdict"

SHEET_HEADER = [
    COL_REQUEST_ID,
    COL_REQUESTED_AT,
    COL_REQUESTER,
    "",
    COL_FROM_DATE,
    COL_TO_DATE,
    COL_REASON,
    COL_COMP_OFF,
    "Recommendation",
    "Team Lead",
    COL_VERDICT,
    COL_VERDICT_REASON,
]

# Columns every operation needs to find by name
REQUIRED_COLUMNS = (
    COL_REQUEST_ID,
    COL_REQUESTED_AT,
    COL_REQUESTER,
    COL_FROM_DATE,
    COL_TO_DATE,
    COL_REASON,
    COL_COMP_OFF,
    COL_VERDICT,
    COL_VERDICT_REASON,
)


def normalize_header(name: Any) -> str:
    return " ".join(str(name or "").split()).lower()


@dataclass
class LeaveRecord:
    """One leave request row."""

    id: str
    requested_at: str
    requester: str
    from_date: str
    to_date: str
    reason: str
    comp_off_count: int
    verdict: Verdict = Verdict.PENDING
    verdict_reason: str = ""

    def to_columns(self) -> dict[str, Any]:
        """Map the record onto header names."""
        return {
            COL_REQUEST_ID: self.id,
            COL_REQUESTED_AT: self.requested_at,
            COL_REQUESTER: self.requester,
            COL_FROM_DATE: self.from_date,
            COL_TO_DATE: self.to_date,
            COL_REASON: self.reason,
            COL_COMP_OFF: self.comp_off_count,
            COL_VERDICT: self.verdict.value,
            COL_VERDICT_REASON: self.verdict_reason,
        }

    @classmethod
    def from_columns(cls, row: dict[str, Any]) -> "LeaveRecord":
        """
        Build a record from a ``{header: value}`` row.

        Sheet cells come back loosely typed (numbers, blanks), so every field
        is coerced. A comp-off cell that is not a number reads as 0.
        """
        try:
            comp_off = int(row.get(COL_COMP_OFF) or 0)
        except (TypeError, ValueError):
            comp_off = 0

        return cls(
            id=str(row.get(COL_REQUEST_ID, "")),
            requested_at=str(row.get(COL_REQUESTED_AT, "")),
            requester=str(row.get(COL_REQUESTER, "")),
            from_date=str(row.get(COL_FROM_DATE, "")),
            to_date=str(row.get(COL_TO_DATE, "")),
            reason=str(row.get(COL_REASON, "")),
            comp_off_count=comp_off,
            verdict=Verdict.from_text(row.get(COL_VERDICT)),
            verdict_reason=str(row.get(COL_VERDICT_REASON) or ""),
        )
