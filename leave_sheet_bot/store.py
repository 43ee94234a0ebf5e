"""
Leave record store over a sheet of rows.

Row 1 is the header. Every operation finds its columns by header name, so
reviewers can reorder or insert columns without breaking the bot. An empty
sheet gets the canonical header on first append.

Two backends share the same row logic:
- InMemoryLeaveStore: list of rows, used for development and tests
- GoogleSheetLeaveStore: a gspread worksheet
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

import gspread
from gspread.exceptions import GSpreadException
from gspread.utils import rowcol_to_a1

from data.sample_leaves import SAMPLE_ROWS
from leave_sheet_bot.errors import LeaveNotFoundError, StoreError, StoreSchemaError
from leave_sheet_bot.models import (
    COL_REQUEST_ID,
    COL_VERDICT,
    COL_VERDICT_REASON,
    REQUIRED_COLUMNS,
    SHEET_HEADER,
    LeaveRecord,
    Verdict,
    normalize_header,
)
from leave_sheet_bot.observability import trace_span

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

_CANONICAL_BY_NORMALIZED = {normalize_header(name): name for name in REQUIRED_COLUMNS}


def resolve_columns(header: list[Any]) -> dict[str, int]:
    """
    Map canonical column names to 0-based positions in ``header``.

    Raises:
        StoreSchemaError: if a required column is missing.
    """
    positions: dict[str, int] = {}
    for index, name in enumerate(header):
        canonical = _CANONICAL_BY_NORMALIZED.get(normalize_header(name))
        if canonical and canonical not in positions:
            positions[canonical] = index

    missing = [name for name in REQUIRED_COLUMNS if name not in positions]
    if missing:
        logger.error(f"Required columns not found. Found headers: {header}")
        raise StoreSchemaError(f"Required columns not found in the sheet: {', '.join(missing)}")
    return positions


def _cell(row: list[Any], index: int) -> Any:
    # Sheet APIs drop trailing empty cells
    return row[index] if index < len(row) else ""


class LeaveRecordStore(ABC):
    """Row-oriented leave store. Subclasses provide raw row access only."""

    backend = "abstract"

    @abstractmethod
    def _read_header(self) -> list[Any]:
        """Return row 1, or an empty list for an empty sheet."""

    @abstractmethod
    def _read_rows(self) -> list[list[Any]]:
        """Return every row including the header."""

    @abstractmethod
    def _append_row(self, row: list[Any]) -> None:
        """Write ``row`` after the last row."""

    @abstractmethod
    def _write_cells(self, row_number: int, values: dict[int, Any]) -> None:
        """Overwrite cells of one row; keys are 1-based column numbers."""

    def append(self, record: LeaveRecord) -> None:
        """Add ``record`` as the new last row."""
        with trace_span("store_append", backend=self.backend, leave_id=record.id):
            header = self._read_header()
            if not header:
                logger.info("Empty sheet, writing header row")
                header = list(SHEET_HEADER)
                self._append_row(header)

            positions = resolve_columns(header)
            row: list[Any] = [""] * max(len(header), max(positions.values()) + 1)
            for name, value in record.to_columns().items():
                row[positions[name]] = value

            self._append_row(row)
            logger.info(f"Appended leave request {record.id}")

    def scan_all(self) -> list[dict[str, Any]]:
        """
        Return every data row in sheet order as ``{column name: value}``.

        Required columns are keyed by their canonical names, other named
        columns by their header text. Blank rows are skipped.
        """
        with trace_span("store_scan", backend=self.backend):
            rows = self._read_rows()
            if not rows:
                return []

            header = rows[0]
            positions = resolve_columns(header)
            keys = {index: str(name).strip() for index, name in enumerate(header) if str(name).strip()}
            keys.update({index: name for name, index in positions.items()})

            records = []
            for row in rows[1:]:
                if not any(str(value).strip() for value in row):
                    continue
                records.append({key: _cell(row, index) for index, key in keys.items()})

            logger.info(f"Scanned {len(records)} leave requests")
            return records

    def _locate(self, leave_id: str) -> tuple[int, dict[str, Any], dict[str, int]] | None:
        """Find the first row for ``leave_id``: (1-based row number, row mapping, positions)."""
        rows = self._read_rows()
        if not rows:
            return None

        positions = resolve_columns(rows[0])
        id_index = positions[COL_REQUEST_ID]
        for row_number, row in enumerate(rows[1:], start=2):
            if str(_cell(row, id_index)).strip() == leave_id:
                mapped = {name: _cell(row, index) for name, index in positions.items()}
                return row_number, mapped, positions
        return None

    def find_by_id(self, leave_id: str) -> LeaveRecord | None:
        """Return the first record with ``leave_id``, or None."""
        with trace_span("store_find", backend=self.backend, leave_id=leave_id):
            located = self._locate(leave_id)
            if located is None:
                return None
            _, mapped, _ = located
            return LeaveRecord.from_columns(mapped)

    def update_verdict(self, leave_id: str, verdict: Verdict, verdict_reason: str) -> None:
        """
        Overwrite the verdict and verdict-reason cells of ``leave_id``.

        No other cell of the row is touched.

        Raises:
            LeaveNotFoundError: if no row has ``leave_id``.
        """
        with trace_span("store_update_verdict", backend=self.backend, leave_id=leave_id):
            located = self._locate(leave_id)
            if located is None:
                raise LeaveNotFoundError(f"Leave request with ID {leave_id} not found.")

            row_number, _, positions = located
            self._write_cells(
                row_number,
                {
                    positions[COL_VERDICT] + 1: verdict.value,
                    positions[COL_VERDICT_REASON] + 1: verdict_reason,
                },
            )
            logger.info(f"Set verdict of {leave_id} to {verdict.value}")


class InMemoryLeaveStore(LeaveRecordStore):
    """Sheet held as a list of rows. Row 1 (index 0) is the header."""

    backend = "memory"

    def __init__(self, rows: list[list[Any]] | None = None):
        self.rows: list[list[Any]] = [list(row) for row in rows] if rows else []

    def _read_header(self) -> list[Any]:
        return list(self.rows[0]) if self.rows else []

    def _read_rows(self) -> list[list[Any]]:
        return [list(row) for row in self.rows]

    def _append_row(self, row: list[Any]) -> None:
        self.rows.append(list(row))

    def _write_cells(self, row_number: int, values: dict[int, Any]) -> None:
        row = self.rows[row_number - 1]
        needed = max(values)
        if len(row) < needed:
            row.extend([""] * (needed - len(row)))
        for column, value in values.items():
            row[column - 1] = value


class GoogleSheetLeaveStore(LeaveRecordStore):
    """
    Store backed by a Google Sheets worksheet.

    Values are written RAW so dates stay ``DD/MM/YYYY`` text instead of
    being reinterpreted by the sheet's locale. gspread and transport errors
    are raised as StoreError so callers can retry them.
    """

    backend = "google_sheets"

    def __init__(self, worksheet: gspread.Worksheet):
        self.worksheet = worksheet

    @classmethod
    def from_settings(cls, settings) -> "GoogleSheetLeaveStore":
        """Open the configured worksheet with a service account."""
        from google.oauth2.service_account import Credentials

        creds = Credentials.from_service_account_file(
            settings.google_service_account_file, scopes=SCOPES
        )
        client = gspread.authorize(creds)
        worksheet = client.open_by_key(settings.sheet_id).worksheet(settings.sheet_name)
        logger.info(f"Opened worksheet '{settings.sheet_name}'")
        return cls(worksheet)

    def _call(self, operation: str, func, *args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (GSpreadException, OSError) as e:
            logger.error(f"Google Sheets {operation} failed: {e}")
            raise StoreError(f"Google Sheets {operation} failed: {e}") from e

    def _read_header(self) -> list[Any]:
        return self._call("header read", self.worksheet.row_values, 1)

    def _read_rows(self) -> list[list[Any]]:
        return self._call("read", self.worksheet.get_all_values)

    def _append_row(self, row: list[Any]) -> None:
        self._call("append", self.worksheet.append_row, row, value_input_option="RAW")

    def _write_cells(self, row_number: int, values: dict[int, Any]) -> None:
        updates = [
            {"range": rowcol_to_a1(row_number, column), "values": [[value]]}
            for column, value in values.items()
        ]
        self._call("update", self.worksheet.batch_update, updates, value_input_option="RAW")


def build_store(settings) -> LeaveRecordStore:
    """
    Pick the store backend.

    Uses Google Sheets when SHEET_ID is configured and falls back to the
    in-memory sample sheet otherwise, or if the sheet cannot be opened.
    """
    if settings.sheet_id:
        try:
            return GoogleSheetLeaveStore.from_settings(settings)
        except Exception as e:
            logger.error(f"Failed to open Google Sheet: {e}")
            logger.warning("Falling back to in-memory sample sheet")

    logger.info("Using in-memory sample sheet")
    return InMemoryLeaveStore(SAMPLE_ROWS)
