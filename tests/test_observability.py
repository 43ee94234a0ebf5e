"""
Tests for store operation tracing.
"""

import logging

import pytest

from leave_sheet_bot.errors import StoreError
from leave_sheet_bot.observability import trace_span
from leave_sheet_bot.store import InMemoryLeaveStore


class TestTraceSpan:
    """Test trace_span outcome records."""

    def test_successful_span(self, caplog):
        """A clean exit is logged at INFO with outcome=ok."""
        with caplog.at_level(logging.INFO, logger="leave_sheet_bot.trace"):
            with trace_span("store_scan", backend="memory"):
                pass

        record = caplog.records[-1]
        assert record.levelno == logging.INFO
        assert "store_scan" in record.getMessage()
        assert "outcome=ok backend=memory" in record.getMessage()

    def test_failed_span_reraises(self, caplog):
        """A failure is logged at WARNING with its type and still propagates."""
        with caplog.at_level(logging.INFO, logger="leave_sheet_bot.trace"):
            with pytest.raises(StoreError):
                with trace_span("store_append", backend="google_sheets"):
                    raise StoreError("quota exceeded")

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert "outcome=error error=StoreError backend=google_sheets" in record.getMessage()

    def test_store_operations_are_traced(self, caplog, memory_store):
        """Store calls emit one span each."""
        with caplog.at_level(logging.INFO, logger="leave_sheet_bot.trace"):
            memory_store.scan_all()
            memory_store.find_by_id("LID-1000")

        messages = [r.getMessage() for r in caplog.records if r.name == "leave_sheet_bot.trace"]
        assert any("store_scan" in m and "outcome=ok" in m for m in messages)
        assert any("store_find" in m and "leave_id=LID-1000" in m for m in messages)

    def test_schema_error_span(self, caplog):
        """A sheet missing its header columns ends the span with an error outcome."""
        store = InMemoryLeaveStore([["Request ID"], ["LID-1"]])

        with caplog.at_level(logging.INFO, logger="leave_sheet_bot.trace"):
            with pytest.raises(StoreError):
                store.scan_all()

        messages = [r.getMessage() for r in caplog.records if r.name == "leave_sheet_bot.trace"]
        assert any("store_scan" in m and "error=StoreSchemaError" in m for m in messages)
