"""
Lightweight observability utilities.

Sheet calls are the slow and flaky part of every command. Wrapping them in
``trace_span`` gives one structured latency record per call, which is enough
to tell a slow sheet from a failing one when reading the logs.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager

logger = logging.getLogger("leave_sheet_bot.trace")


@contextmanager
def trace_span(name: str, **metadata):
    """
    Measure execution duration of a store operation and record how it ended.

    Example logs:
    [TRACE] store_scan duration_ms=43.21 outcome=ok backend=google_sheets
    [TRACE] store_append duration_ms=3012.40 outcome=error error=StoreError backend=google_sheets

    Guarantees
    ----------
    - Always logs completion (even if exception occurs)
    - Never suppresses exceptions
    - Failed spans are logged at WARNING with the exception type
    """
    start = time.perf_counter()
    outcome = {"outcome": "ok"}
    try:
        yield
    except Exception as e:
        outcome = {"outcome": "error", "error": type(e).__name__}
        raise
    finally:
        duration_ms = (time.perf_counter() - start) * 1000

        meta = " ".join(f"{k}={v}" for k, v in {**outcome, **metadata}.items())
        level = logging.INFO if outcome["outcome"] == "ok" else logging.WARNING
        logger.log(level, "[TRACE] %s duration_ms=%.2f %s", name, duration_ms, meta)
