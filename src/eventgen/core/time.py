"""
Clock and date helpers.

The policy and the orchestrator never read the clock themselves; timestamps are
epoch milliseconds passed in by the caller. These helpers exist for entrypoints
(CLI) and for turning a caller-supplied `now` into calendar values.
"""

from __future__ import annotations

import time
from datetime import date, datetime
from zoneinfo import ZoneInfo


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def local_date_from_ms(timestamp_ms: int, timezone: str) -> date:
    """Calendar date of an epoch-millisecond timestamp in `timezone`."""
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=ZoneInfo(timezone)).date()


def parse_local_datetime(value: str) -> datetime:
    """Parse an ISO-8601 local datetime such as `2025-03-21T20:00`.

    Event times are wall-clock times at the event location, so the result is naive.
    A trailing offset is rejected rather than silently dropped.
    """
    dt = datetime.fromisoformat(value.strip())
    if dt.tzinfo is not None:
        raise ValueError(f"Expected a local datetime without offset, got {value!r}")
    return dt
