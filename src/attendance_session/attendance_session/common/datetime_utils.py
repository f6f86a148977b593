from __future__ import annotations

import time
from datetime import date, datetime
from typing import Any, Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


def to_epoch_ms(value: datetime) -> int:
    # Naive datetimes are interpreted as local time.
    return int(value.timestamp() * 1000)


def from_epoch_ms(value: int) -> datetime:
    """Epoch milliseconds -> naive local datetime."""
    return datetime.fromtimestamp(value / 1000)


def parse_server_timestamp(value: Any) -> Optional[int]:
    """Parse a timestamp sent by the attendance service into epoch ms.

    Accepts ISO-8601 strings, datetimes and epoch-ms numbers. Returns None for
    empty, unparsable or unrepresentable values (NaN, out of range) so callers
    can skip malformed rows.
    """

    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, datetime):
            stamp = to_epoch_ms(value)
        elif isinstance(value, (int, float)):
            stamp = int(value)
        else:
            text = str(value).strip()
            if not text:
                return None
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            stamp = to_epoch_ms(datetime.fromisoformat(text))
        # Must map back to a local datetime for display and weekday lookup.
        from_epoch_ms(stamp)
    except (ValueError, OverflowError, OSError):
        return None
    return stamp


def format_clock(value_ms: int) -> str:
    """Epoch ms -> HH:MM in local time."""
    return from_epoch_ms(value_ms).strftime("%H:%M")


def format_hms(seconds: int) -> str:
    """Seconds -> HH:MM:SS (hours are not wrapped at 24)."""
    seconds = max(0, int(seconds))
    h = seconds // 3600
    m = (seconds % 3600) // 60
    s = seconds % 60
    return f"{h:02d}:{m:02d}:{s:02d}"
