from __future__ import annotations

from enum import Enum


class SessionStatus(str, Enum):
    """Attendance state of the current user for today."""

    NOT_CHECKED_IN = "NOT_CHECKED_IN"
    CHECKED_IN = "CHECKED_IN"
    CHECKED_OUT = "CHECKED_OUT"
