from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..core.enums import SessionStatus


@dataclass(frozen=True)
class NotCheckedIn:
    user_id: str

    @property
    def status(self) -> SessionStatus:
        return SessionStatus.NOT_CHECKED_IN


@dataclass(frozen=True)
class CheckedIn:
    """An in-flight shift. The end time is always derived from check-in + duration."""

    user_id: str
    check_in_at: int
    shift_duration_seconds: int

    @property
    def status(self) -> SessionStatus:
        return SessionStatus.CHECKED_IN

    @property
    def shift_end_at(self) -> int:
        return shift_end_for(self.check_in_at, self.shift_duration_seconds)

    def remaining_seconds(self, now: int) -> int:
        return remaining_seconds(self.shift_end_at, now)


@dataclass(frozen=True)
class CheckedOut:
    user_id: str
    check_in_at: int
    check_out_at: int

    @property
    def status(self) -> SessionStatus:
        return SessionStatus.CHECKED_OUT


AttendanceSession = Union[NotCheckedIn, CheckedIn, CheckedOut]


@dataclass(frozen=True)
class StoredSession:
    """Persisted triple for an in-flight session (epoch ms / seconds)."""

    check_in_at: int
    shift_end_at: int
    shift_duration_seconds: int

    def is_consistent(self) -> bool:
        return (
            self.shift_duration_seconds > 0
            and self.shift_end_at == shift_end_for(self.check_in_at, self.shift_duration_seconds)
        )


def shift_end_for(check_in_at: int, shift_duration_seconds: int) -> int:
    return int(check_in_at) + int(shift_duration_seconds) * 1000


def remaining_seconds(shift_end_at: int, now: int) -> int:
    """Whole seconds left until shift_end_at, never negative."""
    left = int(shift_end_at) - int(now)
    if left <= 0:
        return 0
    return left // 1000
