from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Union

from ..core.constants import SATURDAY, SHIFT_DURATION_SATURDAY_SECONDS, SHIFT_DURATION_WEEKDAY_SECONDS

Day = Union[date, datetime]


@dataclass(frozen=True)
class ShiftPolicy:
    """Maps a calendar day to the length of that day's shift.

    Only the weekday matters: Saturday gets the short band, every other day the long one.
    """

    weekday_seconds: int = SHIFT_DURATION_WEEKDAY_SECONDS
    saturday_seconds: int = SHIFT_DURATION_SATURDAY_SECONDS

    def duration_for(self, day: Day) -> int:
        if day.weekday() == SATURDAY:
            return self.saturday_seconds
        return self.weekday_seconds

    def label_for(self, day: Day) -> str:
        return _label(self.duration_for(day))


def _label(seconds: int) -> str:
    hours, rest = divmod(seconds, 3600)
    minutes = rest // 60
    if minutes:
        return f"{hours}-Hour {minutes}-Minute Shift"
    return f"{hours}-Hour Shift"
