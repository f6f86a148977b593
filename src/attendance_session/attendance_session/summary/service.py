from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable, List, Optional

from ..common.datetime_utils import format_clock
from ..core.constants import CORRECTION_CLOSED_STATUSES, DEFAULT_HISTORY_DAYS
from ..core.exceptions import ValidationError
from ..oracle.client import AttendanceOracle
from ..oracle.model import SummaryRecord


@dataclass(frozen=True)
class SummaryRowUI:
    date: str
    check_in: str
    check_out: str
    status: str
    working_hours: str = "-"
    correction_status: str = "-"
    can_request_correction: bool = True


class SummaryService:
    def __init__(self, oracle: AttendanceOracle, *, today: Callable[[], date] = date.today):
        self._oracle = oracle
        self._today = today

    def history(self, from_date: Optional[date] = None, to_date: Optional[date] = None) -> List[SummaryRowUI]:
        to_date = to_date or self._today()
        from_date = from_date or (to_date - timedelta(days=DEFAULT_HISTORY_DAYS))
        if from_date > to_date:
            raise ValidationError("From date must not be after to date")
        return [self._to_ui(r) for r in self._oracle.fetch_summary(from_date, to_date)]

    @staticmethod
    def _to_ui(r: SummaryRecord) -> SummaryRowUI:
        return SummaryRowUI(
            date=r.date or "-",
            check_in=format_clock(r.in_time) if r.in_time is not None else "-",
            check_out=format_clock(r.out_time) if r.out_time is not None else "-",
            status=r.status or ("Present" if r.in_time is not None else "-"),
            working_hours=r.working_hours or "-",
            correction_status=r.correction_status or "-",
            can_request_correction=r.correction_status not in CORRECTION_CLOSED_STATUSES,
        )
