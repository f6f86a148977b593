from __future__ import annotations

from datetime import date, datetime

import pytest

from src.attendance_session.attendance_session.common.datetime_utils import to_epoch_ms
from src.attendance_session.attendance_session.core.exceptions import ValidationError
from src.attendance_session.attendance_session.oracle.model import SummaryRecord
from src.attendance_session.attendance_session.summary.service import SummaryService


class FakeOracle:
    def __init__(self, records):
        self.records = records
        self.last_args = None

    def fetch_summary(self, from_date, to_date):
        self.last_args = (from_date, to_date)
        return self.records


def test_defaults_to_last_thirty_days():
    oracle = FakeOracle([])
    SummaryService(oracle, today=lambda: date(2026, 10, 18)).history()

    assert oracle.last_args == (date(2026, 9, 18), date(2026, 10, 18))


def test_rows_are_formatted_for_display():
    records = [
        SummaryRecord(
            in_time=to_epoch_ms(datetime(2026, 10, 16, 9, 5)),
            out_time=to_epoch_ms(datetime(2026, 10, 16, 17, 40)),
            date="2026-10-16",
            status="Present",
        ),
        SummaryRecord(in_time=to_epoch_ms(datetime(2026, 10, 17, 9, 0)), date="2026-10-17"),
    ]

    rows = SummaryService(FakeOracle(records)).history(date(2026, 10, 16), date(2026, 10, 17))

    assert (rows[0].check_in, rows[0].check_out, rows[0].status) == ("09:05", "17:40", "Present")
    assert (rows[1].check_out, rows[1].status) == ("-", "Present")


def test_inverted_range_is_rejected():
    with pytest.raises(ValidationError):
        SummaryService(FakeOracle([])).history(date(2026, 10, 18), date(2026, 10, 1))


def test_rows_carry_working_hours_and_correction_state():
    records = [
        SummaryRecord(in_time=None, date="2026-10-14", status="Absent", correction_status="Pending"),
        SummaryRecord(
            in_time=to_epoch_ms(datetime(2026, 10, 15, 9, 0)),
            out_time=to_epoch_ms(datetime(2026, 10, 15, 17, 30)),
            date="2026-10-15",
            working_hours="8.5",
            correction_status="Approved",
        ),
        SummaryRecord(in_time=to_epoch_ms(datetime(2026, 10, 16, 9, 0)), date="2026-10-16", correction_status="Rejected"),
        SummaryRecord(in_time=to_epoch_ms(datetime(2026, 10, 17, 9, 0)), date="2026-10-17"),
    ]

    rows = SummaryService(FakeOracle(records)).history(date(2026, 10, 14), date(2026, 10, 17))

    assert [r.working_hours for r in rows] == ["-", "8.5", "-", "-"]
    assert [r.correction_status for r in rows] == ["Pending", "Approved", "Rejected", "-"]
    assert [r.can_request_correction for r in rows] == [False, False, True, True]
