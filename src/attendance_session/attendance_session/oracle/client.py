from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..corrections.model import CorrectionDraft, ProofFile
from ..location.model import Location
from .model import CheckInResult, CheckOutResult, SummaryRecord


class AttendanceOracle(Protocol):
    """Remote attendance service. Every operation raises RequestError on failure."""

    def check_in(self, location: Location) -> CheckInResult:
        raise NotImplementedError

    def check_out(self, location: Location) -> CheckOutResult:
        raise NotImplementedError

    def fetch_today_summary(self) -> Sequence[SummaryRecord]:
        raise NotImplementedError

    def fetch_summary(self, from_date: date, to_date: date) -> Sequence[SummaryRecord]:
        raise NotImplementedError

    def fetch_correction_request(self, employee_id: str) -> CorrectionDraft:
        raise NotImplementedError

    def submit_correction(self, *, token: str, remark: str, proof: Optional[ProofFile] = None) -> str:
        raise NotImplementedError
