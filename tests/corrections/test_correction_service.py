from __future__ import annotations

import pytest

from src.attendance_session.attendance_session.core.exceptions import CorrectionAlreadyRequested, RequestError, ValidationError
from src.attendance_session.attendance_session.corrections.model import CorrectionDraft, ProofFile
from src.attendance_session.attendance_session.corrections.service import CorrectionService


class FakeOracle:
    def __init__(self, *, token="tok-1", error: RequestError | None = None):
        self.token = token
        self.error = error
        self.submitted = []

    def fetch_correction_request(self, employee_id):
        return CorrectionDraft(employee_id=employee_id, token=self.token, details={"date": "2026-10-18"})

    def submit_correction(self, *, token, remark, proof=None):
        if self.error:
            raise self.error
        self.submitted.append((token, remark, proof))
        return "Correction requested successfully!"


def test_load_then_submit():
    oracle = FakeOracle()
    service = CorrectionService(oracle)

    draft = service.load("42")
    message = service.submit(draft, "  Forgot to check out  ", ProofFile("p.jpg", b"data"))

    assert message == "Correction requested successfully!"
    assert oracle.submitted == [("tok-1", "Forgot to check out", ProofFile("p.jpg", b"data"))]


def test_remark_is_required():
    service = CorrectionService(FakeOracle())
    with pytest.raises(ValidationError):
        service.submit(service.load("42"), "   ")


def test_token_is_required():
    service = CorrectionService(FakeOracle(token=None))
    with pytest.raises(ValidationError, match="Missing correction token"):
        service.submit(service.load("42"), "remark")


def test_already_requested_is_reported_distinctly():
    oracle = FakeOracle(error=RequestError("Correction already requested for 2026-10-18", status_code=400))
    service = CorrectionService(oracle)

    with pytest.raises(CorrectionAlreadyRequested):
        service.submit(service.load("42"), "remark")


def test_other_request_errors_propagate():
    service = CorrectionService(FakeOracle(error=RequestError("Server error")))

    with pytest.raises(RequestError, match="Server error"):
        service.submit(service.load("42"), "remark")
