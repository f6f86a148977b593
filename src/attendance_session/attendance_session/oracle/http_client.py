from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, List, Optional, Sequence

import httpx

from ..common.datetime_utils import parse_server_timestamp
from ..core.exceptions import RequestError
from ..corrections.model import CorrectionDraft, ProofFile
from ..location.model import Location
from .client import AttendanceOracle
from .model import CheckInResult, CheckOutResult, SummaryRecord

logger = logging.getLogger(__name__)


class HttpAttendanceOracle(AttendanceOracle):
    """HTTP+JSON client for the attendance service.

    Retries, token refresh and the like belong to the transport; here every
    failure is final for the attempt and raised as RequestError.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        token: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
        today: Callable[[], date] = date.today,
    ):
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            headers=headers,
            transport=transport,
        )
        self._today = today

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpAttendanceOracle":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # --- Employee endpoints ---

    def check_in(self, location: Location) -> CheckInResult:
        data = self._request("POST", "/attendance/geo-checkin", json=location.as_payload())
        self._require_success(data, "Check-in failed")
        stamp = None
        if isinstance(data, dict):
            stamp = parse_server_timestamp(data.get("checkInTime") or data.get("inTime") or data.get("timestamp"))
        return CheckInResult(success=True, server_timestamp=stamp, message=_message_of(data))

    def check_out(self, location: Location) -> CheckOutResult:
        data = self._request("POST", "/attendance/geo-checkout", json=location.as_payload())
        self._require_success(data, "Check-out failed")
        return CheckOutResult(success=True, message=_message_of(data))

    def fetch_today_summary(self) -> Sequence[SummaryRecord]:
        today = self._today()
        return self.fetch_summary(today, today)

    def fetch_summary(self, from_date: date, to_date: date) -> Sequence[SummaryRecord]:
        data = self._request(
            "GET",
            "/Attendance/my-summary",
            params={"fromDate": from_date.isoformat(), "toDate": to_date.isoformat()},
        )
        return _records_of(data)

    def fetch_correction_request(self, employee_id: str) -> CorrectionDraft:
        data = self._request("GET", "/Attendance/correction-request", params={"employeeId": str(employee_id)})
        details = data if isinstance(data, dict) else {}
        return CorrectionDraft(employee_id=str(employee_id), token=details.get("token") or None, details=details)

    def submit_correction(self, *, token: str, remark: str, proof: Optional[ProofFile] = None) -> str:
        files = None
        if proof is not None:
            files = {"proofFile": (proof.filename, proof.content, proof.mime_type)}
        data = self._request(
            "POST",
            "/Attendance/correction-request",
            data={"token": token, "correctionRemark": remark},
            files=files,
        )
        return _message_of(data) or "Correction requested successfully!"

    # --- HR endpoints ---

    def fetch_employee_summary(self, employee_id: str) -> Sequence[SummaryRecord]:
        data = self._request("GET", f"/Attendance/employee-summary/{employee_id}")
        return _records_of(data)

    def list_correction_requests(self) -> List[dict]:
        data = self._request("GET", "/Attendance/correction-requests")
        if isinstance(data, dict):
            data = data.get("requests") or data.get("records")
        return [dict(r) for r in _as_list(data, "correction requests") if isinstance(r, dict)]

    # --- plumbing ---

    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            logger.error(f"{method} {path} timed out")
            raise RequestError("Request timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} connection error: {e}")
            raise RequestError("Connection failed") from e

        data = _json_or_none(response)
        if response.is_error:
            message = _message_of(data) or f"Request failed ({response.status_code})"
            logger.error(f"{method} {path} failed: {response.status_code} - {message}")
            raise RequestError(message, status_code=response.status_code)
        return data

    @staticmethod
    def _require_success(data: Any, fallback: str) -> None:
        if isinstance(data, dict) and data.get("success") is False:
            raise RequestError(_message_of(data) or fallback)


def _json_or_none(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def _message_of(data: Any) -> Optional[str]:
    if isinstance(data, dict):
        message = data.get("message")
        if message:
            return str(message)
    return None


def _as_list(data: Any, what: str) -> list:
    if data is None:
        return []
    if not isinstance(data, list):
        logger.error(f"Malformed {what} response: expected a list, got {type(data).__name__}")
        raise RequestError(f"Malformed {what} response")
    return data


def _records_of(data: Any) -> List[SummaryRecord]:
    if isinstance(data, dict):
        data = data.get("records")
    return [SummaryRecord.from_payload(r) for r in _as_list(data, "summary") if isinstance(r, dict)]
