from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..common.datetime_utils import parse_server_timestamp


@dataclass(frozen=True)
class CheckInResult:
    success: bool
    server_timestamp: Optional[int] = None
    message: Optional[str] = None


@dataclass(frozen=True)
class CheckOutResult:
    success: bool
    message: Optional[str] = None


@dataclass(frozen=True)
class SummaryRecord:
    """One day of the remote attendance summary (timestamps in epoch ms)."""

    in_time: Optional[int]
    out_time: Optional[int] = None
    date: Optional[str] = None
    status: Optional[str] = None
    working_hours: Optional[str] = None
    correction_status: Optional[str] = None
    raw: dict = field(default_factory=dict, compare=False, repr=False)

    @property
    def is_open(self) -> bool:
        return self.in_time is not None and self.out_time is None

    @property
    def is_closed(self) -> bool:
        return self.in_time is not None and self.out_time is not None

    @classmethod
    def from_payload(cls, payload: dict) -> "SummaryRecord":
        return cls(
            in_time=parse_server_timestamp(payload.get("inTime")),
            out_time=parse_server_timestamp(payload.get("outTime")),
            date=_as_text(payload.get("date")),
            status=_as_text(payload.get("status")),
            working_hours=_as_text(payload.get("workingHours")),
            correction_status=_as_text(payload.get("correctionStatus")),
            raw=dict(payload),
        )


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)
