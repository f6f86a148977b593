from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ProofFile:
    filename: str
    content: bytes
    mime_type: str = "image/jpeg"


@dataclass(frozen=True)
class CorrectionDraft:
    """Server-prepared correction form; the token is required to submit it."""

    employee_id: str
    token: Optional[str]
    details: dict = field(default_factory=dict, compare=False)
