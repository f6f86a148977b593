from __future__ import annotations

import logging
from typing import Optional

from ..common.validators import require_non_empty, require_user_id
from ..core.exceptions import CorrectionAlreadyRequested, RequestError, ValidationError
from ..oracle.client import AttendanceOracle
from .model import CorrectionDraft, ProofFile

logger = logging.getLogger(__name__)


class CorrectionService:
    """Use case: ask HR to regularize a day's attendance."""

    def __init__(self, oracle: AttendanceOracle):
        self._oracle = oracle

    def load(self, employee_id: str) -> CorrectionDraft:
        employee_id = require_user_id(employee_id)
        return self._oracle.fetch_correction_request(employee_id)

    def submit(self, draft: CorrectionDraft, remark: str, proof: Optional[ProofFile] = None) -> str:
        remark = require_non_empty(remark, "Correction remark")
        if not draft.token:
            raise ValidationError("Missing correction token. Please reload the page.")
        if proof is not None and not proof.content:
            raise ValidationError("Proof file is empty")

        try:
            return self._oracle.submit_correction(token=draft.token, remark=remark, proof=proof)
        except RequestError as e:
            if "already requested" in e.message.lower():
                raise CorrectionAlreadyRequested(
                    "Correction already requested for this date.", status_code=e.status_code
                ) from e
            raise
