from __future__ import annotations

import logging

from flask import jsonify

from ..core.exceptions import (
    ActionInProgress,
    ConfirmationRequired,
    CorrectionAlreadyRequested,
    DomainError,
    LocationUnavailable,
    PermissionDenied,
    RequestError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (CorrectionAlreadyRequested, 409),
    (RequestError, 502),
    (PermissionDenied, 403),
    (LocationUnavailable, 422),
    (ActionInProgress, 409),
    (ConfirmationRequired, 428),
)


def ok(payload: dict | None = None, status: int = 200):
    body = {"success": True}
    body.update(payload or {})
    return jsonify(body), status


def error_response(e: DomainError):
    status = 400
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(e, error_type):
            status = code
            break
    if status >= 500:
        logger.warning(f"Upstream failure: {e}")
    return jsonify({"success": False, "error": type(e).__name__, "message": str(e)}), status
