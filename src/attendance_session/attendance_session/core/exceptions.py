from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or an action is not allowed in the current state."""


class PermissionDenied(DomainError):
    """Raised when location access was refused."""


class LocationUnavailable(DomainError):
    """Raised when the device position could not be captured."""


class ConfirmationRequired(DomainError):
    """Raised when an irrevocable action was requested without user confirmation."""


class ActionInProgress(DomainError):
    """Raised when a check-in/check-out is attempted while another one is in flight."""


class RequestError(DomainError):
    """Raised when the attendance service could not complete a request."""

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class PersistenceError(DomainError):
    """Raised by storage backends when a read or write fails."""


class CorrectionAlreadyRequested(RequestError):
    """Raised when a correction was already requested for the same day."""
