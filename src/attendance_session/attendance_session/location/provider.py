from __future__ import annotations

import logging
from typing import Protocol

from ..core.exceptions import LocationUnavailable, PermissionDenied
from .model import Location

logger = logging.getLogger(__name__)


class LocationProvider(Protocol):
    """Device geolocation, implemented by the platform shell."""

    def request_permission(self) -> bool:
        raise NotImplementedError

    def current_position(self) -> Location:
        raise NotImplementedError


def capture_location(provider: LocationProvider) -> Location:
    """Ask for permission, then read one high-accuracy fix."""
    if not provider.request_permission():
        raise PermissionDenied("Location access is required to mark attendance.")

    try:
        location = provider.current_position()
    except (PermissionDenied, LocationUnavailable):
        raise
    except Exception as e:
        logger.warning(f"Location capture failed: {e}")
        raise LocationUnavailable("Could not fetch location. Please try again.") from e

    if location is None:
        raise LocationUnavailable("Could not fetch location. Please try again.")
    return location
