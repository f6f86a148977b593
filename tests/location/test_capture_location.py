import pytest

from src.attendance_session.attendance_session.core.exceptions import LocationUnavailable, PermissionDenied, ValidationError
from src.attendance_session.attendance_session.location.model import Location
from src.attendance_session.attendance_session.location.provider import capture_location


class FakeProvider:
    def __init__(self, *, granted=True, position=None, error=None):
        self.granted = granted
        self.position = position
        self.error = error

    def request_permission(self):
        return self.granted

    def current_position(self):
        if self.error:
            raise self.error
        return self.position


def test_returns_position_when_permitted():
    here = Location(1.0, 2.0, 3.0)
    assert capture_location(FakeProvider(position=here)) == here


def test_refused_permission():
    with pytest.raises(PermissionDenied):
        capture_location(FakeProvider(granted=False))


def test_capture_failure_is_location_unavailable():
    with pytest.raises(LocationUnavailable):
        capture_location(FakeProvider(error=TimeoutError("gps timeout")))

    with pytest.raises(LocationUnavailable):
        capture_location(FakeProvider(position=None))


def test_location_payload_validation():
    loc = Location.from_payload({"latitude": "21.5", "longitude": 105, "accuracy": 8})
    assert loc == Location(21.5, 105.0, 8.0)

    with pytest.raises(ValidationError):
        Location.from_payload({"latitude": 91, "longitude": 0})
