from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.validators import require_coordinate


@dataclass(frozen=True)
class Location:
    latitude: float
    longitude: float
    accuracy: Optional[float] = None

    @classmethod
    def from_payload(cls, payload: dict) -> "Location":
        accuracy = payload.get("accuracy")
        return cls(
            latitude=require_coordinate(payload.get("latitude"), "latitude", 90),
            longitude=require_coordinate(payload.get("longitude"), "longitude", 180),
            accuracy=float(accuracy) if accuracy is not None else None,
        )

    def as_payload(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude, "accuracy": self.accuracy}
