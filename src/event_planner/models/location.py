"""Location models for address geocoding."""

from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, Field


class GeocodedLocation(BaseModel):
    """Coordinates resolved from a free-text address.

    Transient value produced per lookup; never persisted.

    Latitude:
        - Negative (-) = south of equator
        - Positive (+) = north of equator
        - Range: -90 to +90

    Longitude:
        - Negative (-) = west of prime meridian
        - Positive (+) = east of prime meridian
        - Range: -180 to +180
    """

    latitude: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")

    @classmethod
    def from_geometry(cls, geometry: dict[str, Any]) -> Self:
        """Build from a provider geometry block: {"location": {"lat": .., "lng": ..}}."""
        location = geometry["location"]
        return cls(latitude=location["lat"], longitude=location["lng"])

    def __str__(self) -> str:
        return f"{self.latitude},{self.longitude}"

    def to_tuple(self) -> tuple[float, float]:
        """Return coordinates as (latitude, longitude) tuple."""
        return (self.latitude, self.longitude)
