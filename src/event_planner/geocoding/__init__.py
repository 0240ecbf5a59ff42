"""Address geocoding."""

from event_planner.geocoding.resolver import AddressResolver, GeocodingError

__all__ = [
    "AddressResolver",
    "GeocodingError",
]
