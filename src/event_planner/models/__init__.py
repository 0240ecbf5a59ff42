"""Domain models for the event planner."""

from event_planner.models.location import GeocodedLocation
from event_planner.models.event import (
    Event,
    EventCreate,
    EventUpdate,
    RsvpStatus,
)

__all__ = [
    # Location
    "GeocodedLocation",
    # Event
    "Event",
    "EventCreate",
    "EventUpdate",
    "RsvpStatus",
]
