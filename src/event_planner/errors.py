"""Domain errors raised by the event planner data layer.

Errors propagate unchanged to the caller. The HTTP layer (not part of this
package) is responsible for mapping them to responses:

| Error | Meaning |
|-------|---------|
| NotFoundError | Event, RSVP state or geocoding result does not exist |
| NotAllowedError | Forbidden update, host acting as attendee, duplicate/absent tag |
| EventHostNotMatchError | User is not the host of the event |
"""

from __future__ import annotations

import uuid


class EventPlannerError(Exception):
    """Base exception for event planner errors."""


class NotFoundError(EventPlannerError):
    """Raised when a referenced entity or state does not exist."""


class NotAllowedError(EventPlannerError):
    """Raised when an operation is not permitted."""


class EventHostNotMatchError(NotAllowedError):
    """Raised when a user is not the host of an event."""

    def __init__(self, host: uuid.UUID, event_id: uuid.UUID):
        super().__init__(f"{host} is not the host of Event {event_id}!")
        self.host = host
        self.event_id = event_id
