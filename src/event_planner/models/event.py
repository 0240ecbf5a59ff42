"""Event models.

`Event` is the value returned by the event store. It is always a copy of
the stored document; mutating it does not touch storage.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class RsvpStatus(str, Enum):
    """A user's relationship to an event."""

    INTERESTED = "interested"
    ATTENDING = "attending"
    NONE = "none"


class EventCreate(BaseModel):
    """Scalar fields accepted when creating an event."""

    host: uuid.UUID
    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    location: str = Field(default="", max_length=512, description="Free-text address")
    age_req: int = Field(default=0, ge=0, description="Minimum attendee age")
    capacity: int = Field(default=0, ge=0, description="Maximum number of attendees")


class EventUpdate(BaseModel):
    """Partial fields accepted by the generic update path.

    `host` and the RSVP sets are absent: the host is immutable
    and RSVP state only changes through the RSVP transitions.
    """

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    location: str | None = Field(default=None, max_length=512)
    age_req: int | None = Field(default=None, ge=0)
    capacity: int | None = Field(default=None, ge=0)
    topics: set[str] | None = None
    amenities: set[str] | None = None
    accommodations: set[str] | None = None


class Event(BaseModel):
    """A social event and its RSVP state."""

    id: uuid.UUID
    host: uuid.UUID
    title: str
    description: str = ""
    location: str = ""
    age_req: int = Field(default=0, ge=0)
    capacity: int = Field(default=0, ge=0)

    # Tags
    topics: set[str] = Field(default_factory=set)
    amenities: set[str] = Field(default_factory=set)
    accommodations: set[str] = Field(default_factory=set)

    # RSVP state; a user is in at most one of these
    interested: set[uuid.UUID] = Field(default_factory=set)
    attending: set[uuid.UUID] = Field(default_factory=set)

    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_host(self, user: uuid.UUID) -> bool:
        """Check if the user organizes this event."""
        return self.host == user

    def rsvp_status(self, user: uuid.UUID) -> RsvpStatus:
        """Get the user's RSVP state for this event."""
        if user in self.attending:
            return RsvpStatus.ATTENDING
        if user in self.interested:
            return RsvpStatus.INTERESTED
        return RsvpStatus.NONE

    @property
    def spots_left(self) -> int:
        """Remaining capacity, never negative."""
        return max(self.capacity - len(self.attending), 0)
