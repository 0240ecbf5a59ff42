"""Database models for the event planner.

## Schema Overview

```
events
├── host            (user UUID, indexed)
├── scalar fields   (title, description, location, age_req, capacity)
├── tag arrays      (topics, amenities, accommodations) - JSON
└── RSVP arrays     (interested, attending) - JSON of user UUID strings
```

Arrays are JSONB on PostgreSQL and JSON elsewhere. Users live in another
service; `host` and the RSVP arrays hold their ids without foreign keys.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, Index, Integer, String, Text, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all database models."""

    type_annotation_map = {
        list[str]: JSON().with_variant(JSONB(), "postgresql"),
        dict[str, Any]: JSON().with_variant(JSONB(), "postgresql"),
    }


class EventRecord(Base):
    """Stored event document.

    Timestamps are set application-side so that ordering by `updated_at`
    has sub-second resolution on every backend.
    """

    __tablename__ = "events"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    host: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="")
    location: Mapped[str] = mapped_column(String(512), default="")
    age_req: Mapped[int] = mapped_column(Integer, default=0)
    capacity: Mapped[int] = mapped_column(Integer, default=0)

    # Tags
    topics: Mapped[list[str]] = mapped_column(default=list)
    amenities: Mapped[list[str]] = mapped_column(default=list)
    accommodations: Mapped[list[str]] = mapped_column(default=list)

    # RSVP state
    interested: Mapped[list[str]] = mapped_column(default=list)
    attending: Mapped[list[str]] = mapped_column(default=list)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    __table_args__ = (
        Index("ix_events_host", "host"),
        Index("ix_events_updated_at", "updated_at"),
    )

    def __repr__(self) -> str:
        return f"<EventRecord {self.id} {self.title!r}>"
