"""Event concept: events, RSVP state, and tags.

## RSVP State

A person's relationship to an event is one of:

| State | interested | attending |
|-------|-----------|-----------|
| interested | member | - |
| attending | - | member |
| neither | - | - |

Transitions (the host never holds an RSVP state for their own event):

- indicate_interest: any state -> interested
- indicate_attendance: any state -> attending
- remove_interest: interested -> neither
- remove_attendance: attending -> neither

## Persistence

Each mutator reads the event, computes the new set(s), and overwrites the
affected fields with one `update_one`. There is no locking: two concurrent
mutations of the same event may race and the later write wins.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Iterable, Mapping

from pydantic import TypeAdapter

from event_planner.database.collection import Document, DocumentCollection, Filter
from event_planner.errors import EventHostNotMatchError, NotAllowedError, NotFoundError
from event_planner.models.event import Event, EventCreate, EventUpdate

logger = logging.getLogger(__name__)

# Fields the generic update path may never touch
PROHIBITED_UPDATES = ("host", "id", "interested", "attending", "created_at", "updated_at")

# Tag fields and the name used in error messages
TAG_FIELDS: dict[str, str] = {
    "topics": "Topic",
    "amenities": "Amenity",
    "accommodations": "Accommodation",
}


_ID_ADAPTER = TypeAdapter(uuid.UUID)


def _as_id(value: uuid.UUID | str) -> uuid.UUID:
    """Normalize a user or event id given as a UUID or its string form."""
    return _ID_ADAPTER.validate_python(value)


def _dump_tags(values: Iterable[str]) -> list[str]:
    return sorted(values)


def _dump_people(values: Iterable[uuid.UUID]) -> list[str]:
    return sorted(str(value) for value in values)


class EventStore:
    """Data access for events.

    The store is the only owner of event state. Every read returns a fresh
    `Event` copy.

    Example:
        ```python
        store = EventStore(DocumentCollection(sessions, EventRecord))

        event = await store.create(host, "Board games", "Bring snacks", "Cafe", 18, 12)
        await store.indicate_interest(guest, event.id)
        await store.add_topic(event.id, "games")
        ```
    """

    def __init__(self, events: DocumentCollection):
        self.events = events

    # =========================================================================
    # CRUD
    # =========================================================================

    async def create(
        self,
        host: uuid.UUID,
        title: str,
        description: str,
        location: str,
        age_req: int,
        capacity: int,
    ) -> Event:
        """Create an event with no tags and no RSVPs.

        Raises:
            pydantic.ValidationError: If a scalar field is invalid
        """
        fields = EventCreate(
            host=host,
            title=title,
            description=description,
            location=location,
            age_req=age_req,
            capacity=capacity,
        )
        event_id = await self.events.create_one(
            {
                **fields.model_dump(),
                "topics": [],
                "amenities": [],
                "accommodations": [],
                "interested": [],
                "attending": [],
            }
        )
        logger.info(f"Event {event_id} created by {host}")
        return await self.get(event_id)

    async def get(self, event_id: uuid.UUID) -> Event:
        """Get a single event.

        Raises:
            NotFoundError: If the event does not exist
        """
        return Event.model_validate(await self._read(event_id))

    async def get_many(self, filter: Filter | None = None) -> list[Event]:
        """Get events matching the filter, most recently updated first."""
        docs = await self.events.read_many(filter, sort={"updated_at": -1})
        return [Event.model_validate(doc) for doc in docs]

    async def get_by_host(self, host: uuid.UUID) -> list[Event]:
        """Get events organized by the host, most recently updated first."""
        return await self.get_many({"host": _as_id(host)})

    async def update(self, event_id: uuid.UUID, fields: Mapping[str, Any]) -> Event:
        """Merge the given fields into an event.

        Raises:
            NotAllowedError: If a prohibited or unknown field is included, or a value is None
            NotFoundError: If the event does not exist
            pydantic.ValidationError: If a value is invalid
        """
        self._sanitize_update(fields)
        update = EventUpdate.model_validate(dict(fields)).model_dump(exclude_unset=True)
        for key in TAG_FIELDS:
            if key in update:
                update[key] = _dump_tags(update[key])

        await self._read(event_id)
        if update:
            await self._write(event_id, update)
        return await self.get(event_id)

    async def delete(self, event_id: uuid.UUID) -> None:
        """Delete an event.

        Raises:
            NotFoundError: If the event does not exist
        """
        if not await self.events.delete_one({"id": _as_id(event_id)}):
            raise NotFoundError(f"Event {event_id} does not exist!")
        logger.info(f"Event {event_id} deleted")

    # =========================================================================
    # Preconditions
    # =========================================================================

    async def assert_is_host(self, user: uuid.UUID, event_id: uuid.UUID) -> None:
        user, event_id = _as_id(user), _as_id(event_id)
        event = await self.get(event_id)
        if not event.is_host(user):
            raise EventHostNotMatchError(user, event_id)

    async def assert_is_not_host(self, user: uuid.UUID, event_id: uuid.UUID) -> None:
        user, event_id = _as_id(user), _as_id(event_id)
        event = await self.get(event_id)
        if event.is_host(user):
            raise NotAllowedError("Person is a host.")

    async def assert_is_interested(self, person: uuid.UUID, event_id: uuid.UUID) -> None:
        person, event_id = _as_id(person), _as_id(event_id)
        event = await self.get(event_id)
        if person not in event.interested:
            raise NotFoundError("Person not interested in event.")

    async def assert_is_not_interested(self, person: uuid.UUID, event_id: uuid.UUID) -> None:
        person, event_id = _as_id(person), _as_id(event_id)
        event = await self.get(event_id)
        if person in event.interested:
            raise NotFoundError("Person already interested in event.")

    async def assert_is_attending(self, person: uuid.UUID, event_id: uuid.UUID) -> None:
        person, event_id = _as_id(person), _as_id(event_id)
        event = await self.get(event_id)
        if person not in event.attending:
            raise NotFoundError("Person not attending event.")

    async def assert_is_not_attending(self, person: uuid.UUID, event_id: uuid.UUID) -> None:
        person, event_id = _as_id(person), _as_id(event_id)
        event = await self.get(event_id)
        if person in event.attending:
            raise NotFoundError("Person is already attending event.")

    # =========================================================================
    # RSVP transitions
    # =========================================================================

    async def indicate_interest(self, person: uuid.UUID, event_id: uuid.UUID) -> Event:
        """Mark a person as interested, clearing any attendance."""
        person, event_id = _as_id(person), _as_id(event_id)
        event = await self._load_for_rsvp(person, event_id)

        event.interested.add(person)
        event.attending.discard(person)

        await self._write_rsvp(event)
        logger.debug(f"{person} is interested in event {event_id}")
        return await self.get(event_id)

    async def remove_interest(self, person: uuid.UUID, event_id: uuid.UUID) -> Event:
        """Clear a person's interest (and any attendance).

        Raises:
            NotFoundError: If the person is not interested
        """
        person, event_id = _as_id(person), _as_id(event_id)
        event = await self._load_for_rsvp(person, event_id)
        if person not in event.interested:
            raise NotFoundError("Person not interested in event.")

        event.interested.discard(person)
        event.attending.discard(person)

        await self._write_rsvp(event)
        logger.debug(f"{person} removed interest in event {event_id}")
        return await self.get(event_id)

    async def indicate_attendance(self, person: uuid.UUID, event_id: uuid.UUID) -> Event:
        """Mark a person as attending, clearing any interest."""
        person, event_id = _as_id(person), _as_id(event_id)
        event = await self._load_for_rsvp(person, event_id)

        event.attending.add(person)
        event.interested.discard(person)

        await self._write_rsvp(event)
        logger.debug(f"{person} is attending event {event_id}")
        return await self.get(event_id)

    async def remove_attendance(self, person: uuid.UUID, event_id: uuid.UUID) -> Event:
        """Clear a person's attendance (and any interest).

        Raises:
            NotFoundError: If the person is not attending
        """
        person, event_id = _as_id(person), _as_id(event_id)
        event = await self._load_for_rsvp(person, event_id)
        if person not in event.attending:
            raise NotFoundError("Person not attending event.")

        event.attending.discard(person)
        event.interested.discard(person)

        await self._write_rsvp(event)
        logger.debug(f"{person} removed attendance for event {event_id}")
        return await self.get(event_id)

    # =========================================================================
    # Tags
    # =========================================================================

    async def add_topic(self, event_id: uuid.UUID, topic: str) -> Event:
        return await self._add_tag(event_id, "topics", topic)

    async def remove_topic(self, event_id: uuid.UUID, topic: str) -> Event:
        return await self._remove_tag(event_id, "topics", topic)

    async def add_amenity(self, event_id: uuid.UUID, amenity: str) -> Event:
        return await self._add_tag(event_id, "amenities", amenity)

    async def remove_amenity(self, event_id: uuid.UUID, amenity: str) -> Event:
        return await self._remove_tag(event_id, "amenities", amenity)

    async def add_accommodation(self, event_id: uuid.UUID, accommodation: str) -> Event:
        return await self._add_tag(event_id, "accommodations", accommodation)

    async def remove_accommodation(self, event_id: uuid.UUID, accommodation: str) -> Event:
        return await self._remove_tag(event_id, "accommodations", accommodation)

    async def _add_tag(self, event_id: uuid.UUID, field: str, tag: str) -> Event:
        event = await self.get(event_id)
        tags: set[str] = getattr(event, field)
        if tag in tags:
            raise NotAllowedError(f"{TAG_FIELDS[field]} already exists.")

        tags.add(tag)
        await self._write(event_id, {field: _dump_tags(tags)})
        logger.debug(f"Added {field} {tag!r} to event {event_id}")
        return await self.get(event_id)

    async def _remove_tag(self, event_id: uuid.UUID, field: str, tag: str) -> Event:
        event = await self.get(event_id)
        tags: set[str] = getattr(event, field)
        if tag not in tags:
            raise NotAllowedError(f"{TAG_FIELDS[field]} does not exist.")

        tags.discard(tag)
        await self._write(event_id, {field: _dump_tags(tags)})
        logger.debug(f"Removed {field} {tag!r} from event {event_id}")
        return await self.get(event_id)

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _read(self, event_id: uuid.UUID) -> Document:
        doc = await self.events.read_one({"id": _as_id(event_id)})
        if doc is None:
            raise NotFoundError(f"Event {event_id} does not exist!")
        return doc

    async def _write(self, event_id: uuid.UUID, fields: Mapping[str, Any]) -> None:
        if not await self.events.update_one({"id": _as_id(event_id)}, fields):
            # Deleted between read and write
            raise NotFoundError(f"Event {event_id} does not exist!")

    async def _load_for_rsvp(self, person: uuid.UUID, event_id: uuid.UUID) -> Event:
        event = await self.get(event_id)
        if event.is_host(person):
            raise NotAllowedError("Person is a host.")
        return event

    async def _write_rsvp(self, event: Event) -> None:
        await self._write(
            event.id,
            {
                "interested": _dump_people(event.interested),
                "attending": _dump_people(event.attending),
            },
        )

    def _sanitize_update(self, fields: Mapping[str, Any]) -> None:
        for key in fields:
            if key in PROHIBITED_UPDATES:
                raise NotAllowedError(f"Cannot update '{key}' field!")
            if key not in EventUpdate.model_fields:
                raise NotAllowedError(f"Unknown event field '{key}'!")
            if fields[key] is None:
                raise NotAllowedError(f"Cannot clear '{key}' field!")
