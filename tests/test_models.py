"""Tests for domain models."""

import uuid

import pytest

from event_planner.models.event import Event, EventCreate, EventUpdate, RsvpStatus
from event_planner.models.location import GeocodedLocation


class TestGeocodedLocation:
    """Tests for the GeocodedLocation model."""

    def test_valid_location(self):
        location = GeocodedLocation(latitude=37.42, longitude=-122.08)
        assert location.latitude == 37.42
        assert location.longitude == -122.08

    def test_invalid_latitude(self):
        with pytest.raises(ValueError):
            GeocodedLocation(latitude=91, longitude=0)

    def test_invalid_longitude(self):
        with pytest.raises(ValueError):
            GeocodedLocation(latitude=0, longitude=-181)

    def test_from_geometry(self):
        location = GeocodedLocation.from_geometry({"location": {"lat": -33.8688, "lng": 151.2093}})
        assert location.to_tuple() == (-33.8688, 151.2093)

    def test_str(self):
        assert str(GeocodedLocation(latitude=1.5, longitude=-2.25)) == "1.5,-2.25"


class TestEvent:
    """Tests for the Event model."""

    def test_from_stored_document(self):
        """Test that stored string ids become UUID sets."""
        host, guest = uuid.uuid4(), uuid.uuid4()
        event = Event.model_validate(
            {
                "id": uuid.uuid4(),
                "host": host,
                "title": "Game night",
                "topics": ["games", "snacks"],
                "interested": [str(guest)],
                "attending": [],
            }
        )

        assert event.topics == {"games", "snacks"}
        assert event.interested == {guest}
        assert event.is_host(host)
        assert not event.is_host(guest)

    def test_rsvp_status(self):
        a, b, c = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()
        event = Event(id=uuid.uuid4(), host=uuid.uuid4(), title="x", interested={a}, attending={b})

        assert event.rsvp_status(a) == RsvpStatus.INTERESTED
        assert event.rsvp_status(b) == RsvpStatus.ATTENDING
        assert event.rsvp_status(c) == RsvpStatus.NONE

    def test_spots_left_never_negative(self):
        event = Event(
            id=uuid.uuid4(),
            host=uuid.uuid4(),
            title="Tiny",
            capacity=1,
            attending={uuid.uuid4(), uuid.uuid4()},
        )
        assert event.spots_left == 0


class TestEventCreate:
    """Tests for create-time validation."""

    def test_defaults(self):
        fields = EventCreate(host=uuid.uuid4(), title="Meetup")
        assert fields.age_req == 0
        assert fields.capacity == 0
        assert fields.location == ""

    def test_empty_title_rejected(self):
        with pytest.raises(ValueError):
            EventCreate(host=uuid.uuid4(), title="")

    def test_negative_age_rejected(self):
        with pytest.raises(ValueError):
            EventCreate(host=uuid.uuid4(), title="Meetup", age_req=-1)


class TestEventUpdate:
    """Tests for partial update validation."""

    def test_only_set_fields_dumped(self):
        update = EventUpdate(title="New")
        assert update.model_dump(exclude_unset=True, exclude_none=True) == {"title": "New"}

    def test_host_not_accepted(self):
        with pytest.raises(ValueError):
            EventUpdate.model_validate({"host": str(uuid.uuid4())})

    def test_tags_deduplicated(self):
        update = EventUpdate(amenities=["parking", "parking", "wifi"])
        assert update.amenities == {"parking", "wifi"}
