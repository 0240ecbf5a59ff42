"""Pytest fixtures for event planner tests.

This module provides test fixtures that ensure:
1. No external API calls are made (geocoding provider)
2. Storage runs against an in-memory SQLite database
3. Isolated test environment with controlled configuration
"""

import os
import uuid
from typing import Any

import httpx
import pytest
import pytest_asyncio

# Set test environment BEFORE importing application modules
# This ensures no real services are contacted during test collection
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("GOOGLE_API_KEY", "test-google-api-key")

from event_planner.concepts.event import EventStore
from event_planner.database import (
    DocumentCollection,
    EventRecord,
    create_engine,
    create_session_factory,
    create_tables,
    drop_tables,
)
from event_planner.models.event import Event


# =============================================================================
# Test Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Reset settings cache before each test to ensure clean state."""
    from event_planner.config import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Storage Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def engine():
    """In-memory SQLite engine with tables created."""
    from event_planner.config import get_settings_uncached

    settings = get_settings_uncached()
    settings.database_url = "sqlite+aiosqlite:///:memory:"
    engine = create_engine(settings)
    await create_tables(engine)
    yield engine
    await drop_tables(engine)
    await engine.dispose()


@pytest.fixture
def collection(engine) -> DocumentCollection:
    """Event document collection on the test engine."""
    return DocumentCollection(create_session_factory(engine), EventRecord)


@pytest.fixture
def store(collection: DocumentCollection) -> EventStore:
    """Event store on the test collection."""
    return EventStore(collection)


@pytest.fixture
def host() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def person() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def other_person() -> uuid.UUID:
    return uuid.uuid4()


@pytest_asyncio.fixture
async def event(store: EventStore, host: uuid.UUID) -> Event:
    """A stored event with no tags and no RSVPs."""
    return await store.create(
        host,
        "Summer Picnic",
        "Bring a blanket and something to share",
        "Prospect Park, Brooklyn",
        18,
        50,
    )


# =============================================================================
# Geocoding Fixtures
# =============================================================================


def _geocode_payload(*locations: tuple[float, float]) -> dict[str, Any]:
    return {
        "results": [
            {
                "formatted_address": f"Candidate {i}",
                "geometry": {"location": {"lat": lat, "lng": lng}},
            }
            for i, (lat, lng) in enumerate(locations)
        ],
        "status": "OK" if locations else "ZERO_RESULTS",
    }


@pytest.fixture
def geocode_payload():
    """Build a provider response with one result per (lat, lng)."""
    return _geocode_payload


@pytest.fixture
def recorded_requests() -> list[httpx.Request]:
    """Requests seen by the mock geocoding transport."""
    return []


@pytest.fixture
def geocoding_client(recorded_requests: list[httpx.Request]):
    """Factory for an httpx client answering every request with a fixed response."""

    def make(payload: dict[str, Any] | None = None, status_code: int = 200) -> httpx.AsyncClient:
        def handler(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            if status_code >= 400:
                return httpx.Response(status_code, text="Request denied")
            return httpx.Response(status_code, json=payload)

        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return make
