"""Address geocoding via the Google Maps Geocoding API.

## API Summary
Source: https://developers.google.com/maps/documentation/geocoding/requests-geocoding

## Endpoint
- URL: https://maps.googleapis.com/maps/api/geocode/json?address={address}&key={key}
- Auth: API key as the `key` query parameter (GOOGLE_API_KEY)

## Response Format
```json
{
  "results": [
    {
      "formatted_address": "1600 Amphitheatre Pkwy, Mountain View, CA 94043, USA",
      "geometry": {
        "location": {"lat": 37.4224764, "lng": -122.0842499}
      }
    }
  ],
  "status": "OK"
}
```

An unknown address yields `"results": []` with status `ZERO_RESULTS`. Only
the first candidate is used.

## Behavior
- One GET per call: no retry, no backoff, no caching
- No timeout unless GEOCODING_TIMEOUT is set
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from event_planner.config import get_settings
from event_planner.errors import NotFoundError
from event_planner.models.location import GeocodedLocation

logger = logging.getLogger(__name__)


class GeocodingError(Exception):
    """Raised when the geocoding provider returns an HTTP error."""

    def __init__(
        self,
        message: str,
        provider: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
        self.response_body = response_body


class AddressResolver:
    """Resolve free-text addresses to coordinates.

    Example:
        ```python
        async with AddressResolver() as resolver:
            location = await resolver.resolve("1600 Amphitheatre Parkway")
            print(location.latitude, location.longitude)
        ```

    An `httpx.AsyncClient` may be injected; the resolver then leaves closing
    it to the caller.
    """

    name = "google_maps"

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the resolver.

        Args:
            api_key: Google Maps API key (default: GOOGLE_API_KEY)
            base_url: Geocoding endpoint (default: GEOCODING_URL)
            timeout: Request timeout in seconds (default: GEOCODING_TIMEOUT, unbounded)
            client: Shared HTTP client to use instead of an owned one
        """
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.google_api_key
        self.base_url = base_url or settings.geocoding_url
        self.timeout = timeout if timeout is not None else settings.geocoding_timeout
        self._client = client
        self._owns_client = client is None

        if not self.api_key:
            logger.warning("No geocoding API key configured; requests will be rejected")

    async def __aenter__(self) -> AddressResolver:
        """Enter async context manager."""
        self._get_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager."""
        await self.aclose()

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client if this resolver created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def resolve(self, address: str) -> GeocodedLocation:
        """Geocode an address.

        Args:
            address: Free-text address

        Returns:
            Coordinates of the first matching candidate

        Raises:
            NotFoundError: If the provider has no results for the address
            GeocodingError: If the provider returns an HTTP error
        """
        client = self._get_client()
        logger.debug(f"Geocoding {address!r} via {self.base_url}")

        # httpx URL-encodes the query parameters
        response = await client.get(
            self.base_url,
            params={"address": address, "key": self.api_key or ""},
            headers={"Accept": "application/json"},
        )

        if response.status_code >= 400:
            raise GeocodingError(
                f"Geocoding request failed: {response.status_code}",
                provider=self.name,
                status_code=response.status_code,
                response_body=response.text,
            )

        return self._translate_response(response.json(), address)

    def _translate_response(self, data: dict[str, Any], address: str) -> GeocodedLocation:
        """Pick the first candidate's coordinates out of a provider response."""
        results = data.get("results") or []
        if not results:
            logger.warning(
                f"No geocoding results for {address!r} (status: {data.get('status', 'unknown')})"
            )
            raise NotFoundError("Address not found")

        return GeocodedLocation.from_geometry(results[0]["geometry"])
