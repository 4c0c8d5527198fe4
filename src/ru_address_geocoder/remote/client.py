from __future__ import annotations

import logging
from typing import Any

import httpx

from ru_address_geocoder.models import Coordinates, GeocodeLookupError, NotFound
from ru_address_geocoder.remote.config import GeocoderConfig

logger = logging.getLogger(__name__)


class NominatimClient:
    """Async client for a Nominatim-compatible ``/search`` endpoint.

    Resolves one query per call, asking for a single match inside the
    configured country. It keeps no cache and never retries or sleeps;
    pacing is the batch resolver's job.
    """

    def __init__(
        self,
        *,
        config: GeocoderConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or GeocoderConfig()
        self._client = httpx.AsyncClient(
            headers=self.config.headers,
            timeout=self.config.timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> NominatimClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    async def _request(self, query: str) -> list[Any]:
        try:
            response = await self._client.get(
                self.config.search_url, params=self.config.search_params(query)
            )
        except httpx.HTTPError as exc:
            raise GeocodeLookupError.from_exception(
                "remote_request", exc, {"query": query}
            ) from exc

        if response.status_code >= 400:
            raise GeocodeLookupError.build(
                "remote_http_error",
                f"{response.status_code}: {response.text[:200]}",
                {"query": query, "status": response.status_code},
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise GeocodeLookupError.build(
                "remote_parse",
                "Geocoding service returned invalid JSON",
                {"query": query},
            ) from exc

        if not isinstance(payload, list):
            raise GeocodeLookupError.build(
                "remote_parse",
                "Geocoding service returned non-array payload",
                {"query": query},
            )
        return payload

    @staticmethod
    def _to_coordinates(query: str, match: Any) -> Coordinates:
        try:
            return Coordinates(
                lat=float(match["lat"]),
                lng=float(match["lon"]),
                label=str(match.get("display_name") or ""),
                source="nominatim",
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise GeocodeLookupError.build(
                "remote_parse",
                f"Invalid match payload: {exc}",
                {"query": query},
            ) from exc

    async def geocode(self, query: str) -> Coordinates:
        """Resolve *query* to the first matching coordinate.

        Raises:
            NotFound: The service returned an empty match list.
            GeocodeLookupError: Transport failure, HTTP error status or an
                unusable payload.
        """
        matches = await self._request(query)
        if not matches:
            logger.debug("No match for query: %s", query[:80])
            raise NotFound.for_query(query)

        coords = self._to_coordinates(query, matches[0])
        logger.debug("Resolved %s -> %.6f, %.6f", query[:80], coords.lat, coords.lng)
        return coords
