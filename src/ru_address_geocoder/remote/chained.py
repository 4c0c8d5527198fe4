from __future__ import annotations

import logging
from collections.abc import Sequence

from ru_address_geocoder.models import Coordinates
from ru_address_geocoder.protocols import GeocoderProtocol
from ru_address_geocoder.remote.client import NominatimClient
from ru_address_geocoder.remote.config import GeocoderConfig
from ru_address_geocoder.remote.regional import RegionalApproximationGeocoder

logger = logging.getLogger(__name__)


class ChainedGeocoder:
    """Asks each backend in turn and returns the first match.

    By default Nominatim is asked first and the offline city-centre table
    answers when it finds nothing or cannot be reached, so a query naming a
    known city always resolves, if only approximately.

    When every backend fails, the first backend's error is raised: it is the
    most precise one and usually the reason the lookup failed.

    Example:
        >>> async with ChainedGeocoder() as geocoder:
        ...     coords = await geocoder.geocode("г. Барнаул, ул. Несуществующая, 1")
        >>> coords.approximate
        True
    """

    def __init__(
        self,
        backends: Sequence[GeocoderProtocol] | None = None,
        *,
        config: GeocoderConfig | None = None,
    ) -> None:
        self.config = config or GeocoderConfig()
        if backends is None:
            backends = [
                NominatimClient(config=self.config),
                RegionalApproximationGeocoder(config=self.config),
            ]
        if not backends:
            raise ValueError("ChainedGeocoder needs at least one backend")
        self._backends = list(backends)

    @property
    def backends(self) -> list[GeocoderProtocol]:
        return list(self._backends)

    async def geocode(self, query: str) -> Coordinates:
        first_error: Exception | None = None
        for position, backend in enumerate(self._backends):
            try:
                coords = await backend.geocode(query)
            except Exception as exc:
                logger.debug(
                    "Backend %d (%s) failed for %s: %s",
                    position,
                    type(backend).__name__,
                    query[:80],
                    exc,
                )
                if first_error is None:
                    first_error = exc
                continue
            return coords

        assert first_error is not None
        raise first_error

    async def aclose(self) -> None:
        for backend in self._backends:
            aclose = getattr(backend, "aclose", None)
            if aclose is not None:
                await aclose()

    async def __aenter__(self) -> ChainedGeocoder:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()
