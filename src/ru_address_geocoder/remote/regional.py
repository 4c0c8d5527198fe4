from __future__ import annotations

import logging

from ru_address_geocoder.data.constants import COUNTRY_SUFFIX, find_city_centre
from ru_address_geocoder.models import Coordinates, NotFound
from ru_address_geocoder.remote.config import GeocoderConfig

logger = logging.getLogger(__name__)

REGIONAL_SOURCE = "regional"


class RegionalApproximationGeocoder:
    """Offline backend answering with the centre of a city named in the query.

    Points are flagged ``approximate``: they locate the city, not the street
    or house. Queries naming no city from CITY_CENTRES raise NotFound.
    Makes no network requests.
    """

    def __init__(self, *, config: GeocoderConfig | None = None) -> None:
        self.config = config or GeocoderConfig()

    async def geocode(self, query: str) -> Coordinates:
        match = find_city_centre(query)
        if match is None:
            raise NotFound.for_query(query)

        name, (lat, lng) = match
        logger.debug("Approximated %s by the centre of %s", query[:80], name)
        return Coordinates(
            lat=lat,
            lng=lng,
            label=name + COUNTRY_SUFFIX,
            source=REGIONAL_SOURCE,
            approximate=True,
        )

    async def aclose(self) -> None:
        """Nothing to release; present so every backend can be closed alike."""
