from __future__ import annotations

from ru_address_geocoder.remote.chained import ChainedGeocoder
from ru_address_geocoder.remote.client import NominatimClient
from ru_address_geocoder.remote.config import DEFAULT_SEARCH_URL, GeocoderConfig
from ru_address_geocoder.remote.factory import GeocoderFactory
from ru_address_geocoder.remote.regional import RegionalApproximationGeocoder

__all__ = [
    "NominatimClient",
    "RegionalApproximationGeocoder",
    "ChainedGeocoder",
    "GeocoderConfig",
    "GeocoderFactory",
    "DEFAULT_SEARCH_URL",
]
