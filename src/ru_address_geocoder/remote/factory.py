from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar

from ru_address_geocoder.core.factory import PluginFactory
from ru_address_geocoder.protocols import GeocoderProtocol


class GeocoderFactory(PluginFactory[GeocoderProtocol]):
    """Factory for creating geocoding backends by name.

    Built-in backends:
        nominatim: online lookup against a Nominatim ``/search`` endpoint
        regional: offline city-centre approximation
        chained: nominatim, then regional when nothing is found

    Example:
        >>> geocoder = GeocoderFactory.create("chained", config=GeocoderConfig())
    """

    _registry: ClassVar[dict[str, Callable[..., GeocoderProtocol]]] = {}
    _default_type: ClassVar[str] = "nominatim"
    _entity_name: ClassVar[str] = "geocoder"

    @classmethod
    def _ensure_defaults_registered(cls) -> None:
        from ru_address_geocoder.remote.chained import ChainedGeocoder
        from ru_address_geocoder.remote.client import NominatimClient
        from ru_address_geocoder.remote.regional import RegionalApproximationGeocoder

        cls._register_default("nominatim", NominatimClient)
        cls._register_default("regional", RegionalApproximationGeocoder)
        cls._register_default("chained", ChainedGeocoder)
