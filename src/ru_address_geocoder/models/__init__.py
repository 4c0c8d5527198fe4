"""Address and geocoding models.

Re-exports all public model symbols so callers can import from
``ru_address_geocoder.models`` directly.
"""

from __future__ import annotations

from ru_address_geocoder.models.builder import FragmentsBuilder
from ru_address_geocoder.models.enums import (
    FRAGMENT_FIELDS,
    AddressField,
    AddressQuality,
    BatchEventKind,
    BatchState,
)

# Import from submodules - order matters for avoiding circular imports
from ru_address_geocoder.models.errors import (
    NOT_FOUND_MESSAGE,
    PACKAGE_NAME,
    BatchStructuralError,
    GeocodeLookupError,
    NotFound,
    RuGeocoderError,
)
from ru_address_geocoder.models.fragments import AddressFragments
from ru_address_geocoder.models.results import (
    BatchEvent,
    BatchOutcome,
    BatchProgress,
    Coordinates,
    GeocodeResult,
    ParseResult,
    QualityAssessment,
)

__all__ = [
    # Errors
    "PACKAGE_NAME",
    "NOT_FOUND_MESSAGE",
    "RuGeocoderError",
    "NotFound",
    "GeocodeLookupError",
    "BatchStructuralError",
    # Enums and constants
    "AddressField",
    "AddressQuality",
    "BatchEventKind",
    "BatchState",
    "FRAGMENT_FIELDS",
    # Fragments
    "AddressFragments",
    "FragmentsBuilder",
    # Results
    "Coordinates",
    "GeocodeResult",
    "BatchProgress",
    "BatchOutcome",
    "BatchEvent",
    "ParseResult",
    "QualityAssessment",
]
