"""ru-address-geocoder: Russian address decomposition and batch geocoding.

This package turns free-form Russian addresses into coordinates with:
- Heuristic decomposition into region / settlement / street / house
- Ordered query candidates, most specific first
- A Nominatim client (one request, one match, country-restricted)
- An offline city-centre approximation for addresses Nominatim misses
- A sequential, rate-limited batch resolver with progress events
- Quality scoring and abbreviation normalisation
- CLI, HTTP API and pandas integration

Quick Start:
    >>> from ru_address_geocoder import GeocodingService
    >>> service = GeocodingService()
    >>> fragments = service.decompose("Алтайский край, Мамонтово, ул. Советская, 10")
    >>> fragments.settlement
    'с. Мамонтово'

    # Candidate queries for the geocoder
    >>> service.candidates("Алтайский край, Мамонтово, ул. Советская, 10")[:2]
    ['Алтайский край, Мамонтово, ул. Советская, 10', 'с. Мамонтово, ул. Советская, 10']

    # Resolve a batch, one request per second
    >>> outcome = service.geocode_batch(["г. Барнаул, ул. Попова, 114/1"])
    >>> for result in outcome.results:
    ...     print(result.address, result.coords or result.error)
"""

from __future__ import annotations  # noqa: I001

# Import order is intentional to avoid circular imports - do not auto-fix
from ru_address_geocoder.models import (
    FRAGMENT_FIELDS,
    NOT_FOUND_MESSAGE,
    AddressField,
    AddressFragments,
    AddressQuality,
    BatchEvent,
    BatchEventKind,
    BatchOutcome,
    BatchProgress,
    BatchState,
    BatchStructuralError,
    Coordinates,
    FragmentsBuilder,
    GeocodeLookupError,
    GeocodeResult,
    NotFound,
    ParseResult,
    QualityAssessment,
    RuGeocoderError,
)
from ru_address_geocoder.core import (
    AddressQualityScorer,
    PluginFactory,
    QueryCandidateGenerator,
    normalize_address,
)
from ru_address_geocoder.parsers import BaseAddressParser, HeuristicAddressParser, ParserFactory
from ru_address_geocoder.protocols import (
    AddressParserProtocol,
    BatchListener,
    GeocoderProtocol,
)
from ru_address_geocoder.remote import (
    ChainedGeocoder,
    GeocoderConfig,
    GeocoderFactory,
    NominatimClient,
    RegionalApproximationGeocoder,
)
from ru_address_geocoder.batch import BatchResolver
from ru_address_geocoder.service import (
    GeocodingService,
    analyze,
    build_query,
    decompose,
    generate_candidates,
    geocode_batch,
    get_default_service,
)

__version__ = "0.1.0"
__package_name__ = "ru-address-geocoder"

__all__ = [
    # Version
    "__version__",
    # Primary interface
    "GeocodingService",
    "get_default_service",
    "decompose",
    "generate_candidates",
    "analyze",
    "geocode_batch",
    "build_query",
    # Models
    "AddressField",
    "AddressFragments",
    "AddressQuality",
    "FRAGMENT_FIELDS",
    "FragmentsBuilder",
    "Coordinates",
    "GeocodeResult",
    "ParseResult",
    "QualityAssessment",
    # Batch
    "BatchEvent",
    "BatchEventKind",
    "BatchOutcome",
    "BatchProgress",
    "BatchResolver",
    "BatchState",
    # Errors
    "NOT_FOUND_MESSAGE",
    "RuGeocoderError",
    "NotFound",
    "GeocodeLookupError",
    "BatchStructuralError",
    # Protocols
    "AddressParserProtocol",
    "GeocoderProtocol",
    "BatchListener",
    # Parsers
    "BaseAddressParser",
    "HeuristicAddressParser",
    "ParserFactory",
    # Core utilities
    "AddressQualityScorer",
    "QueryCandidateGenerator",
    "PluginFactory",
    "normalize_address",
    # Geocoding backends
    "GeocoderConfig",
    "GeocoderFactory",
    "NominatimClient",
    "RegionalApproximationGeocoder",
    "ChainedGeocoder",
]
