"""Static lookup tables for Russian address heuristics."""

from __future__ import annotations

from ru_address_geocoder.data.constants import (
    ABBREVIATION_EXPANSIONS,
    CITY_CENTRES,
    CITY_TABLE_VERSION,
    COUNTRY_SUFFIX,
    FALLBACK_EXCLUDED_MARKERS,
    KNOWN_SETTLEMENTS,
    LOOKUP_TABLES_VERSION,
    NON_HOUSE_MARKERS,
    REGION_MARKERS,
    SETTLEMENT_PREFIXES,
    STREET_PREFIXES,
    find_city_centre,
    prefix_for_known_settlement,
)

__all__ = [
    "LOOKUP_TABLES_VERSION",
    "REGION_MARKERS",
    "SETTLEMENT_PREFIXES",
    "STREET_PREFIXES",
    "KNOWN_SETTLEMENTS",
    "FALLBACK_EXCLUDED_MARKERS",
    "NON_HOUSE_MARKERS",
    "COUNTRY_SUFFIX",
    "ABBREVIATION_EXPANSIONS",
    "CITY_TABLE_VERSION",
    "CITY_CENTRES",
    "find_city_centre",
    "prefix_for_known_settlement",
]
