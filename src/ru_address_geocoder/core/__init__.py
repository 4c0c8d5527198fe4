"""Core address heuristics: candidate generation, scoring and normalisation.

Usage:
    from ru_address_geocoder.core import (
        QueryCandidateGenerator,
        AddressQualityScorer,
        normalize_address,
        PluginFactory,
    )
"""

from __future__ import annotations

from ru_address_geocoder.core.candidates import (
    DEFAULT_CANDIDATE_RULES,
    MAX_CANDIDATES,
    CandidateRule,
    QueryCandidateGenerator,
    is_valid_candidate,
    strip_country_suffix,
)
from ru_address_geocoder.core.factory import PluginFactory
from ru_address_geocoder.core.normalize import expand_abbreviations, normalize_address
from ru_address_geocoder.core.quality import AddressQualityScorer

__all__ = [
    # Candidates
    "CandidateRule",
    "DEFAULT_CANDIDATE_RULES",
    "MAX_CANDIDATES",
    "QueryCandidateGenerator",
    "is_valid_candidate",
    "strip_country_suffix",
    # Quality
    "AddressQualityScorer",
    # Normalisation
    "expand_abbreviations",
    "normalize_address",
    # Factory
    "PluginFactory",
]
