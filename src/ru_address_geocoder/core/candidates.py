"""Geocoder query candidate generation.

Turns decomposed fragments (plus the raw string) into a short, ordered list
of query strings, most specific first. Callers should try them in order and
stop at the first one the geocoding service resolves.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from ru_address_geocoder.data.constants import COUNTRY_SUFFIX
from ru_address_geocoder.models import AddressField, AddressFragments

MAX_CANDIDATES = 8
MIN_LENGTH_EXCLUSIVE = 3
MAX_LENGTH_EXCLUSIVE = 200
# The raw string is only worth sending if it is longer than this
MIN_RAW_LENGTH_EXCLUSIVE = 10

_COUNTRY_SUFFIX_RE = re.compile(re.escape(COUNTRY_SUFFIX) + r"$", re.IGNORECASE)

_R = AddressField.REGION
_S = AddressField.SETTLEMENT
_T = AddressField.STREET
_H = AddressField.HOUSE


@dataclass(frozen=True)
class CandidateRule:
    """Join these fragments, in this order, when all of them are present."""

    fields: tuple[AddressField, ...]
    min_length_exclusive: int = 0

    def build(self, fragments: AddressFragments) -> str | None:
        values = [fragments.get(f) for f in self.fields]
        if any(v is None for v in values):
            return None
        joined = ", ".join(v for v in values if v is not None)
        return joined if len(joined) > self.min_length_exclusive else None


# Generation priority, most specific first
DEFAULT_CANDIDATE_RULES: tuple[CandidateRule, ...] = (
    CandidateRule((_S, _T, _H)),
    CandidateRule((_R, _S, _T, _H)),
    CandidateRule((_S, _T)),
    CandidateRule((_T, _S)),
    CandidateRule((_R, _S, _T)),
    CandidateRule((_S, _H)),
    CandidateRule((_T, _H)),
    CandidateRule((_S,)),
    CandidateRule((_R, _S)),
    CandidateRule((_T,)),
    CandidateRule((_H,), min_length_exclusive=1),
)


def strip_country_suffix(address: str) -> str:
    """Remove a trailing ', Россия' (any case) from *address*."""
    return _COUNTRY_SUFFIX_RE.sub("", address)


def is_valid_candidate(candidate: str) -> bool:
    return MIN_LENGTH_EXCLUSIVE < len(candidate) < MAX_LENGTH_EXCLUSIVE


class QueryCandidateGenerator:
    """Builds the ordered, de-duplicated candidate list for one address.

    Pure and stateless: the same input always yields the same list.

    Example:
        >>> generator = QueryCandidateGenerator()
        >>> generator.generate(raw, fragments)[0]
    """

    def __init__(
        self,
        rules: Sequence[CandidateRule] | None = None,
        max_candidates: int = MAX_CANDIDATES,
    ) -> None:
        self._rules = tuple(rules or DEFAULT_CANDIDATE_RULES)
        self._max_candidates = max_candidates

    def raw_candidate(self, raw_address: str) -> str | None:
        stripped = strip_country_suffix(raw_address)
        return stripped if len(stripped) > MIN_RAW_LENGTH_EXCLUSIVE else None

    def generate(self, raw_address: str, fragments: AddressFragments) -> list[str]:
        """Generate query candidates.

        Args:
            raw_address: The original address string.
            fragments: Fragments decomposed from *raw_address*.

        Returns:
            At most ``max_candidates`` unique strings, each longer than 3 and
            shorter than 200 characters, in priority order. May be empty.
        """
        produced = [self.raw_candidate(raw_address)]
        produced.extend(rule.build(fragments) for rule in self._rules)

        # dict preserves first-insertion order, dropping later duplicates
        unique = dict.fromkeys(c for c in produced if c is not None)
        return [c for c in unique if is_valid_candidate(c)][: self._max_candidates]
