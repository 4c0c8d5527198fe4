"""Ordered decomposition rules.

Each rule is an independent predicate over a single comma-delimited part,
optionally paired with a rewrite. The decomposer evaluates rules in list
order; the first rule that matches a part fills its field and the remaining
rules for that field are skipped.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass

from ru_address_geocoder.data.constants import (
    FALLBACK_EXCLUDED_MARKERS,
    NON_HOUSE_MARKERS,
    REGION_MARKERS,
    SETTLEMENT_PREFIXES,
    STREET_PREFIXES,
    prefix_for_known_settlement,
)
from ru_address_geocoder.models.enums import AddressField

Found = Mapping[str, str | None]
Predicate = Callable[[str, Found], bool]

_DIGIT_RE = re.compile(r"\d")


def _prefix_pattern(prefixes: Iterable[str]) -> re.Pattern[str]:
    # Longest first so "пгт." is not shadowed by "п."
    ordered = sorted(prefixes, key=len, reverse=True)
    return re.compile("^(?:" + "|".join(re.escape(p) for p in ordered) + ")", re.IGNORECASE)


_SETTLEMENT_PREFIX_RE = _prefix_pattern(SETTLEMENT_PREFIXES)
_STREET_PREFIX_RE = _prefix_pattern(STREET_PREFIXES)


def split_parts(raw: str) -> list[str]:
    """Split a raw address on commas, trim, and drop parts of length <= 1."""
    return [p for p in (chunk.strip() for chunk in raw.split(",")) if len(p) > 1]


def has_settlement_prefix(part: str) -> bool:
    return bool(_SETTLEMENT_PREFIX_RE.match(part))


def has_street_prefix(part: str) -> bool:
    return bool(_STREET_PREFIX_RE.match(part))


def has_digit(part: str) -> bool:
    return bool(_DIGIT_RE.search(part))


def _contains_any(part: str, markers: Iterable[str]) -> bool:
    lower = part.lower()
    return any(marker in lower for marker in markers)


@dataclass(frozen=True)
class FragmentRule:
    """One step of the decomposition: which field, when, and how to rewrite."""

    name: str
    field: AddressField
    predicate: Predicate
    rewrite: Callable[[str], str] | None = None

    def apply(self, parts: Sequence[str], found: Found) -> str | None:
        """Return the (rewritten) first part matching this rule, if any."""
        for part in parts:
            if self.predicate(part, found):
                return self.rewrite(part) if self.rewrite else part
        return None


# -----------------------------------------------------------------------------
# Predicates
# -----------------------------------------------------------------------------


def is_region(part: str, found: Found) -> bool:
    return _contains_any(part, REGION_MARKERS)


def is_prefixed_settlement(part: str, found: Found) -> bool:
    return has_settlement_prefix(part)


def is_known_settlement(part: str, found: Found) -> bool:
    """Bare settlement name from the whitelist, e.g. 'Мамонтово'."""
    return (
        len(part) > 2
        and not _contains_any(part, FALLBACK_EXCLUDED_MARKERS)
        and not has_digit(part)
        and part != found.get(AddressField.REGION.value)
        and prefix_for_known_settlement(part) is not None
    )


def add_settlement_prefix(part: str) -> str:
    if has_settlement_prefix(part):
        return part
    return f"{prefix_for_known_settlement(part)} {part}"


def is_prefixed_street(part: str, found: Found) -> bool:
    return has_street_prefix(part)


def is_house_number(part: str, found: Found) -> bool:
    return (
        has_digit(part)
        and not has_settlement_prefix(part)
        and not has_street_prefix(part)
        and not _contains_any(part, NON_HOUSE_MARKERS)
    )


DEFAULT_RULES: tuple[FragmentRule, ...] = (
    FragmentRule("region-marker", AddressField.REGION, is_region),
    FragmentRule("settlement-prefix", AddressField.SETTLEMENT, is_prefixed_settlement),
    FragmentRule(
        "settlement-known-name",
        AddressField.SETTLEMENT,
        is_known_settlement,
        rewrite=add_settlement_prefix,
    ),
    FragmentRule("street-prefix", AddressField.STREET, is_prefixed_street),
    FragmentRule("house-number", AddressField.HOUSE, is_house_number),
)
