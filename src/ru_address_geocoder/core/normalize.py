"""Address text normalisation."""

from __future__ import annotations

import re

from ru_address_geocoder.data.constants import ABBREVIATION_EXPANSIONS

_DISALLOWED_RE = re.compile(r"[^\w\s/,.-]")
_WHITESPACE_RE = re.compile(r"\s+")


def expand_abbreviations(text: str) -> str:
    """Replace type abbreviations ('ул.', 'пр-кт', ...) with full words.

    Expansions are applied in table order on the lowercased text.
    """
    expanded = text.lower()
    for abbreviation, full in ABBREVIATION_EXPANSIONS:
        expanded = expanded.replace(abbreviation, full)
    return expanded


def normalize_address(raw: str) -> str:
    """Lowercase, expand abbreviations, drop stray symbols, collapse whitespace.

    Returns an empty string for empty input.
    """
    if not raw:
        return ""
    normalized = _DISALLOWED_RE.sub(" ", expand_abbreviations(raw))
    return _WHITESPACE_RE.sub(" ", normalized).strip()
