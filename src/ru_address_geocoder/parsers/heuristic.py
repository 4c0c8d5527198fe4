from __future__ import annotations

from collections.abc import Sequence

from ru_address_geocoder.models import AddressFragments
from ru_address_geocoder.parsers.base import BaseAddressParser
from ru_address_geocoder.parsers.rules import DEFAULT_RULES, FragmentRule, split_parts


class HeuristicAddressParser(BaseAddressParser):
    """Rule-driven decomposer for Russian comma-separated addresses.

    Walks the ordered rule list once. A field is filled by the first rule
    that matches any part; later rules for an already-filled field are not
    consulted. Rules see the fragments found so far, which lets the
    known-settlement fallback skip the part already taken as the region.
    """

    def __init__(self, rules: Sequence[FragmentRule] | None = None) -> None:
        super().__init__()
        self._rules: tuple[FragmentRule, ...] = tuple(rules or DEFAULT_RULES)

    @property
    def name(self) -> str:
        """Name of this parser implementation."""
        return "heuristic"

    @property
    def rules(self) -> tuple[FragmentRule, ...]:
        return self._rules

    def _run_rules(self, address_string: str) -> tuple[dict[str, str | None], dict[str, str]]:
        parts = split_parts(address_string)
        found: dict[str, str | None] = {}
        matched_by: dict[str, str] = {}

        for rule in self._rules:
            key = rule.field.value
            if found.get(key) is not None:
                continue
            found[key] = rule.apply(parts, found)
            if found[key] is not None:
                matched_by[key] = rule.name

        return found, matched_by

    def _decompose_impl(self, address_string: str) -> AddressFragments:
        found, _ = self._run_rules(address_string)
        return AddressFragments(**found)

    def explain(self, address_string: str) -> dict[str, str]:
        """Map each filled field to the name of the rule that filled it."""
        _, matched_by = self._run_rules(address_string)
        return matched_by
