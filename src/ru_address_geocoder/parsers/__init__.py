from ru_address_geocoder.parsers.base import BaseAddressParser
from ru_address_geocoder.parsers.factory import ParserFactory
from ru_address_geocoder.parsers.heuristic import HeuristicAddressParser
from ru_address_geocoder.parsers.rules import DEFAULT_RULES, FragmentRule, split_parts

__all__ = [
    "BaseAddressParser",
    "HeuristicAddressParser",
    "ParserFactory",
    "FragmentRule",
    "DEFAULT_RULES",
    "split_parts",
]
