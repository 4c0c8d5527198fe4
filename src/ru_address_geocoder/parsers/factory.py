from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar

from ru_address_geocoder.core.factory import PluginFactory
from ru_address_geocoder.protocols import AddressParserProtocol


class ParserFactory(PluginFactory[AddressParserProtocol]):
    """Factory for creating address decomposer instances.

    Example:
        >>> parser = ParserFactory.create("heuristic")

        # Register a custom decomposer
        >>> ParserFactory.register("strict", StrictParser)
        >>> parser = ParserFactory.create("strict")
    """

    _registry: ClassVar[dict[str, Callable[..., AddressParserProtocol]]] = {}
    _default_type: ClassVar[str] = "heuristic"
    _entity_name: ClassVar[str] = "parser"

    @classmethod
    def _ensure_defaults_registered(cls) -> None:
        from ru_address_geocoder.parsers.heuristic import HeuristicAddressParser

        cls._register_default("heuristic", HeuristicAddressParser)
