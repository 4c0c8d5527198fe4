from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence

from ru_address_geocoder.models import AddressFragments, ParseResult

logger = logging.getLogger(__name__)


class BaseAddressParser(ABC):
    """Abstract base class for address decomposers.

    Provides common error handling, logging, and batch processing logic.
    Subclasses must implement the _decompose_impl method.
    """

    def __init__(self) -> None:
        """Initialize the parser."""
        self._parse_count = 0
        self._error_count = 0

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of this parser implementation."""
        ...

    @abstractmethod
    def _decompose_impl(self, address_string: str) -> AddressFragments:
        """Internal implementation of address decomposition.

        Args:
            address_string: Raw address string to decompose.

        Returns:
            Decomposed AddressFragments (possibly with every field None).
        """
        ...

    def parse(self, address_string: str) -> ParseResult:
        """Decompose a single address string.

        Args:
            address_string: Raw address string to decompose.

        Returns:
            ParseResult containing the fragments or error information.
        """
        self._parse_count += 1

        try:
            fragments = self._decompose_impl(address_string)
            logger.debug("Decomposed address: %s", address_string[:50])
            return ParseResult(raw_input=address_string, fragments=fragments)
        except Exception as e:
            self._error_count += 1
            logger.warning(
                "Failed to decompose address: %s - %s",
                str(address_string)[:50],
                str(e),
            )
            return ParseResult(raw_input=str(address_string), error=e)

    def decompose(self, address_string: str) -> AddressFragments:
        """Decompose an address, returning empty fragments on failure."""
        result = self.parse(address_string)
        return result.fragments or AddressFragments()

    def parse_batch(self, addresses: Sequence[str]) -> list[ParseResult]:
        """Decompose multiple address strings sequentially.

        Args:
            addresses: Sequence of raw address strings.

        Returns:
            List of ParseResult objects, one for each input address.
        """
        return [self.parse(addr) for addr in addresses]

    @property
    def stats(self) -> dict[str, int]:
        """Get parsing statistics.

        Returns:
            Dict with parse_count and error_count.
        """
        return {
            "parse_count": self._parse_count,
            "error_count": self._error_count,
        }

    def reset_stats(self) -> None:
        """Reset parsing statistics."""
        self._parse_count = 0
        self._error_count = 0
