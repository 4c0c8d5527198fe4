from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ru_address_geocoder.models import (
        AddressFragments,
        BatchOutcome,
        BatchProgress,
        Coordinates,
        ParseResult,
    )


@runtime_checkable
class AddressParserProtocol(Protocol):
    """Protocol for address decomposition implementations.

    Implementations split raw address strings into AddressFragments and
    never raise for malformed input.
    """

    def parse(self, address_string: str) -> ParseResult:
        """Decompose a single address string.

        Args:
            address_string: Raw address string.

        Returns:
            ParseResult containing the fragments or error information.
        """
        ...

    def decompose(self, address_string: str) -> AddressFragments:
        """Decompose a single address string into fragments."""
        ...

    def parse_batch(self, addresses: Sequence[str]) -> list[ParseResult]:
        """Decompose multiple address strings, one result per input."""
        ...


@runtime_checkable
class GeocoderProtocol(Protocol):
    """Protocol for single-query geocoding backends.

    Implementations resolve one query and raise NotFound when the service
    has no match, or GeocodeLookupError on transport/payload failures. They
    must not retry or throttle; pacing belongs to the batch resolver.
    """

    async def geocode(self, query: str) -> Coordinates:
        """Resolve *query* to coordinates.

        Raises:
            NotFound: The service returned no match.
            GeocodeLookupError: The service could not be reached or answered
                with something unusable.
        """
        ...


@runtime_checkable
class BatchListener(Protocol):
    """Callback-per-event-kind receiver for batch notifications.

    ``on_progress`` is called once per address, then exactly one of
    ``on_results`` / ``on_error`` ends the batch.
    """

    def on_progress(self, progress: BatchProgress) -> None: ...

    def on_results(self, outcome: BatchOutcome) -> None: ...

    def on_error(self, message: str) -> None: ...
