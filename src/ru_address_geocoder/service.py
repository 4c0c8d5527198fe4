from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from ru_address_geocoder.batch import BatchResolver, ProgressCallback, Sleeper
from ru_address_geocoder.core import (
    AddressQualityScorer,
    QueryCandidateGenerator,
    normalize_address,
)
from ru_address_geocoder.data.constants import COUNTRY_SUFFIX
from ru_address_geocoder.models import (
    AddressFragments,
    BatchOutcome,
    Coordinates,
    GeocodeResult,
    NotFound,
    ParseResult,
)
from ru_address_geocoder.parsers import ParserFactory
from ru_address_geocoder.remote import GeocoderConfig, GeocoderFactory

if TYPE_CHECKING:
    from ru_address_geocoder.protocols import (
        AddressParserProtocol,
        BatchListener,
        GeocoderProtocol,
    )

logger = logging.getLogger(__name__)


def build_query(address: str, region: str = "") -> str:
    """Compose a free-text query: address, optional region, then the country.

    Whitespace runs inside the address are collapsed first.
    """
    query = " ".join(address.split())
    if region and region.strip():
        query += f", {region.strip()}"
    return query + COUNTRY_SUFFIX


class GeocodingService:
    """High-level facade over decomposition, candidates and geocoding.

    Orchestrates the parser, candidate generator, quality scorer and
    geocoder to provide a simple API for common tasks.

    Example:
        >>> service = GeocodingService()
        >>> service.decompose("Алтайский край, Мамонтово, ул. Советская, 10").settlement
        'с. Мамонтово'

        # Resolve a batch (sequential, one request per second)
        >>> outcome = service.geocode_batch(["г. Барнаул, ул. Попова, 114/1"])
    """

    def __init__(
        self,
        parser: AddressParserProtocol | None = None,
        geocoder: GeocoderProtocol | None = None,
        generator: QueryCandidateGenerator | None = None,
        scorer: AddressQualityScorer | None = None,
        config: GeocoderConfig | None = None,
        sleep: Sleeper | None = None,
    ) -> None:
        self._config = config or GeocoderConfig()
        self._sleep: Sleeper = sleep or asyncio.sleep
        self._parser = parser or ParserFactory.create()
        self._geocoder = geocoder
        self._generator = generator or QueryCandidateGenerator()
        self._scorer = scorer or AddressQualityScorer()

    @property
    def config(self) -> GeocoderConfig:
        return self._config

    @property
    def parser(self) -> AddressParserProtocol:
        return self._parser

    @property
    def geocoder(self) -> GeocoderProtocol:
        """The geocoding backend, created on first use."""
        if self._geocoder is None:
            self._geocoder = GeocoderFactory.create(config=self._config)
        return self._geocoder

    # ------------------------------------------------------------------
    # Offline analysis
    # ------------------------------------------------------------------

    def decompose(self, address: str) -> AddressFragments:
        return self._parser.decompose(address)

    def candidates(self, address: str) -> list[str]:
        """Ordered geocoder queries for *address*, most specific first."""
        return self._generator.generate(address, self.decompose(address))

    def analyze(self, address: str) -> ParseResult:
        """Decompose, generate candidates, normalise and score one address."""
        result = self._parser.parse(address)
        if result.fragments is not None:
            result.candidates = self._generator.generate(address, result.fragments)
        result.normalized = normalize_address(address)
        result.quality = self._scorer.assess(address)
        return result

    def analyze_batch(self, addresses: Sequence[str]) -> list[ParseResult]:
        return [self.analyze(address) for address in addresses]

    # ------------------------------------------------------------------
    # Geocoding
    # ------------------------------------------------------------------

    async def geocode(self, query: str) -> GeocodeResult:
        """Resolve one query; failures come back as a failed result."""
        try:
            coords = await self.geocoder.geocode(query)
        except Exception as exc:
            logger.warning("Failed to geocode query: %s - %s", query[:50], exc)
            return GeocodeResult.failed(query, str(exc) or type(exc).__name__, query=query)
        return GeocodeResult.ok(query, coords, query=query)

    async def _walk_candidates(self, address: str) -> tuple[str, Coordinates | Exception]:
        """Try each candidate query in order until one resolves.

        Returns the last query tried with either its coordinates or the
        error it raised.
        """
        queries = self.candidates(address) or [address]
        outcome: Coordinates | Exception = NotFound.for_query(address)
        for attempt, query in enumerate(queries):
            if attempt:
                await self._sleep(self._config.request_delay)
            try:
                coords = await self.geocoder.geocode(query)
            except Exception as exc:
                logger.warning("Failed to geocode query: %s - %s", query[:50], exc)
                outcome = exc
                continue
            logger.debug("Resolved %s via candidate %d: %s", address[:50], attempt, query)
            return query, coords
        return queries[-1], outcome

    async def geocode_with_fallback(self, address: str) -> GeocodeResult:
        """Try each candidate in order until one resolves.

        Falls back to the raw address when no candidate can be generated.
        Waits ``config.request_delay`` between attempts. The returned result
        is keyed by *address*; ``query`` holds the candidate that succeeded
        (or the last one tried).
        """
        query, outcome = await self._walk_candidates(address)
        if isinstance(outcome, Coordinates):
            return GeocodeResult.ok(address, outcome, query=query)
        return GeocodeResult.failed(
            address, str(outcome) or type(outcome).__name__, query=query
        )

    def resolver(self) -> BatchResolver:
        """A fresh BatchResolver bound to this service's geocoder and delay."""
        return BatchResolver(self.geocoder, delay=self._config.request_delay, sleep=self._sleep)

    async def resolve_batch(
        self,
        addresses: Sequence[str],
        on_progress: ProgressCallback | None = None,
    ) -> BatchOutcome:
        """Resolve *addresses* sequentially; see BatchResolver.run."""
        return await self.resolver().run(addresses, on_progress=on_progress)

    async def dispatch_batch(self, addresses: Sequence[str], listener: BatchListener) -> None:
        await self.resolver().dispatch(addresses, listener)

    async def resolve_with_fallback(
        self,
        addresses: Sequence[str],
        on_progress: ProgressCallback | None = None,
    ) -> BatchOutcome:
        """Like resolve_batch, but each address goes through geocode_with_fallback.

        The batch runs through a BatchResolver, so input validation, the
        delay between addresses and structural failures behave exactly as
        in resolve_batch. Each result's ``query`` holds the candidate that
        resolved it (or the last one tried).

        Raises:
            BatchStructuralError: The batch could not be processed.
        """
        adapter = CandidateFallbackGeocoder(self)
        resolver = BatchResolver(adapter, delay=self._config.request_delay, sleep=self._sleep)
        outcome = await resolver.run(addresses, on_progress=on_progress)
        return BatchOutcome(
            results=[
                result.model_copy(update={"query": query})
                for result, query in zip(outcome.results, adapter.queries, strict=True)
            ]
        )

    def geocode_batch(
        self,
        addresses: Sequence[str],
        on_progress: ProgressCallback | None = None,
        fallback: bool = False,
    ) -> BatchOutcome:
        """Blocking wrapper around resolve_batch for synchronous callers.

        With ``fallback`` each address goes through its candidate queries
        (see resolve_with_fallback). When no geocoder was injected, a client
        is opened for this call only and closed afterwards, since its
        connection pool is bound to the event loop that ``asyncio.run``
        creates.
        """
        if self._geocoder is not None:
            return asyncio.run(self._resolve(addresses, on_progress, fallback))
        return asyncio.run(self._resolve_with_own_client(addresses, on_progress, fallback))

    async def _resolve(
        self,
        addresses: Sequence[str],
        on_progress: ProgressCallback | None,
        fallback: bool,
    ) -> BatchOutcome:
        if fallback:
            return await self.resolve_with_fallback(addresses, on_progress=on_progress)
        return await self.resolve_batch(addresses, on_progress=on_progress)

    async def _resolve_with_own_client(
        self,
        addresses: Sequence[str],
        on_progress: ProgressCallback | None,
        fallback: bool,
    ) -> BatchOutcome:
        client = GeocoderFactory.create(config=self._config)
        self._geocoder = client
        try:
            return await self._resolve(addresses, on_progress, fallback)
        finally:
            self._geocoder = None
            aclose = getattr(client, "aclose", None)
            if aclose is not None:
                await aclose()


class CandidateFallbackGeocoder:
    """Geocoder that resolves an address through its candidate queries.

    Wraps a GeocodingService so candidate fallback can be driven by a
    BatchResolver. Failures raise the last candidate's error. ``queries``
    records, per call and in call order, the candidate that resolved the
    address or the last one tried.
    """

    def __init__(self, service: GeocodingService) -> None:
        self._service = service
        self.queries: list[str] = []

    async def geocode(self, query: str) -> Coordinates:
        self.queries.append(query)
        tried, outcome = await self._service._walk_candidates(query)
        self.queries[-1] = tried
        if isinstance(outcome, Coordinates):
            return outcome
        raise outcome


# Default service instance (lazy initialization)
_default_service: GeocodingService | None = None


def get_default_service() -> GeocodingService:
    """Get or create the default GeocodingService instance."""
    global _default_service
    if _default_service is None:
        _default_service = GeocodingService()
    return _default_service


def decompose(address: str) -> AddressFragments:
    """Decompose an address with the default service."""
    return get_default_service().decompose(address)


def generate_candidates(address: str) -> list[str]:
    return get_default_service().candidates(address)


def analyze(address: str) -> ParseResult:
    return get_default_service().analyze(address)


def geocode_batch(
    addresses: Sequence[str],
    on_progress: ProgressCallback | None = None,
    fallback: bool = False,
) -> BatchOutcome:
    """Resolve addresses sequentially with the default service."""
    return get_default_service().geocode_batch(
        addresses, on_progress=on_progress, fallback=fallback
    )
