"""Sequential, rate-limited batch geocoding.

The resolver drives a list of addresses through a geocoder strictly one at a
time, pausing between requests so the external service's rate limit is never
exceeded. Per-address failures become failed results; only problems outside
the per-address scope abort the batch.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Sequence
from contextlib import aclosing
from typing import Any

from pydantic import TypeAdapter, ValidationError

from ru_address_geocoder.models import (
    BatchEvent,
    BatchEventKind,
    BatchOutcome,
    BatchProgress,
    BatchState,
    BatchStructuralError,
    GeocodeResult,
)
from ru_address_geocoder.protocols import BatchListener, GeocoderProtocol

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_DELAY = 1.0

_ADDRESS_LIST = TypeAdapter(list[str])

Sleeper = Callable[[float], Awaitable[Any]]
ProgressCallback = Callable[[BatchProgress], Any]


def _validate_addresses(addresses: Any) -> list[str]:
    if isinstance(addresses, (str, bytes)):
        raise BatchStructuralError.build(
            "invalid_input", "addresses must be a list of strings, not a single string"
        )
    # Sets, mappings and iterators have no input order to preserve
    if not isinstance(addresses, Sequence):
        raise BatchStructuralError.build(
            "invalid_input",
            f"addresses must be an ordered sequence, got {type(addresses).__name__}",
        )

    try:
        return _ADDRESS_LIST.validate_python(addresses)
    except ValidationError as exc:
        raise BatchStructuralError.build(
            "invalid_input",
            "; ".join(e.get("msg", str(e)) for e in exc.errors()),
        ) from exc


class BatchResolver:
    """Resolves an ordered list of addresses through one geocoder.

    State goes IDLE -> RUNNING -> COMPLETED or FAILED. One resolver runs one
    batch at a time; run independent batches on separate instances.

    Example:
        >>> async with NominatimClient() as client:
        ...     resolver = BatchResolver(client)
        ...     outcome = await resolver.run(["г. Барнаул, ул. Попова, 114/1"])
    """

    def __init__(
        self,
        geocoder: GeocoderProtocol,
        *,
        delay: float = DEFAULT_REQUEST_DELAY,
        sleep: Sleeper | None = None,
    ) -> None:
        if delay < 0:
            raise ValueError(f"delay must not be negative, got {delay}")
        self._geocoder = geocoder
        self._delay = delay
        self._sleep: Sleeper = sleep or asyncio.sleep
        self._state = BatchState.IDLE
        self._cancel_requested = False

    @property
    def state(self) -> BatchState:
        return self._state

    @property
    def delay(self) -> float:
        return self._delay

    def cancel(self) -> None:
        """Ask a running batch to stop before its next address.

        A request already in flight is allowed to finish; the batch then
        ends with a structural failure and no results.
        """
        if self._state is BatchState.RUNNING:
            self._cancel_requested = True

    async def _resolve_one(self, address: str) -> GeocodeResult:
        try:
            coords = await self._geocoder.geocode(address)
        except Exception as exc:
            logger.warning("Failed to geocode address: %s - %s", address[:50], exc)
            return GeocodeResult.failed(address, str(exc) or type(exc).__name__)
        return GeocodeResult.ok(address, coords)

    def _begin(self) -> None:
        if self._state is BatchState.RUNNING:
            raise BatchStructuralError.build("already_running", "batch is already running")
        self._state = BatchState.RUNNING
        self._cancel_requested = False

    def _fail(self, message: str) -> BatchEvent:
        self._state = BatchState.FAILED
        logger.error("Batch failed: %s", message)
        return BatchEvent.failure(message)

    async def events(self, addresses: Sequence[str]) -> AsyncIterator[BatchEvent]:
        """Run the batch, yielding its notifications in order.

        Yields one ``progress`` event per address and then exactly one
        terminal event: ``results`` with the full outcome, or ``error`` with
        a message when the batch could not be processed.
        """
        try:
            self._begin()
        except BatchStructuralError as exc:
            # Leave the running batch's state untouched
            logger.error("Batch rejected: %s", exc)
            yield BatchEvent.failure(str(exc))
            return

        try:
            try:
                items = _validate_addresses(addresses)
                total = len(items)
                results: list[GeocodeResult] = []
                logger.info("Starting batch of %d addresses", total)

                for index, address in enumerate(items):
                    if self._cancel_requested:
                        raise BatchStructuralError.build(
                            "cancelled", "batch cancelled", {"processed": index}
                        )
                    results.append(await self._resolve_one(address))
                    yield BatchEvent.progressed(index + 1, total)
                    if index < total - 1:
                        await self._sleep(self._delay)
            except Exception as exc:
                yield self._fail(str(exc) or type(exc).__name__)
                return

            self._state = BatchState.COMPLETED
            outcome = BatchOutcome(results=results)
            logger.info(
                "Batch completed: %d succeeded, %d failed",
                len(outcome.succeeded),
                len(outcome.failed),
            )
            yield BatchEvent.completed(outcome)
        finally:
            # Task cancellation or an abandoned stream never completes the batch
            if self._state is BatchState.RUNNING:
                self._state = BatchState.FAILED

    async def run(
        self,
        addresses: Sequence[str],
        on_progress: ProgressCallback | None = None,
    ) -> BatchOutcome:
        """Run the batch and return its outcome.

        Args:
            addresses: Addresses to resolve, in order.
            on_progress: Optional callback invoked after each address.

        Returns:
            BatchOutcome with one result per address, in input order.

        Raises:
            BatchStructuralError: The batch could not be processed; no
                partial results are returned.
        """
        async with aclosing(self.events(addresses)) as stream:
            async for event in stream:
                if event.kind is BatchEventKind.PROGRESS and event.progress is not None:
                    if on_progress is None:
                        continue
                    try:
                        on_progress(event.progress)
                    except Exception as exc:
                        self._fail(f"progress callback failed: {exc}")
                        raise BatchStructuralError.from_exception(
                            "callback_failed", exc
                        ) from exc
                elif event.kind is BatchEventKind.RESULTS and event.outcome is not None:
                    return event.outcome
                else:
                    raise BatchStructuralError.build(
                        "batch_failed", event.error or "batch failed"
                    )
        raise BatchStructuralError.build("batch_failed", "batch ended without a result")

    async def dispatch(self, addresses: Sequence[str], listener: BatchListener) -> None:
        """Run the batch, delivering every notification to *listener*.

        Never raises for batch problems: they arrive as a single
        ``on_error`` call instead of ``on_results``.
        """
        async with aclosing(self.events(addresses)) as stream:
            async for event in stream:
                if event.kind is BatchEventKind.PROGRESS and event.progress is not None:
                    try:
                        listener.on_progress(event.progress)
                    except Exception as exc:
                        message = f"progress callback failed: {exc}"
                        self._fail(message)
                        listener.on_error(message)
                        return
                elif event.kind is BatchEventKind.RESULTS and event.outcome is not None:
                    listener.on_results(event.outcome)
                else:
                    listener.on_error(event.error or "batch failed")
