"""Test doubles shared across the suite."""

from __future__ import annotations

from collections.abc import Iterable

from ru_address_geocoder.models import Coordinates, NotFound

BARNAUL = Coordinates(lat=53.3606, lng=83.7636, label="Барнаул, Алтайский край, Россия")
MAMONTOVO = Coordinates(lat=52.7061, lng=81.6211, label="Мамонтово, Алтайский край, Россия")


class FakeGeocoder:
    """In-memory geocoder: known queries resolve, everything else is NotFound."""

    def __init__(
        self,
        known: dict[str, Coordinates] | None = None,
        failing: Iterable[str] = (),
        **kwargs: object,
    ) -> None:
        self.known = dict(known or {})
        self.failing = set(failing)
        self.calls: list[str] = []
        self.closed = False

    async def geocode(self, query: str) -> Coordinates:
        self.calls.append(query)
        if query in self.failing:
            raise RuntimeError(f"boom: {query}")
        if query in self.known:
            return self.known[query]
        raise NotFound.for_query(query)

    async def aclose(self) -> None:
        self.closed = True


class SleepRecorder:
    """Drop-in for asyncio.sleep that records delays instead of waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
