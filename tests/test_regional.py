"""Tests for the offline city-centre backend and the chained geocoder."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from ru_address_geocoder import (
    NOT_FOUND_MESSAGE,
    ChainedGeocoder,
    GeocodeLookupError,
    GeocoderConfig,
    GeocodingService,
    NominatimClient,
    NotFound,
    RegionalApproximationGeocoder,
)
from ru_address_geocoder.data import CITY_CENTRES, CITY_TABLE_VERSION, find_city_centre
from tests.fakes import BARNAUL, FakeGeocoder


class TestCityTable:
    def test_table_is_versioned(self) -> None:
        assert CITY_TABLE_VERSION
        assert CITY_CENTRES["Барнаул"] == (53.3548, 83.7698)

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("г. Барнаул, ул. Попова, 114/1", "Барнаул"),
            ("САНКТ-ПЕТЕРБУРГ, Невский пр-кт, 1", "Санкт-Петербург"),
            ("Нижний Новгород", "Нижний Новгород"),
            ("г. Томск, пр. Ленина, 1", "Томск"),
            ("Ростов-на-Дону, ул. Садовая", "Ростов-на-Дону"),
        ],
    )
    def test_finds_city(self, text: str, expected: str) -> None:
        match = find_city_centre(text)

        assert match is not None
        assert match[0] == expected
        assert match[1] == CITY_CENTRES[expected]

    @pytest.mark.parametrize(
        "text",
        [
            "с. Мамонтово, ул. Советская, 10",
            "Кировский район",
            "Тульская обл.",
            "",
        ],
    )
    def test_whole_words_only(self, text: str) -> None:
        assert find_city_centre(text) is None


class TestRegionalApproximation:
    def test_returns_approximate_centre(self) -> None:
        geocoder = RegionalApproximationGeocoder()

        coords = asyncio.run(geocoder.geocode("г. Барнаул, ул. Несуществующая, 1"))

        assert (coords.lat, coords.lng) == CITY_CENTRES["Барнаул"]
        assert coords.approximate
        assert coords.source == "regional"
        assert coords.label == "Барнаул, Россия"

    def test_unknown_city_is_not_found(self) -> None:
        geocoder = RegionalApproximationGeocoder()

        with pytest.raises(NotFound) as exc_info:
            asyncio.run(geocoder.geocode("с. Мамонтово"))

        assert str(exc_info.value) == NOT_FOUND_MESSAGE

    def test_aclose_is_harmless(self) -> None:
        asyncio.run(RegionalApproximationGeocoder().aclose())


class TestChainedGeocoder:
    def test_first_match_wins(self) -> None:
        primary = FakeGeocoder({"г. Барнаул": BARNAUL})
        secondary = FakeGeocoder({"г. Барнаул": BARNAUL})
        chained = ChainedGeocoder([primary, secondary])

        coords = asyncio.run(chained.geocode("г. Барнаул"))

        assert coords == BARNAUL
        assert secondary.calls == []

    def test_falls_through_to_regional(self) -> None:
        primary = FakeGeocoder()
        chained = ChainedGeocoder([primary, RegionalApproximationGeocoder()])

        coords = asyncio.run(chained.geocode("г. Барнаул, ул. Несуществующая, 1"))

        assert primary.calls == ["г. Барнаул, ул. Несуществующая, 1"]
        assert coords.approximate

    def test_primary_error_is_raised_when_all_fail(self) -> None:
        chained = ChainedGeocoder(
            [FakeGeocoder(failing=["с. Мамонтово"]), RegionalApproximationGeocoder()]
        )

        with pytest.raises(RuntimeError, match="boom"):
            asyncio.run(chained.geocode("с. Мамонтово"))

    def test_empty_chain_rejected(self) -> None:
        with pytest.raises(ValueError):
            ChainedGeocoder([])

    def test_aclose_closes_every_backend(self) -> None:
        first, second = FakeGeocoder(), FakeGeocoder()

        asyncio.run(ChainedGeocoder([first, second]).aclose())

        assert first.closed and second.closed

    def test_default_chain_recovers_from_http_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text="unavailable")

        config = GeocoderConfig(request_delay=0)

        async def lookup(query: str):
            client = NominatimClient(config=config, transport=httpx.MockTransport(handler))
            async with ChainedGeocoder([client, RegionalApproximationGeocoder()]) as chained:
                return await chained.geocode(query)

        coords = asyncio.run(lookup("г. Барнаул, ул. Попова, 114/1"))

        assert coords.source == "regional"
        with pytest.raises(GeocodeLookupError):
            asyncio.run(lookup("с. Мамонтово"))

    def test_default_backends(self) -> None:
        chained = ChainedGeocoder(config=GeocoderConfig(user_agent="Chain/1.0"))
        try:
            primary, secondary = chained.backends
            assert isinstance(primary, NominatimClient)
            assert primary.config.user_agent == "Chain/1.0"
            assert isinstance(secondary, RegionalApproximationGeocoder)
        finally:
            asyncio.run(chained.aclose())


def test_batch_marks_approximate_results() -> None:
    chained = ChainedGeocoder([FakeGeocoder({"Аддр1": BARNAUL}), RegionalApproximationGeocoder()])
    service = GeocodingService(geocoder=chained, config=GeocoderConfig(request_delay=0))

    outcome = service.geocode_batch(["Аддр1", "г. Омск, ул. Новая, 1", "с. Мамонтово"])

    assert [r.success for r in outcome.results] == [True, True, False]
    records = outcome.to_records()
    assert records[0]["approximate"] is False
    assert records[1]["approximate"] is True
    assert records[1]["source"] == "regional"
    assert outcome.results[2].error == NOT_FOUND_MESSAGE
