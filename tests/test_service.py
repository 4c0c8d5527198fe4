from __future__ import annotations

import asyncio

import pytest

from ru_address_geocoder import (
    NOT_FOUND_MESSAGE,
    AddressQuality,
    BatchProgress,
    BatchStructuralError,
    Coordinates,
    GeocoderConfig,
    GeocoderFactory,
    GeocodingService,
    build_query,
)
from ru_address_geocoder import service as service_module
from tests.fakes import BARNAUL, MAMONTOVO, FakeGeocoder, SleepRecorder

ADDRESS = "Алтайский край, Мамонтово, ул. Советская, 10"


@pytest.fixture
def service(fake_geocoder: FakeGeocoder) -> GeocodingService:
    return GeocodingService(geocoder=fake_geocoder, config=GeocoderConfig(request_delay=0))


class TestAnalysis:
    def test_decompose(self, service: GeocodingService) -> None:
        assert service.decompose(ADDRESS).settlement == "с. Мамонтово"

    def test_candidates(self, service: GeocodingService) -> None:
        assert service.candidates(ADDRESS)[1] == "с. Мамонтово, ул. Советская, 10"

    def test_analyze(self, service: GeocodingService) -> None:
        result = service.analyze("г. Барнаул, ул. Попова, д. 114")

        assert result.is_parsed
        assert result.fragments is not None
        assert result.fragments.street == "ул. Попова"
        assert result.has_candidates
        assert result.normalized == "город барнаул, улица попова, дом 114"
        assert result.quality is not None
        assert result.quality.quality in set(AddressQuality)

        flat = result.to_dict()
        assert flat["settlement"] == "г. Барнаул"
        assert flat["candidates"] == result.candidates
        assert flat["quality"] == result.quality.quality.value

    def test_analyze_batch(self, service: GeocodingService) -> None:
        results = service.analyze_batch(["г. Бийск", ADDRESS])

        assert [r.raw_input for r in results] == ["г. Бийск", ADDRESS]


class TestGeocode:
    def test_single_success(self, service: GeocodingService) -> None:
        result = asyncio.run(service.geocode("Аддр1"))

        assert result.success
        assert result.coords == BARNAUL

    def test_single_failure_does_not_raise(self, service: GeocodingService) -> None:
        result = asyncio.run(service.geocode("НеизвестныйАдрес"))

        assert not result.success
        assert result.error == NOT_FOUND_MESSAGE

    def test_empty_exception_message_falls_back_to_type_name(self) -> None:
        class SilentGeocoder:
            async def geocode(self, query: str) -> Coordinates:
                raise KeyError()

        service = GeocodingService(geocoder=SilentGeocoder())

        result = asyncio.run(service.geocode("г. Бийск"))
        fallback = asyncio.run(service.geocode_with_fallback("г. Бийск"))

        assert result.error == "KeyError"
        assert fallback.error == "KeyError"


    def test_fallback_uses_first_resolving_candidate(
        self, service: GeocodingService, fake_geocoder: FakeGeocoder
    ) -> None:
        result = asyncio.run(service.geocode_with_fallback(ADDRESS))

        assert result.success
        assert result.address == ADDRESS
        assert result.coords == MAMONTOVO
        assert result.query == "с. Мамонтово, ул. Советская, 10"
        # raw string first, then the first fragment-based candidate
        assert fake_geocoder.calls == [ADDRESS, "с. Мамонтово, ул. Советская, 10"]

    def test_fallback_exhausts_candidates(
        self, service: GeocodingService, fake_geocoder: FakeGeocoder
    ) -> None:
        address = "г. Бийск, ул. Мира, 15"

        result = asyncio.run(service.geocode_with_fallback(address))

        assert not result.success
        assert result.error == NOT_FOUND_MESSAGE
        assert fake_geocoder.calls == service.candidates(address)
        assert result.query == fake_geocoder.calls[-1]

    def test_fallback_without_candidates_tries_raw(
        self, service: GeocodingService, fake_geocoder: FakeGeocoder
    ) -> None:
        asyncio.run(service.geocode_with_fallback("12"))

        assert fake_geocoder.calls == ["12"]

    def test_fallback_waits_between_attempts(
        self, fake_geocoder: FakeGeocoder, sleep_recorder: SleepRecorder
    ) -> None:
        service = GeocodingService(
            geocoder=fake_geocoder,
            config=GeocoderConfig(request_delay=0.75),
            sleep=sleep_recorder,
        )

        asyncio.run(service.geocode_with_fallback(ADDRESS))

        assert sleep_recorder.delays == [0.75]


class TestBatch:
    def test_geocode_batch(self, service: GeocodingService) -> None:
        progress: list[BatchProgress] = []

        outcome = service.geocode_batch(["Аддр1", "НеизвестныйАдрес"], on_progress=progress.append)

        assert [r.success for r in outcome.results] == [True, False]
        assert [p.processed for p in progress] == [1, 2]

    def test_resolve_with_fallback(self, service: GeocodingService) -> None:
        progress: list[BatchProgress] = []

        outcome = asyncio.run(
            service.resolve_with_fallback([ADDRESS, "Аддр1"], on_progress=progress.append)
        )

        assert [r.success for r in outcome.results] == [True, True]
        assert outcome.results[0].query == "с. Мамонтово, ул. Советская, 10"
        assert [(p.processed, p.total) for p in progress] == [(1, 2), (2, 2)]

    def test_resolve_with_fallback_keeps_order_and_failures(
        self, service: GeocodingService
    ) -> None:
        addresses = ["г. Бийск, ул. Мира, 15", ADDRESS, "Аддр1"]

        outcome = asyncio.run(service.resolve_with_fallback(addresses))

        assert [r.address for r in outcome.results] == addresses
        assert [r.success for r in outcome.results] == [False, True, True]
        assert outcome.results[0].error == NOT_FOUND_MESSAGE
        assert outcome.results[0].query == service.candidates(addresses[0])[-1]
        assert outcome.results[2].query == "Аддр1"

    def test_resolve_with_fallback_rejects_single_string(
        self, service: GeocodingService, fake_geocoder: FakeGeocoder
    ) -> None:
        with pytest.raises(BatchStructuralError, match="single string"):
            asyncio.run(service.resolve_with_fallback("Аддр1"))  # type: ignore[arg-type]

        assert fake_geocoder.calls == []

    def test_resolve_with_fallback_raising_callback_is_structural(
        self, service: GeocodingService, fake_geocoder: FakeGeocoder
    ) -> None:
        def explode(progress: BatchProgress) -> None:
            raise RuntimeError("bad callback")

        with pytest.raises(BatchStructuralError, match="bad callback"):
            asyncio.run(
                service.resolve_with_fallback(["Аддр1", "Аддр1"], on_progress=explode)
            )

        assert fake_geocoder.calls == ["Аддр1"]

    def test_resolve_with_fallback_waits_between_addresses(
        self, fake_geocoder: FakeGeocoder, sleep_recorder: SleepRecorder
    ) -> None:
        service = GeocodingService(
            geocoder=fake_geocoder,
            config=GeocoderConfig(request_delay=0.5),
            sleep=sleep_recorder,
        )

        asyncio.run(service.resolve_with_fallback(["Аддр1", "Аддр1"]))

        assert sleep_recorder.delays == [0.5]

    def test_geocode_batch_with_fallback(self, service: GeocodingService) -> None:
        outcome = service.geocode_batch([ADDRESS], fallback=True)

        assert outcome.results[0].success
        assert outcome.results[0].query == "с. Мамонтово, ул. Советская, 10"


    def test_resolver_uses_configured_delay(self, service: GeocodingService) -> None:
        assert service.resolver().delay == 0

    def test_own_client_is_closed(self, monkeypatch: pytest.MonkeyPatch) -> None:
        created: list[FakeGeocoder] = []

        def fake_create(name=None, **kwargs):
            geocoder = FakeGeocoder({"Аддр1": BARNAUL})
            created.append(geocoder)
            return geocoder

        monkeypatch.setattr(GeocoderFactory, "create", fake_create)
        service = GeocodingService(config=GeocoderConfig(request_delay=0))

        outcome = service.geocode_batch(["Аддр1"])

        assert outcome.results[0].success
        assert created and created[0].closed


def test_build_query() -> None:
    assert build_query("г. Бийск,  ул. Мира") == "г. Бийск, ул. Мира, Россия"
    assert build_query("г. Бийск", "Алтайский край") == "г. Бийск, Алтайский край, Россия"
    assert build_query("г. Бийск", "  ") == "г. Бийск, Россия"


def test_default_service_is_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(service_module, "_default_service", None)

    first = service_module.get_default_service()

    assert service_module.get_default_service() is first
    assert service_module.generate_candidates("г. Бийск") == ["г. Бийск"]
    assert service_module.analyze("г. Бийск").fragments is not None
