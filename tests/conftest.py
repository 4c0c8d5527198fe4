"""Shared pytest fixtures and Hypothesis configuration.

This module provides pytest fixtures and configures Hypothesis profiles
for the test suite.
"""

from __future__ import annotations

import pytest
from hypothesis import Verbosity, settings

from tests.fakes import BARNAUL, MAMONTOVO, FakeGeocoder, SleepRecorder

# Configure Hypothesis settings for the test suite
settings.register_profile("ci", max_examples=200, deadline=None)
settings.register_profile("dev", max_examples=50, deadline=None)
settings.register_profile("debug", max_examples=10, deadline=None, verbosity=Verbosity.verbose)


@pytest.fixture
def fake_geocoder() -> FakeGeocoder:
    return FakeGeocoder(
        {
            "Аддр1": BARNAUL,
            "г. Барнаул, ул. Попова, 114/1": BARNAUL,
            "с. Мамонтово, ул. Советская, 10": MAMONTOVO,
        }
    )


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()
