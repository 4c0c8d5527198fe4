from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_SEARCH_URL = "https://nominatim.openstreetmap.org/search"


def _env_float(name: str, default: str) -> float:
    return float(os.getenv(name, default))


@dataclass
class GeocoderConfig:
    """Settings for the geocoding service and batch pacing.

    Every field defaults from an environment variable so deployments can be
    tuned without code changes; explicit constructor arguments take priority.
    """

    search_url: str = field(
        default_factory=lambda: os.getenv("RU_GEOCODER_URL", DEFAULT_SEARCH_URL)
    )
    user_agent: str = field(
        default_factory=lambda: os.getenv("RU_GEOCODER_USER_AGENT", "TTMapApp/1.0")
    )
    accept_language: str = field(
        default_factory=lambda: os.getenv("RU_GEOCODER_LANGUAGE", "ru-RU,ru;q=0.9")
    )
    country_codes: str = field(default_factory=lambda: os.getenv("RU_GEOCODER_COUNTRY", "ru"))
    timeout: float = field(default_factory=lambda: _env_float("RU_GEOCODER_TIMEOUT", "15"))
    # Seconds to wait between consecutive requests of one batch
    request_delay: float = field(default_factory=lambda: _env_float("RU_GEOCODER_DELAY", "1.0"))

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.request_delay < 0:
            raise ValueError(f"request_delay must not be negative, got {self.request_delay}")

    @property
    def headers(self) -> dict[str, str]:
        return {
            "User-Agent": self.user_agent,
            "Accept-Language": self.accept_language,
            "Accept": "application/json",
        }

    def search_params(self, query: str) -> dict[str, str | int]:
        return {
            "q": query,
            "format": "json",
            "limit": 1,
            "countrycodes": self.country_codes,
        }
