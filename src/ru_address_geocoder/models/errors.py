"""Geocoder-specific error classes.

Every error raised by the package carries the package name in its context so
callers mixing several pydantic-based libraries can tell them apart.
"""

from __future__ import annotations

from typing import Any, Self

from pydantic_core import PydanticCustomError

# Package identifier for error context
PACKAGE_NAME = "ru_address_geocoder"

NOT_FOUND_MESSAGE = "Адрес не найден"


class RuGeocoderError(PydanticCustomError):
    """Base error for ru_address_geocoder.

    Inherits from PydanticCustomError so errors keep a machine-readable type,
    a message template and a context dict.
    """

    @classmethod
    def build(
        cls, error_type: str, message: str, context: dict[str, Any] | None = None
    ) -> Self:
        """Create an error with the package name merged into its context."""
        return cls(error_type, message, {"package": PACKAGE_NAME, **(context or {})})

    @classmethod
    def from_exception(
        cls, error_type: str, error: Exception, context: dict[str, Any] | None = None
    ) -> Self:
        """Wrap an arbitrary exception, keeping its text as the message."""
        return cls.build(
            error_type,
            str(error) or type(error).__name__,
            {"cause": type(error).__name__, **(context or {})},
        )


class NotFound(RuGeocoderError):
    """The geocoding service returned no match for a query."""

    @classmethod
    def for_query(cls, query: str) -> Self:
        return cls.build("not_found", NOT_FOUND_MESSAGE, {"query": query})


class GeocodeLookupError(RuGeocoderError):
    """Transport or payload failure while talking to the geocoding service."""


class BatchStructuralError(RuGeocoderError):
    """A batch could not be processed at all.

    Raised (or signalled) instead of returning partial results.
    """
