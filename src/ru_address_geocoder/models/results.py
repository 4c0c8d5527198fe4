"""Result classes for decomposition, geocoding and batch runs.

Geocoding results and batch events are pydantic models so they serialise
straight to JSON (CLI output, NDJSON streams); analysis results are plain
dataclasses, mirroring how parse results are passed around in-process.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ru_address_geocoder.models.enums import AddressQuality, BatchEventKind
from ru_address_geocoder.models.fragments import AddressFragments


class Coordinates(BaseModel):
    """A resolved WGS84 point and the service's human-readable label.

    ``source`` names the backend that produced the point; ``approximate``
    marks low-precision points such as a city centre standing in for a
    street address.
    """

    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float
    label: str = ""
    source: str = ""
    approximate: bool = False


class GeocodeResult(BaseModel):
    """Outcome of resolving one address.

    Exactly one of ``coords`` / ``error`` is populated, depending on
    ``success``.
    """

    address: str
    success: bool
    coords: Coordinates | None = None
    error: str | None = None
    # Query string actually sent when candidate fallback was used
    query: str | None = None

    @model_validator(mode="after")
    def _check_payload(self) -> Self:
        if self.success and (self.coords is None or self.error is not None):
            raise ValueError("successful result must carry coords and no error")
        if not self.success and (self.error is None or self.coords is not None):
            raise ValueError("failed result must carry an error and no coords")
        return self

    @classmethod
    def ok(cls, address: str, coords: Coordinates, query: str | None = None) -> GeocodeResult:
        return cls(address=address, success=True, coords=coords, query=query)

    @classmethod
    def failed(cls, address: str, error: str, query: str | None = None) -> GeocodeResult:
        return cls(address=address, success=False, error=error, query=query)

    def to_dict(self) -> dict[str, Any]:
        """Flat dictionary, handy for DataFrame rows."""
        return {
            "address": self.address,
            "success": self.success,
            "lat": self.coords.lat if self.coords else None,
            "lng": self.coords.lng if self.coords else None,
            "label": self.coords.label if self.coords else None,
            "source": self.coords.source if self.coords else None,
            "approximate": self.coords.approximate if self.coords else None,
            "error": self.error,
            "query": self.query,
        }


class BatchProgress(BaseModel):
    """Progress notification emitted after each address of a batch."""

    model_config = ConfigDict(frozen=True)

    processed: int = Field(ge=0)
    total: int = Field(ge=0)

    @property
    def fraction(self) -> float:
        return self.processed / self.total if self.total else 1.0


class BatchOutcome(BaseModel):
    """Ordered results of a completed batch, one per input address."""

    results: list[GeocodeResult] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> list[GeocodeResult]:
        return [r for r in self.results if r.success]

    @property
    def failed(self) -> list[GeocodeResult]:
        return [r for r in self.results if not r.success]

    def to_records(self) -> list[dict[str, Any]]:
        return [r.to_dict() for r in self.results]


class BatchEvent(BaseModel):
    """One notification on a batch's event channel.

    A batch emits zero or more ``progress`` events followed by exactly one
    terminal ``results`` or ``error`` event.
    """

    kind: BatchEventKind
    progress: BatchProgress | None = None
    outcome: BatchOutcome | None = None
    error: str | None = None

    @classmethod
    def progressed(cls, processed: int, total: int) -> BatchEvent:
        return cls(
            kind=BatchEventKind.PROGRESS,
            progress=BatchProgress(processed=processed, total=total),
        )

    @classmethod
    def completed(cls, outcome: BatchOutcome) -> BatchEvent:
        return cls(kind=BatchEventKind.RESULTS, outcome=outcome)

    @classmethod
    def failure(cls, message: str) -> BatchEvent:
        return cls(kind=BatchEventKind.ERROR, error=message)

    @property
    def is_terminal(self) -> bool:
        return self.kind is not BatchEventKind.PROGRESS

    def to_message(self) -> dict[str, Any]:
        """Render as a ``{"type": ..., "data": ...}`` channel message."""
        if self.kind is BatchEventKind.PROGRESS and self.progress is not None:
            data: dict[str, Any] = self.progress.model_dump()
        elif self.kind is BatchEventKind.RESULTS and self.outcome is not None:
            data = {"results": [r.model_dump(mode="json") for r in self.outcome.results]}
        else:
            data = {"error": self.error}
        return {"type": self.kind.value, "data": data}


@dataclass
class QualityAssessment:
    """Heuristic estimate of how well an address string will geocode."""

    score: float
    quality: AddressQuality
    features: dict[str, int] = field(default_factory=dict)


@dataclass
class ParseResult:
    """Result of analysing one raw address string."""

    raw_input: str
    fragments: AddressFragments | None = None
    candidates: list[str] = field(default_factory=list)
    normalized: str | None = None
    quality: QualityAssessment | None = None
    error: Exception | None = None

    @property
    def is_parsed(self) -> bool:
        """Decomposition ran without error (fragments may still be empty)."""
        return self.error is None and self.fragments is not None

    @property
    def has_candidates(self) -> bool:
        return bool(self.candidates)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a flat dictionary of fragments plus analysis fields."""
        fragments = self.fragments or AddressFragments()
        return {
            **fragments.to_dict(),
            "candidates": list(self.candidates),
            "normalized": self.normalized,
            "quality": self.quality.quality.value if self.quality else None,
            "score": self.quality.score if self.quality else None,
        }
