"""Address fragment and batch enumerations."""

from __future__ import annotations

from enum import Enum


class AddressField(str, Enum):
    """Typed fragments an address string is decomposed into."""

    REGION = "region"
    SETTLEMENT = "settlement"
    STREET = "street"
    HOUSE = "house"


# Decomposition order; later rules may look at fragments found earlier
FRAGMENT_FIELDS: list[str] = [f.value for f in AddressField]


class BatchState(str, Enum):
    """Lifecycle of a single batch run."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class BatchEventKind(str, Enum):
    """Notifications a batch emits to its caller."""

    PROGRESS = "progress"
    RESULTS = "results"
    ERROR = "error"


class AddressQuality(str, Enum):
    """Coarse grade of how geocodable an address string looks."""

    EXCELLENT = "EXCELLENT"
    GOOD = "GOOD"
    MEDIUM = "MEDIUM"
    POOR = "POOR"
