"""Repository layer - data access abstractions and implementations."""

from cryptodash.repositories.protocols import (
    HoldingRepository,
    SnapshotRepository,
    AlertRepository,
)

__all__ = [
    "HoldingRepository",
    "SnapshotRepository",
    "AlertRepository",
]
