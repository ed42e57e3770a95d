"""Repository protocol definitions (interfaces)."""

from cryptodash.repositories.protocols.holding_repo import HoldingRepository
from cryptodash.repositories.protocols.snapshot_repo import SnapshotRepository
from cryptodash.repositories.protocols.alert_repo import AlertRepository

__all__ = [
    "HoldingRepository",
    "SnapshotRepository",
    "AlertRepository",
]
