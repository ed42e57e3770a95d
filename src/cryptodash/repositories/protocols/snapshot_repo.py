"""Snapshot repository protocol for historical data."""

from datetime import datetime
from typing import Protocol, Optional

from cryptodash.domain.models import PriceSnapshot, PortfolioSnapshot


class SnapshotRepository(Protocol):
    """Interface for price and portfolio snapshot data access."""

    # Price snapshots
    def add_price_snapshots(self, snapshots: list[PriceSnapshot]) -> None:
        """Persist price snapshots in one transaction."""
        ...

    def list_price_snapshots(
        self,
        symbol: str,
        since: Optional[datetime] = None,
        limit: int = 500,
    ) -> list[PriceSnapshot]:
        """List the most recent snapshots for a symbol, returned oldest first."""
        ...

    def delete_price_snapshots_before(self, cutoff: datetime) -> int:
        """Delete price snapshots older than cutoff; return count removed."""
        ...

    # Portfolio snapshots
    def add_portfolio_snapshot(self, snapshot: PortfolioSnapshot) -> PortfolioSnapshot:
        """Persist a portfolio snapshot."""
        ...

    def list_portfolio_snapshots(
        self,
        since: Optional[datetime] = None,
        limit: int = 500,
    ) -> list[PortfolioSnapshot]:
        """List the most recent portfolio snapshots, returned oldest first."""
        ...

    def delete_portfolio_snapshots_before(self, cutoff: datetime) -> int:
        """Delete portfolio snapshots older than cutoff; return count removed."""
        ...
