"""Snapshot service for recording and querying price history."""

import logging
import uuid
from datetime import datetime, timedelta
from typing import Optional

from cryptodash.core.exceptions import ValidationError
from cryptodash.core.symbols import normalize_symbol, validate_symbol
from cryptodash.core.timezone import now_utc
from cryptodash.domain.models import PriceSnapshot, PortfolioSnapshot
from cryptodash.domain.views import PricePoint, PortfolioSummary
from cryptodash.repositories.protocols import SnapshotRepository

logger = logging.getLogger(__name__)

MAX_LIMIT = 5000


class SnapshotService:
    """
    Service for historical snapshots.

    Price snapshots are written from fresh provider data only; stale cache
    entries would record the same point twice.
    """

    def __init__(self, snapshot_repo: SnapshotRepository):
        self._repo = snapshot_repo

    def record_prices(self, price_points: list[PricePoint]) -> int:
        """Persist fresh price points; returns the number recorded."""
        recorded_at = now_utc()
        snapshots = [
            PriceSnapshot(
                snapshot_id=str(uuid.uuid4()),
                symbol=p.symbol,
                price=p.price,
                change_24h_pct=p.change_24h_pct,
                market_cap=p.market_cap,
                as_of=p.as_of,
                recorded_at=recorded_at,
            )
            for p in price_points
            if not p.stale
        ]
        if snapshots:
            self._repo.add_price_snapshots(snapshots)
        return len(snapshots)

    def record_portfolio(self, summary: PortfolioSummary) -> Optional[PortfolioSnapshot]:
        """Persist the portfolio total when at least one holding is priced."""
        if not summary.has_priced_holdings:
            return None
        return self._repo.add_portfolio_snapshot(
            PortfolioSnapshot(
                snapshot_id=str(uuid.uuid4()),
                total_value=summary.total_value,
                total_cost=summary.total_cost,
                as_of=summary.as_of or now_utc(),
            )
        )

    def list_price_snapshots(
        self,
        symbol: str,
        since: Optional[datetime] = None,
        limit: int = 500,
    ) -> list[PriceSnapshot]:
        """List recorded prices for a symbol, oldest first."""
        if not validate_symbol(symbol):
            raise ValidationError(f"Invalid symbol: {symbol!r}")
        return self._repo.list_price_snapshots(normalize_symbol(symbol), since, self._check_limit(limit))

    def list_portfolio_snapshots(
        self,
        since: Optional[datetime] = None,
        limit: int = 500,
    ) -> list[PortfolioSnapshot]:
        """List recorded portfolio totals, oldest first."""
        return self._repo.list_portfolio_snapshots(since, self._check_limit(limit))

    def prune(self, retention_days: int) -> int:
        """Delete snapshots older than the retention horizon; returns rows removed."""
        if retention_days < 1:
            raise ValidationError("retention_days must be at least 1")
        cutoff = now_utc() - timedelta(days=retention_days)
        removed = self._repo.delete_price_snapshots_before(cutoff)
        removed += self._repo.delete_portfolio_snapshots_before(cutoff)
        if removed:
            logger.info("Pruned %d snapshots older than %s", removed, cutoff.isoformat())
        return removed

    @staticmethod
    def _check_limit(limit: int) -> int:
        if limit < 1 or limit > MAX_LIMIT:
            raise ValidationError(f"limit must be between 1 and {MAX_LIMIT}")
        return limit
