"""SQLAlchemy implementation of SnapshotRepository."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from cryptodash.core.money import strip_zeros
from cryptodash.core.timezone import to_naive_utc, to_utc
from cryptodash.domain.models import PriceSnapshot, PortfolioSnapshot
from cryptodash.repositories.sqlalchemy.orm_models import PriceSnapshotORM, PortfolioSnapshotORM


def _decimal_or_none(value) -> Optional[Decimal]:
    return strip_zeros(Decimal(str(value))) if value is not None else None


class SqlAlchemySnapshotRepository:
    """SQLAlchemy-backed repository for historical snapshots."""

    def __init__(self, db: Session):
        self._db = db

    # Price snapshots

    def add_price_snapshots(self, snapshots: list[PriceSnapshot]) -> None:
        """Persist price snapshots in one transaction."""
        for s in snapshots:
            self._db.add(
                PriceSnapshotORM(
                    snapshot_id=s.snapshot_id,
                    symbol=s.symbol,
                    price=s.price,
                    change_24h_pct=s.change_24h_pct,
                    market_cap=s.market_cap,
                    as_of=to_naive_utc(s.as_of),
                    recorded_at=to_naive_utc(s.recorded_at or s.as_of),
                )
            )
        self._db.commit()

    def list_price_snapshots(
        self,
        symbol: str,
        since: Optional[datetime] = None,
        limit: int = 500,
    ) -> list[PriceSnapshot]:
        """List the most recent snapshots for a symbol, returned oldest first."""
        query = self._db.query(PriceSnapshotORM).filter(PriceSnapshotORM.symbol == symbol)
        if since is not None:
            query = query.filter(PriceSnapshotORM.as_of >= to_naive_utc(since))
        rows = query.order_by(PriceSnapshotORM.as_of.desc()).limit(limit).all()
        return [self._price_to_domain(r) for r in reversed(rows)]

    def delete_price_snapshots_before(self, cutoff: datetime) -> int:
        """Delete price snapshots older than cutoff; return count removed."""
        removed = self._db.query(PriceSnapshotORM).filter(
            PriceSnapshotORM.as_of < to_naive_utc(cutoff)
        ).delete()
        self._db.commit()
        return removed

    # Portfolio snapshots

    def add_portfolio_snapshot(self, snapshot: PortfolioSnapshot) -> PortfolioSnapshot:
        """Persist a portfolio snapshot."""
        orm_snapshot = PortfolioSnapshotORM(
            snapshot_id=snapshot.snapshot_id,
            total_value=snapshot.total_value,
            total_cost=snapshot.total_cost,
            as_of=to_naive_utc(snapshot.as_of),
        )
        self._db.add(orm_snapshot)
        self._db.commit()
        self._db.refresh(orm_snapshot)
        return self._portfolio_to_domain(orm_snapshot)

    def list_portfolio_snapshots(
        self,
        since: Optional[datetime] = None,
        limit: int = 500,
    ) -> list[PortfolioSnapshot]:
        """List the most recent portfolio snapshots, returned oldest first."""
        query = self._db.query(PortfolioSnapshotORM)
        if since is not None:
            query = query.filter(PortfolioSnapshotORM.as_of >= to_naive_utc(since))
        rows = query.order_by(PortfolioSnapshotORM.as_of.desc()).limit(limit).all()
        return [self._portfolio_to_domain(r) for r in reversed(rows)]

    def delete_portfolio_snapshots_before(self, cutoff: datetime) -> int:
        """Delete portfolio snapshots older than cutoff; return count removed."""
        removed = self._db.query(PortfolioSnapshotORM).filter(
            PortfolioSnapshotORM.as_of < to_naive_utc(cutoff)
        ).delete()
        self._db.commit()
        return removed

    @staticmethod
    def _price_to_domain(orm: PriceSnapshotORM) -> PriceSnapshot:
        """Convert ORM price snapshot to domain model."""
        return PriceSnapshot(
            snapshot_id=orm.snapshot_id,
            symbol=orm.symbol,
            price=strip_zeros(Decimal(str(orm.price))),
            change_24h_pct=_decimal_or_none(orm.change_24h_pct),
            market_cap=_decimal_or_none(orm.market_cap),
            as_of=to_utc(orm.as_of),
            recorded_at=to_utc(orm.recorded_at) if orm.recorded_at else None,
        )

    @staticmethod
    def _portfolio_to_domain(orm: PortfolioSnapshotORM) -> PortfolioSnapshot:
        """Convert ORM portfolio snapshot to domain model."""
        return PortfolioSnapshot(
            snapshot_id=orm.snapshot_id,
            total_value=strip_zeros(Decimal(str(orm.total_value))),
            total_cost=strip_zeros(Decimal(str(orm.total_cost))),
            as_of=to_utc(orm.as_of),
        )
