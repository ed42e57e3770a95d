"""SQLAlchemy implementation of HoldingRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from cryptodash.core.exceptions import NotFoundError
from cryptodash.core.money import strip_zeros
from cryptodash.core.timezone import to_naive_utc, to_utc
from cryptodash.domain.models import Holding
from cryptodash.repositories.sqlalchemy.orm_models import HoldingORM


class SqlAlchemyHoldingRepository:
    """SQLAlchemy-backed holding repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, holding: Holding) -> Holding:
        """Persist a new holding."""
        orm_holding = HoldingORM(
            holding_id=holding.holding_id,
            symbol=holding.symbol,
            quantity=holding.quantity,
            cost_basis=holding.cost_basis,
            note=holding.note,
            created_at=to_naive_utc(holding.created_at),
            updated_at=to_naive_utc(holding.updated_at) if holding.updated_at else None,
        )
        self._db.add(orm_holding)
        self._db.commit()
        self._db.refresh(orm_holding)
        return self._to_domain(orm_holding)

    def get_by_id(self, holding_id: str) -> Optional[Holding]:
        """Retrieve holding by ID."""
        orm_holding = self._db.query(HoldingORM).filter(
            HoldingORM.holding_id == holding_id
        ).first()
        return self._to_domain(orm_holding) if orm_holding else None

    def list_all(self) -> list[Holding]:
        """List all holdings ordered by symbol, then creation time."""
        orm_holdings = (
            self._db.query(HoldingORM)
            .order_by(HoldingORM.symbol, HoldingORM.created_at)
            .all()
        )
        return [self._to_domain(h) for h in orm_holdings]

    def update(self, holding: Holding) -> Holding:
        """Update an existing holding."""
        orm_holding = self._db.query(HoldingORM).filter(
            HoldingORM.holding_id == holding.holding_id
        ).first()
        if not orm_holding:
            raise NotFoundError("Holding", holding.holding_id)

        orm_holding.symbol = holding.symbol
        orm_holding.quantity = holding.quantity
        orm_holding.cost_basis = holding.cost_basis
        orm_holding.note = holding.note
        orm_holding.updated_at = to_naive_utc(holding.updated_at) if holding.updated_at else None
        self._db.commit()
        self._db.refresh(orm_holding)
        return self._to_domain(orm_holding)

    def delete(self, holding_id: str) -> None:
        """Delete a holding."""
        self._db.query(HoldingORM).filter(
            HoldingORM.holding_id == holding_id
        ).delete()
        self._db.commit()

    @staticmethod
    def _to_domain(orm: HoldingORM) -> Holding:
        """Convert ORM model to domain model."""
        return Holding(
            holding_id=orm.holding_id,
            symbol=orm.symbol,
            quantity=strip_zeros(Decimal(str(orm.quantity))),
            cost_basis=strip_zeros(Decimal(str(orm.cost_basis))),
            note=orm.note,
            created_at=to_utc(orm.created_at) if orm.created_at else None,
            updated_at=to_utc(orm.updated_at) if orm.updated_at else None,
        )
