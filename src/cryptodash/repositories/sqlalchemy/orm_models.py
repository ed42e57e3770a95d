"""SQLAlchemy ORM model definitions."""

from decimal import Decimal

from sqlalchemy import (
    Column,
    String,
    DateTime,
    Boolean,
    Text,
    Numeric,
    Index,
    Enum as SqlEnum,
)
from sqlalchemy.types import TypeDecorator

from cryptodash.core.money import strip_zeros
from cryptodash.repositories.sqlalchemy.database import Base


class DecimalString(TypeDecorator):
    """Exact Decimal stored as text (SQLite keeps Numeric as a float)."""

    impl = String(64)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return format(strip_zeros(Decimal(str(value))), "f")

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)
from cryptodash.domain.models.enums import AlertCondition


class HoldingORM(Base):
    """SQLAlchemy model for Holding."""

    __tablename__ = "holdings"

    holding_id = Column(String(36), primary_key=True)
    symbol = Column(String(15), nullable=False, index=True)
    quantity = Column(DecimalString, nullable=False)
    cost_basis = Column(DecimalString, nullable=False)
    note = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=True)


class PriceSnapshotORM(Base):
    """SQLAlchemy model for PriceSnapshot."""

    __tablename__ = "price_snapshots"
    __table_args__ = (Index("ix_price_snapshots_symbol_as_of", "symbol", "as_of"),)

    snapshot_id = Column(String(36), primary_key=True)
    symbol = Column(String(15), nullable=False)
    price = Column(Numeric(precision=28, scale=10), nullable=False)
    change_24h_pct = Column(Numeric(precision=12, scale=4), nullable=True)
    market_cap = Column(Numeric(precision=28, scale=2), nullable=True)
    as_of = Column(DateTime, nullable=False)
    recorded_at = Column(DateTime, nullable=False)


class PortfolioSnapshotORM(Base):
    """SQLAlchemy model for PortfolioSnapshot."""

    __tablename__ = "portfolio_snapshots"

    snapshot_id = Column(String(36), primary_key=True)
    total_value = Column(Numeric(precision=28, scale=2), nullable=False)
    total_cost = Column(Numeric(precision=28, scale=2), nullable=False)
    as_of = Column(DateTime, nullable=False, index=True)


class AlertSettingORM(Base):
    """SQLAlchemy model for AlertSetting."""

    __tablename__ = "alert_settings"

    alert_id = Column(String(36), primary_key=True)
    symbol = Column(String(15), nullable=False, index=True)
    condition = Column(SqlEnum(AlertCondition), nullable=False)
    threshold = Column(Numeric(precision=28, scale=10), nullable=False)
    enabled = Column(Boolean, nullable=False, default=True)
    note = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False)
    last_triggered_at = Column(DateTime, nullable=True)
