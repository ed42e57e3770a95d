"""View models for portfolio and alert outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from cryptodash.domain.models import Holding, AlertSetting
from cryptodash.domain.views.market import PricePoint


@dataclass
class HoldingValuation:
    """A holding priced at the current market."""

    holding: Holding
    total_cost: Decimal
    price: Optional[Decimal] = None
    market_value: Optional[Decimal] = None
    unrealized_pnl: Optional[Decimal] = None
    unrealized_pnl_pct: Optional[Decimal] = None
    change_24h_value: Optional[Decimal] = None


@dataclass
class AllocationItem:
    """Single item in allocation breakdown."""

    symbol: str
    market_value: Decimal
    percentage: Decimal


@dataclass
class PortfolioSummary:
    """Valued portfolio with totals and allocation."""

    valuations: list[HoldingValuation] = field(default_factory=list)
    allocation: list[AllocationItem] = field(default_factory=list)
    total_value: Decimal = field(default_factory=lambda: Decimal("0"))
    total_cost: Decimal = field(default_factory=lambda: Decimal("0"))
    unrealized_pnl: Decimal = field(default_factory=lambda: Decimal("0"))
    unrealized_pnl_pct: Optional[Decimal] = None
    change_24h_value: Decimal = field(default_factory=lambda: Decimal("0"))
    missing_symbols: list[str] = field(default_factory=list)
    stale: bool = False
    as_of: Optional[datetime] = None

    @property
    def has_priced_holdings(self) -> bool:
        return any(v.market_value is not None for v in self.valuations)


@dataclass
class TriggeredAlert:
    """An alert whose condition held for the given price point."""

    alert: AlertSetting
    price_point: PricePoint
    message: str


@dataclass
class ImportSummary:
    """Summary of CSV import operation."""

    imported_count: int = 0
    error_count: int = 0
    errors: list[str] = field(default_factory=list)
