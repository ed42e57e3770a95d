"""Historical snapshot models."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class PriceSnapshot:
    """A recorded price point for one symbol."""

    snapshot_id: str
    symbol: str
    price: Decimal
    as_of: datetime
    change_24h_pct: Optional[Decimal] = None
    market_cap: Optional[Decimal] = None
    recorded_at: Optional[datetime] = field(default=None)


@dataclass
class PortfolioSnapshot:
    """A recorded total valuation of the portfolio."""

    snapshot_id: str
    total_value: Decimal
    total_cost: Decimal
    as_of: datetime
