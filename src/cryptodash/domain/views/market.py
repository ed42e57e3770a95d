"""View models for market data."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class PricePoint:
    """Current price of an asset as reported by a market-data provider."""

    symbol: str
    price: Decimal
    as_of: datetime
    change_24h_pct: Optional[Decimal] = None
    market_cap: Optional[Decimal] = None
    source: str = ""
    stale: bool = False


@dataclass
class HistoryPoint:
    """One point of a price history series."""

    timestamp: datetime
    price: Decimal
