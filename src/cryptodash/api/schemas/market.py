"""Pydantic schemas for price endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class PricePointResponse(BaseModel):
    """Response schema for an asset price point."""

    model_config = {"from_attributes": True}

    symbol: str
    price: Decimal
    change_24h_pct: Optional[Decimal] = None
    market_cap: Optional[Decimal] = None
    as_of: datetime
    source: str
    stale: bool = False


class HistoryPointResponse(BaseModel):
    """Response schema for a single history point."""

    model_config = {"from_attributes": True}

    timestamp: datetime
    price: Decimal


class HistoryResponse(BaseModel):
    """Response schema for a price history series."""

    symbol: str
    days: int
    points: list[HistoryPointResponse]


class PriceSnapshotResponse(BaseModel):
    """Response schema for a recorded price snapshot."""

    model_config = {"from_attributes": True}

    symbol: str
    price: Decimal
    change_24h_pct: Optional[Decimal] = None
    market_cap: Optional[Decimal] = None
    as_of: datetime
