"""Pydantic schemas for portfolio endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from cryptodash.api.schemas.holding import HoldingResponse


class HoldingValuationResponse(BaseModel):
    """Response schema for a valued holding."""

    model_config = {"from_attributes": True}

    holding: HoldingResponse
    total_cost: Decimal
    price: Optional[Decimal] = None
    market_value: Optional[Decimal] = None
    unrealized_pnl: Optional[Decimal] = None
    unrealized_pnl_pct: Optional[Decimal] = None
    change_24h_value: Optional[Decimal] = None


class AllocationItemResponse(BaseModel):
    """Response schema for a single allocation item."""

    model_config = {"from_attributes": True}

    symbol: str
    market_value: Decimal
    percentage: Decimal


class AllocationResponse(BaseModel):
    """Response schema for allocation breakdown."""

    items: list[AllocationItemResponse]
    total_value: Decimal
    as_of: Optional[datetime] = None


class PortfolioSummaryResponse(BaseModel):
    """Response schema for the valued portfolio."""

    model_config = {"from_attributes": True}

    valuations: list[HoldingValuationResponse]
    allocation: list[AllocationItemResponse]
    total_value: Decimal
    total_cost: Decimal
    unrealized_pnl: Decimal
    unrealized_pnl_pct: Optional[Decimal] = None
    change_24h_value: Decimal
    missing_symbols: list[str]
    stale: bool
    as_of: Optional[datetime] = None


class PortfolioSnapshotResponse(BaseModel):
    """Response schema for a recorded portfolio total."""

    model_config = {"from_attributes": True}

    total_value: Decimal
    total_cost: Decimal
    as_of: datetime
