"""Pydantic schemas for holding endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class HoldingCreateRequest(BaseModel):
    """Request schema for creating a holding."""

    symbol: str = Field(..., min_length=1, max_length=15, description="Ticker symbol, e.g. BTC")
    quantity: Decimal = Field(..., gt=0, description="Units held")
    cost_basis: Decimal = Field(default=Decimal("0"), ge=0, description="Average price paid per unit")
    note: Optional[str] = Field(default=None, max_length=500)


class HoldingUpdateRequest(BaseModel):
    """Request schema for a partial holding update."""

    symbol: Optional[str] = Field(default=None, min_length=1, max_length=15)
    quantity: Optional[Decimal] = Field(default=None, gt=0)
    cost_basis: Optional[Decimal] = Field(default=None, ge=0)
    note: Optional[str] = Field(default=None, max_length=500)


class HoldingResponse(BaseModel):
    """Response schema for a single holding."""

    model_config = {"from_attributes": True}

    holding_id: str
    symbol: str
    quantity: Decimal
    cost_basis: Decimal
    total_cost: Decimal
    note: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ImportSummaryResponse(BaseModel):
    """Response schema for a CSV import."""

    imported_count: int
    error_count: int
    errors: list[str]
