"""Pydantic schemas for alert endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from cryptodash.api.schemas.market import PricePointResponse
from cryptodash.domain.models.enums import AlertCondition


class AlertCreateRequest(BaseModel):
    """Request schema for creating an alert setting."""

    symbol: str = Field(..., min_length=1, max_length=15)
    condition: AlertCondition
    threshold: Decimal = Field(..., gt=0)
    enabled: bool = True
    note: Optional[str] = Field(default=None, max_length=500)


class AlertUpdateRequest(BaseModel):
    """Request schema for a partial alert update."""

    threshold: Optional[Decimal] = Field(default=None, gt=0)
    enabled: Optional[bool] = None
    note: Optional[str] = Field(default=None, max_length=500)


class AlertResponse(BaseModel):
    """Response schema for an alert setting."""

    model_config = {"from_attributes": True}

    alert_id: str
    symbol: str
    condition: AlertCondition
    threshold: Decimal
    enabled: bool
    note: Optional[str] = None
    created_at: Optional[datetime] = None
    last_triggered_at: Optional[datetime] = None


class TriggeredAlertResponse(BaseModel):
    """Response schema for an alert that fired."""

    model_config = {"from_attributes": True}

    alert: AlertResponse
    price_point: PricePointResponse
    message: str
