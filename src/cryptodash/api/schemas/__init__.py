"""Pydantic schemas for API request/response."""

from cryptodash.api.schemas.market import (
    PricePointResponse,
    HistoryPointResponse,
    HistoryResponse,
    PriceSnapshotResponse,
)
from cryptodash.api.schemas.holding import (
    HoldingCreateRequest,
    HoldingUpdateRequest,
    HoldingResponse,
    ImportSummaryResponse,
)
from cryptodash.api.schemas.portfolio import (
    HoldingValuationResponse,
    AllocationItemResponse,
    AllocationResponse,
    PortfolioSummaryResponse,
    PortfolioSnapshotResponse,
)
from cryptodash.api.schemas.alert import (
    AlertCreateRequest,
    AlertUpdateRequest,
    AlertResponse,
    TriggeredAlertResponse,
)

__all__ = [
    "PricePointResponse",
    "HistoryPointResponse",
    "HistoryResponse",
    "PriceSnapshotResponse",
    "HoldingCreateRequest",
    "HoldingUpdateRequest",
    "HoldingResponse",
    "ImportSummaryResponse",
    "HoldingValuationResponse",
    "AllocationItemResponse",
    "AllocationResponse",
    "PortfolioSummaryResponse",
    "PortfolioSnapshotResponse",
    "AlertCreateRequest",
    "AlertUpdateRequest",
    "AlertResponse",
    "TriggeredAlertResponse",
]
