"""View models for service outputs."""

from cryptodash.domain.views.market import PricePoint, HistoryPoint
from cryptodash.domain.views.portfolio import (
    HoldingValuation,
    AllocationItem,
    PortfolioSummary,
    TriggeredAlert,
    ImportSummary,
)

__all__ = [
    "PricePoint",
    "HistoryPoint",
    "HoldingValuation",
    "AllocationItem",
    "PortfolioSummary",
    "TriggeredAlert",
    "ImportSummary",
]
