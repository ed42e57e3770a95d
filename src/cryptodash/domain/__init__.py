"""Domain layer - pure business models with no external dependencies."""

from cryptodash.domain.models import (
    AlertCondition,
    Holding,
    PriceSnapshot,
    PortfolioSnapshot,
    AlertSetting,
)

__all__ = [
    "AlertCondition",
    "Holding",
    "PriceSnapshot",
    "PortfolioSnapshot",
    "AlertSetting",
]
