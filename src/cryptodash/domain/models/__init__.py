"""Domain models package."""

from cryptodash.domain.models.enums import AlertCondition
from cryptodash.domain.models.holding import Holding
from cryptodash.domain.models.snapshot import PriceSnapshot, PortfolioSnapshot
from cryptodash.domain.models.alert import AlertSetting

__all__ = [
    "AlertCondition",
    "Holding",
    "PriceSnapshot",
    "PortfolioSnapshot",
    "AlertSetting",
]
