"""Alert setting domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from cryptodash.domain.models.enums import AlertCondition


@dataclass
class AlertSetting:
    """User notification preference for a symbol."""

    alert_id: str
    symbol: str
    condition: AlertCondition
    threshold: Decimal
    enabled: bool = True
    note: Optional[str] = None
    created_at: Optional[datetime] = field(default=None)
    last_triggered_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.condition, str):
            self.condition = AlertCondition(self.condition)
