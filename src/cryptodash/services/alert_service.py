"""Alert service: user alert settings and their evaluation."""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional, Union

from cryptodash.core.exceptions import NotFoundError, ValidationError
from cryptodash.core.money import to_decimal
from cryptodash.core.symbols import normalize_symbol, validate_symbol
from cryptodash.core.timezone import now_utc
from cryptodash.domain.models import AlertSetting, AlertCondition
from cryptodash.domain.views import PricePoint, TriggeredAlert
from cryptodash.repositories.protocols import AlertRepository

logger = logging.getLogger(__name__)

Number = Union[Decimal, int, float, str]


@dataclass
class AlertCreate:
    """Input data for creating an alert setting."""

    symbol: str
    condition: AlertCondition
    threshold: Number
    enabled: bool = True
    note: Optional[str] = None


@dataclass
class AlertUpdate:
    """Partial update data for an alert setting."""

    threshold: Optional[Number] = None
    enabled: Optional[bool] = None
    note: Optional[str] = None


class AlertService:
    """
    Service for alert settings.

    An alert fires when its condition holds for a fresh price and at least
    cooldown_minutes have passed since it last fired.
    """

    def __init__(self, alert_repo: AlertRepository, cooldown_minutes: int = 30):
        self._repo = alert_repo
        self._cooldown = timedelta(minutes=cooldown_minutes)

    def create_alert(self, data: AlertCreate) -> AlertSetting:
        """Validate and persist a new alert setting."""
        if not validate_symbol(data.symbol):
            raise ValidationError(f"Invalid symbol: {data.symbol!r}")
        try:
            condition = AlertCondition(data.condition)
        except ValueError:
            raise ValidationError(f"Invalid alert condition: {data.condition!r}")

        alert = AlertSetting(
            alert_id=str(uuid.uuid4()),
            symbol=normalize_symbol(data.symbol),
            condition=condition,
            threshold=self._validate_threshold(data.threshold),
            enabled=data.enabled,
            note=(data.note or "").strip() or None,
            created_at=now_utc(),
        )
        return self._repo.create(alert)

    def get_alert(self, alert_id: str) -> AlertSetting:
        """Get alert setting by ID."""
        alert = self._repo.get_by_id(alert_id)
        if not alert:
            raise NotFoundError("Alert", alert_id)
        return alert

    def list_alerts(self, enabled_only: bool = False) -> list[AlertSetting]:
        """List alert settings."""
        return self._repo.list_all(enabled_only=enabled_only)

    def update_alert(self, alert_id: str, data: AlertUpdate) -> AlertSetting:
        """Apply a partial update to an alert setting."""
        alert = self.get_alert(alert_id)
        if data.threshold is not None:
            alert.threshold = self._validate_threshold(data.threshold)
        if data.enabled is not None:
            alert.enabled = data.enabled
        if data.note is not None:
            alert.note = data.note.strip() or None
        return self._repo.update(alert)

    def delete_alert(self, alert_id: str) -> None:
        """Delete an alert setting."""
        self.get_alert(alert_id)
        self._repo.delete(alert_id)

    def symbols(self) -> list[str]:
        """Distinct symbols watched by enabled alerts."""
        return sorted({a.symbol for a in self._repo.list_all(enabled_only=True)})

    def evaluate(
        self,
        prices: dict[str, PricePoint],
        now: Optional[datetime] = None,
    ) -> list[TriggeredAlert]:
        """
        Check enabled alerts against prices and record the ones that fire.

        Stale prices never trigger an alert.
        """
        now = now or now_utc()
        triggered: list[TriggeredAlert] = []

        for alert in self._repo.list_all(enabled_only=True):
            point = prices.get(alert.symbol)
            if point is None or point.stale:
                continue
            if not self._condition_holds(alert, point):
                continue
            if alert.last_triggered_at and now - alert.last_triggered_at < self._cooldown:
                continue

            alert.last_triggered_at = now
            self._repo.update(alert)
            message = self._format_message(alert, point)
            logger.info("Alert %s triggered: %s", alert.alert_id, message)
            triggered.append(TriggeredAlert(alert=alert, price_point=point, message=message))

        return triggered

    @staticmethod
    def _condition_holds(alert: AlertSetting, point: PricePoint) -> bool:
        if alert.condition == AlertCondition.PRICE_ABOVE:
            return point.price >= alert.threshold
        if alert.condition == AlertCondition.PRICE_BELOW:
            return point.price <= alert.threshold
        if alert.condition == AlertCondition.CHANGE_24H_ABOVE:
            return point.change_24h_pct is not None and abs(point.change_24h_pct) >= alert.threshold
        return False

    @staticmethod
    def _format_message(alert: AlertSetting, point: PricePoint) -> str:
        if alert.condition == AlertCondition.PRICE_ABOVE:
            return f"{alert.symbol} is at {point.price}, at or above {alert.threshold}"
        if alert.condition == AlertCondition.PRICE_BELOW:
            return f"{alert.symbol} is at {point.price}, at or below {alert.threshold}"
        return f"{alert.symbol} moved {point.change_24h_pct}% in 24h (threshold {alert.threshold}%)"

    @staticmethod
    def _validate_threshold(value: Number) -> Decimal:
        threshold = to_decimal(value)
        if threshold <= 0:
            raise ValidationError("Threshold must be greater than zero")
        return threshold
