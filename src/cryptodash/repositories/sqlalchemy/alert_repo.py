"""SQLAlchemy implementation of AlertRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from cryptodash.core.exceptions import NotFoundError
from cryptodash.core.money import strip_zeros
from cryptodash.core.timezone import to_naive_utc, to_utc
from cryptodash.domain.models import AlertSetting
from cryptodash.repositories.sqlalchemy.orm_models import AlertSettingORM


class SqlAlchemyAlertRepository:
    """SQLAlchemy-backed alert setting repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, alert: AlertSetting) -> AlertSetting:
        """Persist a new alert setting."""
        orm_alert = AlertSettingORM(
            alert_id=alert.alert_id,
            symbol=alert.symbol,
            condition=alert.condition,
            threshold=alert.threshold,
            enabled=alert.enabled,
            note=alert.note,
            created_at=to_naive_utc(alert.created_at),
            last_triggered_at=(
                to_naive_utc(alert.last_triggered_at) if alert.last_triggered_at else None
            ),
        )
        self._db.add(orm_alert)
        self._db.commit()
        self._db.refresh(orm_alert)
        return self._to_domain(orm_alert)

    def get_by_id(self, alert_id: str) -> Optional[AlertSetting]:
        """Retrieve alert setting by ID."""
        orm_alert = self._db.query(AlertSettingORM).filter(
            AlertSettingORM.alert_id == alert_id
        ).first()
        return self._to_domain(orm_alert) if orm_alert else None

    def list_all(self, enabled_only: bool = False) -> list[AlertSetting]:
        """List alert settings ordered by symbol."""
        query = self._db.query(AlertSettingORM)
        if enabled_only:
            query = query.filter(AlertSettingORM.enabled.is_(True))
        orm_alerts = query.order_by(AlertSettingORM.symbol, AlertSettingORM.created_at).all()
        return [self._to_domain(a) for a in orm_alerts]

    def update(self, alert: AlertSetting) -> AlertSetting:
        """Update an existing alert setting."""
        orm_alert = self._db.query(AlertSettingORM).filter(
            AlertSettingORM.alert_id == alert.alert_id
        ).first()
        if not orm_alert:
            raise NotFoundError("Alert", alert.alert_id)

        orm_alert.threshold = alert.threshold
        orm_alert.enabled = alert.enabled
        orm_alert.note = alert.note
        orm_alert.last_triggered_at = (
            to_naive_utc(alert.last_triggered_at) if alert.last_triggered_at else None
        )
        self._db.commit()
        self._db.refresh(orm_alert)
        return self._to_domain(orm_alert)

    def delete(self, alert_id: str) -> None:
        """Delete an alert setting."""
        self._db.query(AlertSettingORM).filter(
            AlertSettingORM.alert_id == alert_id
        ).delete()
        self._db.commit()

    @staticmethod
    def _to_domain(orm: AlertSettingORM) -> AlertSetting:
        """Convert ORM model to domain model."""
        return AlertSetting(
            alert_id=orm.alert_id,
            symbol=orm.symbol,
            condition=orm.condition,
            threshold=strip_zeros(Decimal(str(orm.threshold))),
            enabled=bool(orm.enabled),
            note=orm.note,
            created_at=to_utc(orm.created_at) if orm.created_at else None,
            last_triggered_at=to_utc(orm.last_triggered_at) if orm.last_triggered_at else None,
        )
