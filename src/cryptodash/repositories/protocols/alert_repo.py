"""Alert setting repository protocol."""

from typing import Protocol, Optional

from cryptodash.domain.models import AlertSetting


class AlertRepository(Protocol):
    """Interface for alert setting data access."""

    def create(self, alert: AlertSetting) -> AlertSetting:
        """Persist a new alert setting."""
        ...

    def get_by_id(self, alert_id: str) -> Optional[AlertSetting]:
        """Retrieve alert setting by ID."""
        ...

    def list_all(self, enabled_only: bool = False) -> list[AlertSetting]:
        """List alert settings ordered by symbol."""
        ...

    def update(self, alert: AlertSetting) -> AlertSetting:
        """Update an existing alert setting."""
        ...

    def delete(self, alert_id: str) -> None:
        """Delete an alert setting."""
        ...
