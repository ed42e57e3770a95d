"""Holding repository protocol."""

from typing import Protocol, Optional

from cryptodash.domain.models import Holding


class HoldingRepository(Protocol):
    """Interface for holding data access."""

    def create(self, holding: Holding) -> Holding:
        """Persist a new holding."""
        ...

    def get_by_id(self, holding_id: str) -> Optional[Holding]:
        """Retrieve holding by ID."""
        ...

    def list_all(self) -> list[Holding]:
        """List all holdings ordered by symbol, then creation time."""
        ...

    def update(self, holding: Holding) -> Holding:
        """Update an existing holding."""
        ...

    def delete(self, holding_id: str) -> None:
        """Delete a holding (hard delete)."""
        ...
