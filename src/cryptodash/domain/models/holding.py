"""Holding domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Holding:
    """
    A user-entered portfolio position.

    cost_basis is the average acquisition price per unit in the quote currency.
    Several holdings may share a symbol (separate lots).
    """

    holding_id: str
    symbol: str
    quantity: Decimal
    cost_basis: Decimal = field(default_factory=lambda: Decimal("0"))
    note: Optional[str] = None
    created_at: Optional[datetime] = field(default=None)
    updated_at: Optional[datetime] = field(default=None)

    @property
    def total_cost(self) -> Decimal:
        """Total amount paid for this holding."""
        return self.quantity * self.cost_basis
