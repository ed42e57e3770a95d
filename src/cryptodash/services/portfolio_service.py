"""Portfolio service for holdings management and valuation."""

import logging
import uuid
from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Union

from cryptodash.core.exceptions import MarketDataUnavailableError, NotFoundError, ValidationError
from cryptodash.core.money import (
    MAX_DECIMAL_PLACES,
    decimal_places,
    to_decimal,
    quantize_money,
    quantize_pct,
)
from cryptodash.core.symbols import normalize_symbol, validate_symbol
from cryptodash.core.timezone import now_utc
from cryptodash.domain.models import Holding
from cryptodash.domain.views import (
    AllocationItem,
    HoldingValuation,
    PortfolioSummary,
    PricePoint,
)
from cryptodash.repositories.protocols import HoldingRepository
from cryptodash.services.market_data_service import MarketDataService

logger = logging.getLogger(__name__)

Number = Union[Decimal, int, float, str]

_NOTE_MAX_LENGTH = 500


def _check_places(value: Decimal, field: str) -> None:
    if decimal_places(value) > MAX_DECIMAL_PLACES:
        raise ValidationError(f"{field} supports at most {MAX_DECIMAL_PLACES} decimal places")


@dataclass
class HoldingCreate:
    """Input data for creating a holding."""

    symbol: str
    quantity: Number
    cost_basis: Number = Decimal("0")
    note: Optional[str] = None


@dataclass
class HoldingUpdate:
    """Partial update data for editing a holding."""

    symbol: Optional[str] = None
    quantity: Optional[Number] = None
    cost_basis: Optional[Number] = None
    note: Optional[str] = None


class PortfolioService:
    """
    Service for managing holdings and valuing them at market prices.

    Holdings are user input; prices are never stored on them.
    """

    def __init__(
        self,
        holding_repo: HoldingRepository,
        market_data_service: MarketDataService,
    ):
        self._holding_repo = holding_repo
        self._market = market_data_service

    # CRUD

    def add_holding(self, data: HoldingCreate) -> Holding:
        """Validate and persist a new holding."""
        symbol = self._validate_symbol(data.symbol)
        quantity = self._validate_quantity(data.quantity)
        cost_basis = self._validate_cost_basis(data.cost_basis)
        note = self._validate_note(data.note)

        now = now_utc()
        holding = Holding(
            holding_id=str(uuid.uuid4()),
            symbol=symbol,
            quantity=quantity,
            cost_basis=cost_basis,
            note=note,
            created_at=now,
            updated_at=now,
        )
        created = self._holding_repo.create(holding)
        logger.info("Added holding %s: %s %s", created.holding_id, created.quantity, created.symbol)
        return created

    def get_holding(self, holding_id: str) -> Holding:
        """Get holding by ID."""
        holding = self._holding_repo.get_by_id(holding_id)
        if not holding:
            raise NotFoundError("Holding", holding_id)
        return holding

    def list_holdings(self) -> list[Holding]:
        """List all holdings."""
        return self._holding_repo.list_all()

    def update_holding(self, holding_id: str, data: HoldingUpdate) -> Holding:
        """Apply a partial update; omitted fields keep their values."""
        holding = self.get_holding(holding_id)

        if data.symbol is not None:
            holding.symbol = self._validate_symbol(data.symbol)
        if data.quantity is not None:
            holding.quantity = self._validate_quantity(data.quantity)
        if data.cost_basis is not None:
            holding.cost_basis = self._validate_cost_basis(data.cost_basis)
        if data.note is not None:
            holding.note = self._validate_note(data.note)
        holding.updated_at = now_utc()

        return self._holding_repo.update(holding)

    def delete_holding(self, holding_id: str) -> None:
        """Delete a holding."""
        self.get_holding(holding_id)
        self._holding_repo.delete(holding_id)
        logger.info("Deleted holding %s", holding_id)

    def held_symbols(self) -> list[str]:
        """Distinct symbols across all holdings, sorted."""
        return sorted({h.symbol for h in self._holding_repo.list_all()})

    # Valuation

    def summary(self, prices: Optional[dict[str, PricePoint]] = None) -> PortfolioSummary:
        """
        Value every holding at current prices.

        market_value = quantity x price; unrealized P/L is measured against
        quantity x cost_basis. Holdings without a price are reported in
        missing_symbols and left out of the totals.
        """
        holdings = self._holding_repo.list_all()
        as_of = now_utc()
        if not holdings:
            return PortfolioSummary(as_of=as_of)

        if prices is None:
            try:
                prices = self._market.get_prices(sorted({h.symbol for h in holdings}))
            except MarketDataUnavailableError as e:
                logger.warning("Valuing portfolio without prices: %s", e.message)
                prices = {}

        valuations: list[HoldingValuation] = []
        by_symbol: dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
        missing: set[str] = set()
        total_value = Decimal("0")
        total_cost = Decimal("0")
        change_24h = Decimal("0")
        stale = False

        for holding in holdings:
            cost = quantize_money(holding.total_cost)
            point = prices.get(holding.symbol)
            if point is None:
                missing.add(holding.symbol)
                valuations.append(HoldingValuation(holding=holding, total_cost=cost))
                continue

            market_value = quantize_money(holding.quantity * point.price)
            pnl = market_value - cost
            pnl_pct = quantize_pct(pnl / cost * 100) if cost != 0 else None
            value_change = self._change_24h_value(market_value, point.change_24h_pct)

            valuations.append(
                HoldingValuation(
                    holding=holding,
                    total_cost=cost,
                    price=point.price,
                    market_value=market_value,
                    unrealized_pnl=pnl,
                    unrealized_pnl_pct=pnl_pct,
                    change_24h_value=value_change,
                )
            )
            by_symbol[holding.symbol] += market_value
            total_value += market_value
            total_cost += cost
            if value_change is not None:
                change_24h += value_change
            stale = stale or point.stale

        total_pnl = total_value - total_cost
        return PortfolioSummary(
            valuations=valuations,
            allocation=self._allocation(by_symbol, total_value),
            total_value=total_value,
            total_cost=total_cost,
            unrealized_pnl=total_pnl,
            unrealized_pnl_pct=quantize_pct(total_pnl / total_cost * 100) if total_cost != 0 else None,
            change_24h_value=quantize_money(change_24h),
            missing_symbols=sorted(missing),
            stale=stale,
            as_of=as_of,
        )

    @staticmethod
    def _change_24h_value(market_value: Decimal, change_pct: Optional[Decimal]) -> Optional[Decimal]:
        """Value gained over 24h: current value minus the value implied by the % move."""
        if change_pct is None:
            return None
        factor = 1 + change_pct / 100
        if factor <= 0:
            return None
        return quantize_money(market_value - market_value / factor)

    @staticmethod
    def _allocation(by_symbol: dict[str, Decimal], total_value: Decimal) -> list[AllocationItem]:
        items = [
            AllocationItem(
                symbol=symbol,
                market_value=value,
                percentage=quantize_pct(value / total_value * 100) if total_value != 0 else Decimal("0"),
            )
            for symbol, value in by_symbol.items()
        ]
        # Sort by market value descending
        items.sort(key=lambda x: (-x.market_value, x.symbol))
        return items

    # Validation

    @staticmethod
    def _validate_symbol(symbol: Optional[str]) -> str:
        if not validate_symbol(symbol):
            raise ValidationError(f"Invalid symbol: {symbol!r}")
        return normalize_symbol(symbol)

    @staticmethod
    def _validate_quantity(value: Number) -> Decimal:
        quantity = to_decimal(value)
        if quantity <= 0:
            raise ValidationError("Quantity must be greater than zero")
        _check_places(quantity, "Quantity")
        return quantity

    @staticmethod
    def _validate_cost_basis(value: Number) -> Decimal:
        cost_basis = to_decimal(value)
        if cost_basis < 0:
            raise ValidationError("Cost basis cannot be negative")
        _check_places(cost_basis, "Cost basis")
        return cost_basis

    @staticmethod
    def _validate_note(note: Optional[str]) -> Optional[str]:
        if note is None:
            return None
        note = note.strip()
        if len(note) > _NOTE_MAX_LENGTH:
            raise ValidationError(f"Note must be at most {_NOTE_MAX_LENGTH} characters")
        return note or None
