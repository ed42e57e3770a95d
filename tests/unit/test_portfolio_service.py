"""
Unit tests for PortfolioService.

Tests cover:
- Holding CRUD and validation
- Valuation: market value, unrealized P/L, 24h change
- Allocation by symbol
- Missing, stale and unavailable prices
"""

from decimal import Decimal

import pytest

from cryptodash.core.exceptions import NotFoundError, ValidationError
from cryptodash.services import MarketDataService, PortfolioService, HoldingCreate, HoldingUpdate

from tests.conftest import DeterministicMarketProvider, SwitchableMarketProvider


# =============================================================================
# CRUD TESTS
# =============================================================================


class TestHoldingCrud:
    """Tests for holding management."""

    def test_add_holding_normalizes_input(self, portfolio_service: PortfolioService):
        """
        GIVEN a lowercase symbol and string numbers
        WHEN the holding is added
        THEN it is stored with an uppercase symbol and Decimal values
        """
        holding = portfolio_service.add_holding(
            HoldingCreate(symbol=" btc ", quantity="0.5", cost_basis="42000", note="  Cold wallet ")
        )

        assert holding.symbol == "BTC"
        assert holding.quantity == Decimal("0.5")
        assert holding.cost_basis == Decimal("42000")
        assert holding.note == "Cold wallet"
        assert holding.total_cost == Decimal("21000")
        assert holding.created_at is not None

    def test_quantity_keeps_full_precision(self, portfolio_service: PortfolioService):
        holding = portfolio_service.add_holding(HoldingCreate(symbol="BTC", quantity="0.00012345"))

        assert portfolio_service.get_holding(holding.holding_id).quantity == Decimal("0.00012345")

    @pytest.mark.parametrize("quantity", ["0.00000000001", "1.123456789012345678", "123456789.000000000000000001"])
    def test_quantity_round_trips_to_wei(self, portfolio_service: PortfolioService, quantity):
        """
        GIVEN a quantity with up to 18 decimal places
        WHEN stored and read back
        THEN every digit survives and the value stays positive
        """
        holding = portfolio_service.add_holding(
            HoldingCreate(symbol="ETH", quantity=quantity, cost_basis="0.000000000000000001")
        )

        loaded = portfolio_service.get_holding(holding.holding_id)

        assert loaded.quantity == Decimal(quantity)
        assert loaded.quantity > 0
        assert loaded.cost_basis == Decimal("0.000000000000000001")

    def test_more_than_18_places_rejected(self, portfolio_service: PortfolioService, holding_factory):
        with pytest.raises(ValidationError, match="18 decimal places"):
            portfolio_service.add_holding(HoldingCreate(symbol="ETH", quantity="0.0000000000000000001"))
        with pytest.raises(ValidationError, match="18 decimal places"):
            portfolio_service.add_holding(HoldingCreate(symbol="ETH", quantity="1", cost_basis="1.0000000000000000001"))

        holding = holding_factory(symbol="ETH", quantity="1")
        with pytest.raises(ValidationError):
            portfolio_service.update_holding(holding.holding_id, HoldingUpdate(quantity="1.0000000000000000001"))

    def test_trailing_zeros_do_not_count_as_places(self, portfolio_service: PortfolioService):
        holding = portfolio_service.add_holding(HoldingCreate(symbol="ETH", quantity="2.50000000000000000000"))

        assert portfolio_service.get_holding(holding.holding_id).quantity == Decimal("2.5")

    @pytest.mark.parametrize(
        "data",
        [
            HoldingCreate(symbol="BT-C", quantity="1"),
            HoldingCreate(symbol="", quantity="1"),
            HoldingCreate(symbol="BTC", quantity="0"),
            HoldingCreate(symbol="BTC", quantity="-1"),
            HoldingCreate(symbol="BTC", quantity="abc"),
            HoldingCreate(symbol="BTC", quantity="1", cost_basis="-5"),
            HoldingCreate(symbol="BTC", quantity="1", note="x" * 501),
        ],
    )
    def test_invalid_holding_rejected(self, portfolio_service: PortfolioService, data):
        with pytest.raises(ValidationError):
            portfolio_service.add_holding(data)

    def test_partial_update_keeps_other_fields(self, portfolio_service, holding_factory):
        """
        GIVEN a holding with cost basis 40000
        WHEN only the quantity is updated
        THEN the cost basis and note are unchanged
        """
        holding = holding_factory("BTC", Decimal("1"), Decimal("40000"), note="lot 1")

        updated = portfolio_service.update_holding(holding.holding_id, HoldingUpdate(quantity="2"))

        assert updated.quantity == Decimal("2")
        assert updated.cost_basis == Decimal("40000")
        assert updated.note == "lot 1"

    def test_update_missing_holding_raises(self, portfolio_service):
        with pytest.raises(NotFoundError):
            portfolio_service.update_holding("missing", HoldingUpdate(quantity="1"))

    def test_delete_holding(self, portfolio_service, holding_factory):
        holding = holding_factory()

        portfolio_service.delete_holding(holding.holding_id)

        assert portfolio_service.list_holdings() == []
        with pytest.raises(NotFoundError):
            portfolio_service.delete_holding(holding.holding_id)

    def test_held_symbols_are_distinct(self, portfolio_service, holding_factory):
        holding_factory("ETH")
        holding_factory("BTC")
        holding_factory("BTC")

        assert portfolio_service.held_symbols() == ["BTC", "ETH"]


# =============================================================================
# VALUATION TESTS
# =============================================================================


class TestSummary:
    """Tests for portfolio valuation."""

    @pytest.fixture
    def two_holdings(self, holding_factory):
        # BTC: 0.5 @ 40000 -> value 30000, cost 20000
        # ETH: 2 @ 3500 -> value 6000, cost 7000
        holding_factory("BTC", Decimal("0.5"), Decimal("40000"))
        holding_factory("ETH", Decimal("2"), Decimal("3500"))

    def test_totals_and_pnl(self, portfolio_service, two_holdings):
        """
        GIVEN BTC and ETH holdings
        WHEN the summary is computed at BTC=60000, ETH=3000
        THEN totals and unrealized P/L match quantity x price minus cost
        """
        summary = portfolio_service.summary()

        assert summary.total_value == Decimal("36000.00")
        assert summary.total_cost == Decimal("27000.00")
        assert summary.unrealized_pnl == Decimal("9000.00")
        assert summary.unrealized_pnl_pct == Decimal("33.33")
        assert summary.missing_symbols == []
        assert summary.stale is False

    def test_per_holding_valuation(self, portfolio_service, two_holdings):
        summary = portfolio_service.summary()
        by_symbol = {v.holding.symbol: v for v in summary.valuations}

        btc = by_symbol["BTC"]
        assert btc.price == Decimal("60000.00")
        assert btc.market_value == Decimal("30000.00")
        assert btc.unrealized_pnl == Decimal("10000.00")
        assert btc.unrealized_pnl_pct == Decimal("50.00")

        eth = by_symbol["ETH"]
        assert eth.unrealized_pnl == Decimal("-1000.00")
        assert eth.unrealized_pnl_pct == Decimal("-14.29")

    def test_change_24h_value(self, portfolio_service, two_holdings):
        """
        GIVEN BTC up 2.5% and ETH down 1% over 24h
        WHEN the summary is computed
        THEN the 24h change is value minus value / (1 + pct/100), summed
        """
        summary = portfolio_service.summary()
        by_symbol = {v.holding.symbol: v for v in summary.valuations}

        assert by_symbol["BTC"].change_24h_value == Decimal("731.71")
        assert by_symbol["ETH"].change_24h_value == Decimal("-60.61")
        assert summary.change_24h_value == Decimal("671.10")

    def test_allocation_sorted_by_value(self, portfolio_service, two_holdings):
        allocation = portfolio_service.summary().allocation

        assert [a.symbol for a in allocation] == ["BTC", "ETH"]
        assert allocation[0].percentage == Decimal("83.33")
        assert allocation[1].percentage == Decimal("16.67")

    def test_lots_of_same_symbol_merge_in_allocation(self, portfolio_service, holding_factory):
        holding_factory("BTC", Decimal("0.5"))
        holding_factory("BTC", Decimal("0.25"))

        summary = portfolio_service.summary()

        assert len(summary.valuations) == 2
        assert len(summary.allocation) == 1
        assert summary.allocation[0].market_value == Decimal("45000.00")
        assert summary.allocation[0].percentage == Decimal("100.00")

    def test_zero_cost_basis_has_no_pnl_pct(self, portfolio_service, holding_factory):
        holding_factory("SOL", Decimal("10"))

        summary = portfolio_service.summary()

        assert summary.valuations[0].unrealized_pnl == Decimal("1500.00")
        assert summary.valuations[0].unrealized_pnl_pct is None
        assert summary.unrealized_pnl_pct is None

    def test_missing_price_is_reported_not_counted(self, portfolio_service, holding_factory):
        """
        GIVEN a holding in a symbol the provider does not price
        WHEN the summary is computed
        THEN the symbol is listed as missing and excluded from totals
        """
        holding_factory("BTC", Decimal("1"))
        holding_factory("XYZ", Decimal("100"), Decimal("2"))

        summary = portfolio_service.summary()

        assert summary.missing_symbols == ["XYZ"]
        assert summary.total_value == Decimal("60000.00")
        assert summary.total_cost == Decimal("0")
        unpriced = [v for v in summary.valuations if v.holding.symbol == "XYZ"][0]
        assert unpriced.price is None
        assert unpriced.market_value is None
        assert unpriced.total_cost == Decimal("200.00")

    def test_empty_portfolio(self, portfolio_service):
        summary = portfolio_service.summary()

        assert summary.valuations == []
        assert summary.total_value == Decimal("0")
        assert summary.has_priced_holdings is False

    def test_unavailable_market_gives_unpriced_summary(self, holding_repo, failing_provider, fake_clock):
        service = PortfolioService(holding_repo, MarketDataService(failing_provider, clock=fake_clock))
        service.add_holding(HoldingCreate(symbol="BTC", quantity="1"))

        summary = service.summary()

        assert summary.missing_symbols == ["BTC"]
        assert summary.has_priced_holdings is False

    def test_stale_prices_flag_summary(self, holding_repo, fake_clock):
        provider = SwitchableMarketProvider(DeterministicMarketProvider())
        service = PortfolioService(holding_repo, MarketDataService(provider, clock=fake_clock))
        service.add_holding(HoldingCreate(symbol="BTC", quantity="1"))
        service.summary()

        provider.failing = True
        fake_clock.advance(120)
        summary = service.summary()

        assert summary.stale is True
        assert summary.total_value == Decimal("60000.00")

    def test_prices_can_be_supplied(self, portfolio_service, holding_factory, deterministic_provider):
        holding_factory("ETH", Decimal("1"))
        prices = deterministic_provider.get_prices(["ETH"])
        calls_before = len(deterministic_provider.price_calls)

        summary = portfolio_service.summary(prices=prices)

        assert summary.total_value == Decimal("3000.00")
        assert len(deterministic_provider.price_calls) == calls_before
