"""
Unit tests for ChartService.

Tests cover:
- Price history SVG rendering
- Allocation pie rendering (including empty portfolio)
- Error placeholder SVG
"""

from datetime import timedelta
from decimal import Decimal

from cryptodash.domain.views import AllocationItem, HistoryPoint
from cryptodash.services import ChartService, error_placeholder_svg


class TestPriceHistoryChart:
    """Tests for price history charts."""

    def test_renders_svg(self, fixed_now):
        points = [HistoryPoint(timestamp=fixed_now + timedelta(hours=i), price=Decimal(100 + i)) for i in range(24)]

        svg = ChartService().price_history_svg("BTC", points)

        assert "<svg" in svg
        assert "chart-error" not in svg

    def test_too_few_points_renders_placeholder(self, fixed_now):
        svg = ChartService().price_history_svg("BTC", [HistoryPoint(timestamp=fixed_now, price=Decimal("1"))])

        assert "chart-error" in svg
        assert "Not enough price history for BTC" in svg


class TestAllocationChart:
    """Tests for allocation charts."""

    def test_renders_pie(self):
        items = [
            AllocationItem(symbol="BTC", market_value=Decimal("30000"), percentage=Decimal("83.33")),
            AllocationItem(symbol="ETH", market_value=Decimal("6000"), percentage=Decimal("16.67")),
        ]

        assert "<svg" in ChartService().allocation_svg(items)

    def test_empty_allocation_still_renders(self):
        assert "<svg" in ChartService().allocation_svg([])


class TestErrorPlaceholder:
    """Tests for the error placeholder."""

    def test_message_is_escaped(self):
        svg = error_placeholder_svg("<script>alert(1)</script>")

        assert "<script>" not in svg
        assert "&lt;script&gt;" in svg
