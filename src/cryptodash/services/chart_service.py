"""Chart rendering to SVG with matplotlib."""

import io
from html import escape

import matplotlib
matplotlib.use("Agg")
from matplotlib.figure import Figure
import matplotlib.dates as mdates

from cryptodash.domain.views import AllocationItem, HistoryPoint

_LINE_COLOR = "#f7931a"
_UP_COLOR = "#16a34a"
_DOWN_COLOR = "#dc2626"
_PALETTE = ["#f7931a", "#627eea", "#14f195", "#f3ba2f", "#23292f", "#0033ad", "#c2a633", "#8247e5"]


def _to_svg(fig: Figure) -> str:
    buffer = io.StringIO()
    fig.savefig(buffer, format="svg", bbox_inches="tight")
    return buffer.getvalue()


def error_placeholder_svg(message: str, width: int = 480, height: int = 240) -> str:
    """Small inline SVG shown in place of a chart that could not be drawn."""
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}" class="chart-error">'
        f'<rect width="100%" height="100%" fill="#f8fafc" stroke="#cbd5e1"/>'
        f'<text x="50%" y="50%" text-anchor="middle" fill="#64748b" '
        f'font-family="sans-serif" font-size="14">{escape(message)}</text></svg>'
    )


class ChartService:
    """
    Renders price history and allocation charts.

    A new Figure per chart keeps rendering safe across request threads
    (pyplot's global state is never touched).
    """

    def __init__(self, currency: str = "usd"):
        self._currency = currency.upper()

    def price_history_svg(self, symbol: str, points: list[HistoryPoint]) -> str:
        """Line chart of a price series."""
        if len(points) < 2:
            return error_placeholder_svg(f"Not enough price history for {symbol}")

        times = [p.timestamp for p in points]
        prices = [float(p.price) for p in points]
        color = _UP_COLOR if prices[-1] >= prices[0] else _DOWN_COLOR

        fig = Figure(figsize=(8, 3.5), dpi=100)
        ax = fig.add_subplot(111)
        ax.plot(times, prices, color=color, linewidth=1.5)
        ax.fill_between(times, prices, min(prices), color=color, alpha=0.08)
        ax.set_title(f"{symbol} price ({self._currency})")
        ax.grid(True, alpha=0.3)
        ax.xaxis.set_major_formatter(mdates.DateFormatter("%m-%d"))
        for side in ("top", "right"):
            ax.spines[side].set_visible(False)
        fig.autofmt_xdate()
        return _to_svg(fig)

    def allocation_svg(self, items: list[AllocationItem]) -> str:
        """Pie chart of portfolio allocation."""
        fig = Figure(figsize=(5, 4), dpi=100)
        ax = fig.add_subplot(111)

        values = [float(i.market_value) for i in items if i.market_value > 0]
        if not values:
            ax.text(0.5, 0.5, "No priced holdings", ha="center", va="center", fontsize=12, color="gray")
            ax.set_xlim(0, 1)
            ax.set_ylim(0, 1)
            ax.axis("off")
            return _to_svg(fig)

        labels = [i.symbol for i in items if i.market_value > 0]
        ax.pie(
            values,
            labels=labels,
            autopct="%1.1f%%",
            startangle=90,
            colors=[_PALETTE[i % len(_PALETTE)] for i in range(len(values))],
        )
        ax.set_title("Allocation")
        ax.axis("equal")
        return _to_svg(fig)
