"""Stub market data provider for offline/testing use."""

import random
from datetime import timedelta
from decimal import Decimal

from cryptodash.core.money import quantize_price, quantize_pct
from cryptodash.core.timezone import now_utc
from cryptodash.domain.views import PricePoint, HistoryPoint


# Deterministic fake (price, 24h change %, market cap) for common coins
_STUB_PRICES: dict[str, tuple[Decimal, Decimal, Decimal]] = {
    "BTC": (Decimal("64250.00"), Decimal("2.15"), Decimal("1265000000000")),
    "ETH": (Decimal("3150.25"), Decimal("-1.40"), Decimal("378000000000")),
    "SOL": (Decimal("145.80"), Decimal("4.75"), Decimal("67000000000")),
    "USDT": (Decimal("1.00"), Decimal("0.01"), Decimal("110000000000")),
    "USDC": (Decimal("1.00"), Decimal("0.00"), Decimal("33000000000")),
    "BNB": (Decimal("585.10"), Decimal("0.85"), Decimal("86000000000")),
    "XRP": (Decimal("0.52140000"), Decimal("-0.65"), Decimal("29000000000")),
    "ADA": (Decimal("0.45120000"), Decimal("1.20"), Decimal("16000000000")),
    "DOGE": (Decimal("0.15230000"), Decimal("6.30"), Decimal("22000000000")),
}


class StubMarketDataProvider:
    """
    Stub provider with deterministic fake data for offline operation.

    Uses predefined prices for common coins; derives seeded prices for unknown symbols.
    """

    name = "stub"

    def __init__(self, seed: int = 42):
        """Initialize with optional random seed for reproducibility."""
        self._seed = seed

    def _rng(self, symbol: str) -> random.Random:
        # Per-symbol generator so results do not depend on call order
        return random.Random(f"{self._seed}:{symbol}")

    def get_prices(self, symbols: list[str]) -> dict[str, PricePoint]:
        """Return stub prices for requested symbols."""
        as_of = now_utc()
        result: dict[str, PricePoint] = {}

        for symbol in symbols:
            upper_symbol = symbol.upper()
            if upper_symbol in _STUB_PRICES:
                price, change, market_cap = _STUB_PRICES[upper_symbol]
            else:
                rng = self._rng(upper_symbol)
                price = quantize_price(Decimal(str(0.5 + rng.random() * 200)))
                change = quantize_pct(Decimal(str((rng.random() - 0.5) * 10)))
                market_cap = (price * Decimal(rng.randint(10_000_000, 500_000_000))).quantize(Decimal("1"))

            result[upper_symbol] = PricePoint(
                symbol=upper_symbol,
                price=price,
                change_24h_pct=change,
                market_cap=market_cap,
                as_of=as_of,
                source=self.name,
            )

        return result

    def get_history(self, symbol: str, days: int) -> list[HistoryPoint]:
        """Return a synthetic hourly random walk ending at the stub price."""
        upper_symbol = symbol.upper()
        current = self.get_prices([upper_symbol])[upper_symbol].price
        rng = self._rng(f"history:{upper_symbol}:{days}")
        end = now_utc().replace(minute=0, second=0, microsecond=0)
        steps = max(days * 24, 2)

        prices = [current]
        for _ in range(steps - 1):
            drift = Decimal(str(1 + (rng.random() - 0.5) * 0.02))
            prices.append(prices[-1] / drift)
        prices.reverse()

        return [
            HistoryPoint(
                timestamp=end - timedelta(hours=steps - 1 - i),
                price=quantize_price(p),
            )
            for i, p in enumerate(prices)
        ]
