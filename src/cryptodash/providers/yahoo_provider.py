"""
Yahoo Finance market data provider via yfinance.

Crypto pairs are quoted as <SYMBOL>-<CURRENCY>, e.g. BTC-USD.
"""

import logging
from decimal import Decimal
from typing import Optional

from cryptodash.core.exceptions import MarketDataError
from cryptodash.core.money import to_decimal_or_none, quantize_pct
from cryptodash.core.timezone import now_utc, to_utc
from cryptodash.domain.views import PricePoint, HistoryPoint

logger = logging.getLogger(__name__)


# Lazy import so tests can patch before import
def _get_yf():
    import yfinance as yf
    return yf


def _fast_info_value(fast_info, *names: str):
    """Read the first available attribute from a yfinance FastInfo object."""
    for name in names:
        try:
            value = getattr(fast_info, name)
        except Exception:
            # FastInfo computes lazily and raises on missing data
            continue
        if value is not None:
            return value
    return None


class YahooFinanceProvider:
    """Market data provider backed by yfinance."""

    name = "yahoo"

    def __init__(self, vs_currency: str = "usd"):
        self._vs = vs_currency.upper()

    def ticker_for(self, symbol: str) -> str:
        return f"{symbol.upper()}-{self._vs}"

    def _price_for_symbol(self, yf, symbol: str) -> Optional[PricePoint]:
        ticker = yf.Ticker(self.ticker_for(symbol))
        fast_info = ticker.fast_info
        price = to_decimal_or_none(_fast_info_value(fast_info, "last_price"))
        if price is None:
            return None
        prev_close = to_decimal_or_none(_fast_info_value(fast_info, "previous_close"))
        change: Optional[Decimal] = None
        if prev_close:
            change = quantize_pct((price - prev_close) / prev_close * 100)
        return PricePoint(
            symbol=symbol.upper(),
            price=price,
            change_24h_pct=change,
            market_cap=to_decimal_or_none(_fast_info_value(fast_info, "market_cap")),
            as_of=now_utc(),
            source=self.name,
        )

    def get_prices(self, symbols: list[str]) -> dict[str, PricePoint]:
        """Fetch prices one ticker at a time; a single bad ticker is skipped."""
        if not symbols:
            return {}
        try:
            yf = _get_yf()
        except ImportError as e:
            raise MarketDataError(f"yfinance unavailable: {e}")

        result: dict[str, PricePoint] = {}
        failures = 0
        for symbol in symbols:
            try:
                point = self._price_for_symbol(yf, symbol)
            except Exception as e:
                failures += 1
                logger.warning("Yahoo Finance quote failed for %s: %s", symbol, e)
                continue
            if point is not None:
                result[point.symbol] = point

        if failures == len(symbols):
            raise MarketDataError("Yahoo Finance quotes failed for all symbols")
        return result

    def get_history(self, symbol: str, days: int) -> list[HistoryPoint]:
        """Fetch closes; hourly bars up to a week, daily beyond."""
        interval = "1h" if days <= 7 else "1d"
        try:
            yf = _get_yf()
            frame = yf.Ticker(self.ticker_for(symbol)).history(period=f"{days}d", interval=interval)
        except Exception as e:
            raise MarketDataError(f"Yahoo Finance history failed for {symbol}: {e}")

        if frame is None or getattr(frame, "empty", True) or "Close" not in frame:
            return []

        points: list[HistoryPoint] = []
        for ts, close in frame["Close"].items():
            price = to_decimal_or_none(close)
            if price is None or price <= 0:
                continue
            timestamp = ts.to_pydatetime() if hasattr(ts, "to_pydatetime") else ts
            points.append(HistoryPoint(timestamp=to_utc(timestamp), price=price))
        return points
