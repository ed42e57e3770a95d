"""Market data provider protocol and shared validation."""

import logging
from typing import Optional, Protocol

from cryptodash.domain.views import PricePoint, HistoryPoint

logger = logging.getLogger(__name__)


class MarketDataProvider(Protocol):
    """
    Protocol for market data providers.

    Implementations call an upstream API and translate every transport or
    payload failure into MarketDataError (RateLimitedError on HTTP 429).
    """

    name: str

    def get_prices(self, symbols: list[str]) -> dict[str, PricePoint]:
        """
        Fetch current prices for multiple symbols.

        Returns dict mapping symbol -> PricePoint. Unknown symbols are omitted.
        """
        ...

    def get_history(self, symbol: str, days: int) -> list[HistoryPoint]:
        """Fetch a price series covering the last `days` days, oldest first."""
        ...


def validate_price_point(point: PricePoint) -> Optional[PricePoint]:
    """
    Check a provider price point before it is cached or displayed.

    Returns None when the price is not a positive finite number. A non-finite
    24h change or market cap is cleared rather than rejecting the point.
    """
    if point.price is None or not point.price.is_finite() or point.price <= 0:
        logger.warning("Discarding invalid price for %s from %s: %r", point.symbol, point.source, point.price)
        return None
    if point.change_24h_pct is not None and not point.change_24h_pct.is_finite():
        point.change_24h_pct = None
    if point.market_cap is not None and (not point.market_cap.is_finite() or point.market_cap < 0):
        point.market_cap = None
    return point
