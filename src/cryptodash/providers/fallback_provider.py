"""Provider that falls back to a secondary source."""

import logging

from cryptodash.core.exceptions import MarketDataError
from cryptodash.domain.views import PricePoint, HistoryPoint
from cryptodash.providers.market_data_provider import MarketDataProvider

logger = logging.getLogger(__name__)


class FallbackMarketDataProvider:
    """
    Tries the primary provider first and the fallback on failure.

    Symbols the primary does not know are also looked up in the fallback.
    Raises MarketDataError only when both providers fail.
    """

    def __init__(self, primary: MarketDataProvider, fallback: MarketDataProvider):
        self._primary = primary
        self._fallback = fallback
        self.name = f"{primary.name}+{fallback.name}"

    def get_prices(self, symbols: list[str]) -> dict[str, PricePoint]:
        try:
            result = self._primary.get_prices(symbols)
        except MarketDataError as e:
            logger.info("%s failed (%s); falling back to %s", self._primary.name, e.message, self._fallback.name)
            return self._fallback.get_prices(symbols)

        missing = [s for s in symbols if s.upper() not in result]
        if missing:
            try:
                result.update(self._fallback.get_prices(missing))
            except MarketDataError as e:
                logger.info("%s could not fill %s: %s", self._fallback.name, missing, e.message)
        return result

    def get_history(self, symbol: str, days: int) -> list[HistoryPoint]:
        try:
            points = self._primary.get_history(symbol, days)
        except MarketDataError as e:
            logger.info("%s history failed (%s); falling back to %s", self._primary.name, e.message, self._fallback.name)
            return self._fallback.get_history(symbol, days)
        if points:
            return points
        return self._fallback.get_history(symbol, days)
