"""Market data service: caching and rate limiting in front of a provider."""

import logging
import threading
import time
from dataclasses import replace
from typing import Callable, Optional

from cryptodash.core.exceptions import (
    MarketDataError,
    MarketDataUnavailableError,
    NotFoundError,
    RateLimitedError,
    ValidationError,
)
from cryptodash.core.symbols import normalize_symbol, validate_symbol
from cryptodash.domain.views import PricePoint, HistoryPoint
from cryptodash.providers.market_data_provider import MarketDataProvider, validate_price_point

logger = logging.getLogger(__name__)

MAX_HISTORY_DAYS = 365


class MarketDataService:
    """
    Service for fetching market data (prices, history).

    Wraps a provider with a per-symbol TTL cache, a minimum interval between
    upstream calls, and graceful degradation to stale cached data.
    """

    def __init__(
        self,
        provider: MarketDataProvider,
        cache_ttl_seconds: float = 60,
        history_ttl_seconds: float = 300,
        min_interval_seconds: float = 0.0,
        rate_limit_backoff_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._provider = provider
        self._ttl = cache_ttl_seconds
        self._history_ttl = history_ttl_seconds
        self._min_interval = min_interval_seconds
        self._backoff = rate_limit_backoff_seconds
        self._clock = clock
        self._sleep = sleep

        # symbol -> (point, fetched_at)
        self._price_cache: dict[str, tuple[PricePoint, float]] = {}
        # (symbol, days) -> (points, fetched_at)
        self._history_cache: dict[tuple[str, int], tuple[list[HistoryPoint], float]] = {}
        self._last_call: Optional[float] = None
        self._blocked_until: Optional[float] = None
        self._lock = threading.Lock()

    @property
    def provider_name(self) -> str:
        return self._provider.name

    def get_prices(self, symbols: list[str]) -> dict[str, PricePoint]:
        """
        Fetch prices for symbols with caching.

        Returns dict mapping symbol -> PricePoint in request order. Entries past
        their TTL are refetched; when the provider fails they are returned with
        stale=True. Raises MarketDataUnavailableError only when the provider
        failed and no requested symbol has any data.
        """
        wanted = self._normalize(symbols)
        if not wanted:
            return {}

        with self._lock:
            now = self._clock()
            result: dict[str, PricePoint] = {}
            to_fetch: list[str] = []
            for symbol in wanted:
                cached = self._price_cache.get(symbol)
                if cached and now - cached[1] < self._ttl:
                    result[symbol] = replace(cached[0], stale=False)
                else:
                    to_fetch.append(symbol)

            failed = False
            if to_fetch:
                all_cached = all(s in self._price_cache for s in to_fetch)
                if self._may_call(all_cached):
                    try:
                        fetched = self._provider.get_prices(to_fetch)
                    except MarketDataError as e:
                        self._record_failure(e)
                        failed = True
                        fetched = {}
                    fetched_at = self._clock()
                    for symbol, point in fetched.items():
                        point = validate_price_point(point)
                        if point is None or point.symbol not in to_fetch:
                            continue
                        self._price_cache[point.symbol] = (point, fetched_at)
                        result[point.symbol] = replace(point, stale=False)
                else:
                    failed = self._is_blocked()

                for symbol in to_fetch:
                    if symbol not in result and symbol in self._price_cache:
                        result[symbol] = replace(self._price_cache[symbol][0], stale=True)

            if failed and not result:
                raise MarketDataUnavailableError(to_fetch)

        return {s: result[s] for s in wanted if s in result}

    def get_price(self, symbol: str) -> PricePoint:
        """Fetch one price; raises NotFoundError when the symbol has no data."""
        normalized = normalize_symbol(symbol)
        prices = self.get_prices([symbol])
        if normalized not in prices:
            raise NotFoundError("Price", normalized or str(symbol))
        return prices[normalized]

    def get_history(self, symbol: str, days: int) -> list[HistoryPoint]:
        """Fetch a price series, cached per (symbol, days)."""
        if days < 1 or days > MAX_HISTORY_DAYS:
            raise ValidationError(f"days must be between 1 and {MAX_HISTORY_DAYS}")
        if not validate_symbol(symbol):
            raise ValidationError(f"Invalid symbol: {symbol!r}")
        key = (normalize_symbol(symbol), days)

        with self._lock:
            now = self._clock()
            cached = self._history_cache.get(key)
            if cached and now - cached[1] < self._history_ttl:
                return list(cached[0])

            if not self._may_call(cached is not None):
                if cached:
                    return list(cached[0])
                raise MarketDataUnavailableError([key[0]])

            try:
                points = self._provider.get_history(key[0], days)
            except MarketDataError as e:
                self._record_failure(e)
                if cached:
                    return list(cached[0])
                raise MarketDataUnavailableError([key[0]])

            self._history_cache[key] = (points, self._clock())
            return list(points)

    def clear_cache(self) -> None:
        """Drop every cached price and history series."""
        with self._lock:
            self._price_cache.clear()
            self._history_cache.clear()

    def _normalize(self, symbols: list[str]) -> list[str]:
        result: list[str] = []
        for raw in symbols:
            if not validate_symbol(raw):
                continue
            symbol = normalize_symbol(raw)
            if symbol not in result:
                result.append(symbol)
        return result

    def _is_blocked(self) -> bool:
        return self._blocked_until is not None and self._clock() < self._blocked_until

    def _may_call(self, can_serve_stale: bool) -> bool:
        """
        Decide whether an upstream call may be made now.

        While backing off after a 429 no calls are made. Inside the minimum
        interval, stale data is served if available; otherwise the caller waits
        out the remainder of the interval.
        """
        if self._is_blocked():
            return False
        now = self._clock()
        if self._last_call is not None and self._min_interval > 0:
            remaining = self._min_interval - (now - self._last_call)
            if remaining > 0:
                if can_serve_stale:
                    return False
                self._sleep(remaining)
        self._last_call = self._clock()
        return True

    def _record_failure(self, error: MarketDataError) -> None:
        if isinstance(error, RateLimitedError):
            self._blocked_until = self._clock() + self._backoff
            logger.warning(
                "%s rate limited; pausing upstream calls for %.0fs",
                self._provider.name,
                self._backoff,
            )
        else:
            logger.warning("%s failed: %s", self._provider.name, error.message)
