"""
CoinGecko market data provider.

Prices come from /simple/price and history from /coins/{id}/market_chart.
The API key is only ever sent as a request header from the server.
"""

import logging
from typing import Any, Optional

import requests

from cryptodash.core.exceptions import MarketDataError, RateLimitedError
from cryptodash.core.money import to_decimal_or_none
from cryptodash.core.timezone import from_timestamp, now_utc
from cryptodash.domain.views import PricePoint, HistoryPoint

logger = logging.getLogger(__name__)

DEMO_BASE_URL = "https://api.coingecko.com/api/v3"
PRO_BASE_URL = "https://pro-api.coingecko.com/api/v3"

# Ticker symbol -> CoinGecko coin id
DEFAULT_COIN_IDS: dict[str, str] = {
    "BTC": "bitcoin",
    "ETH": "ethereum",
    "SOL": "solana",
    "USDT": "tether",
    "USDC": "usd-coin",
    "BNB": "binancecoin",
    "XRP": "ripple",
    "ADA": "cardano",
    "DOGE": "dogecoin",
    "DOT": "polkadot",
    "AVAX": "avalanche-2",
    "LINK": "chainlink",
    "MATIC": "matic-network",
    "LTC": "litecoin",
    "TRX": "tron",
    "UNI": "uniswap",
    "ATOM": "cosmos",
    "AAVE": "aave",
}


class CoinGeckoProvider:
    """Market data provider backed by the CoinGecko REST API."""

    name = "coingecko"

    def __init__(
        self,
        api_key: Optional[str] = None,
        plan: str = "demo",
        vs_currency: str = "usd",
        timeout_seconds: float = 10.0,
        coin_ids: Optional[dict[str, str]] = None,
        session: Optional[requests.Session] = None,
    ):
        self._api_key = api_key
        self._plan = plan.lower()
        self._vs = vs_currency.lower()
        self._timeout = timeout_seconds
        self._coin_ids = {**DEFAULT_COIN_IDS, **{k.upper(): v for k, v in (coin_ids or {}).items()}}
        self._session = session or requests.Session()

    @property
    def base_url(self) -> str:
        return PRO_BASE_URL if self._plan == "pro" else DEMO_BASE_URL

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._api_key:
            header = "x-cg-pro-api-key" if self._plan == "pro" else "x-cg-demo-api-key"
            headers[header] = self._api_key
        return headers

    def coin_id(self, symbol: str) -> Optional[str]:
        """Return the CoinGecko id for a ticker symbol, or None if unmapped."""
        return self._coin_ids.get(symbol.upper())

    def _get(self, path: str, params: dict[str, Any]) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self._session.get(
                url,
                params=params,
                headers=self._headers(),
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise MarketDataError(f"CoinGecko request failed: {e}")

        if response.status_code == 429:
            raise RateLimitedError(self.name)
        if not response.ok:
            raise MarketDataError(f"CoinGecko returned HTTP {response.status_code} for {path}")
        try:
            return response.json()
        except ValueError:
            raise MarketDataError(f"CoinGecko returned malformed JSON for {path}")

    def get_prices(self, symbols: list[str]) -> dict[str, PricePoint]:
        """Fetch current prices, 24h change and market cap in one call."""
        ids_by_symbol = {}
        for symbol in symbols:
            coin_id = self.coin_id(symbol)
            if coin_id:
                ids_by_symbol[symbol.upper()] = coin_id
            else:
                logger.debug("No CoinGecko id mapped for %s", symbol)
        if not ids_by_symbol:
            return {}

        payload = self._get(
            "/simple/price",
            {
                "ids": ",".join(sorted(set(ids_by_symbol.values()))),
                "vs_currencies": self._vs,
                "include_market_cap": "true",
                "include_24hr_change": "true",
                "include_last_updated_at": "true",
            },
        )
        if not isinstance(payload, dict):
            raise MarketDataError("CoinGecko price payload is not an object")

        result: dict[str, PricePoint] = {}
        for symbol, coin_id in ids_by_symbol.items():
            entry = payload.get(coin_id)
            if not isinstance(entry, dict):
                continue
            price = to_decimal_or_none(entry.get(self._vs))
            if price is None:
                continue
            updated = entry.get("last_updated_at")
            result[symbol] = PricePoint(
                symbol=symbol,
                price=price,
                change_24h_pct=to_decimal_or_none(entry.get(f"{self._vs}_24h_change")),
                market_cap=to_decimal_or_none(entry.get(f"{self._vs}_market_cap")),
                as_of=from_timestamp(updated) if isinstance(updated, (int, float)) else now_utc(),
                source=self.name,
            )
        return result

    def get_history(self, symbol: str, days: int) -> list[HistoryPoint]:
        """Fetch the market chart for a coin; timestamps arrive in milliseconds."""
        coin_id = self.coin_id(symbol)
        if not coin_id:
            return []

        payload = self._get(
            f"/coins/{coin_id}/market_chart",
            {"vs_currency": self._vs, "days": days},
        )
        prices = payload.get("prices") if isinstance(payload, dict) else None
        if not isinstance(prices, list):
            raise MarketDataError(f"CoinGecko history payload for {symbol} has no prices")

        points: list[HistoryPoint] = []
        for row in prices:
            if not isinstance(row, (list, tuple)) or len(row) < 2:
                continue
            millis, price = row[0], to_decimal_or_none(row[1])
            if isinstance(millis, bool) or not isinstance(millis, (int, float)):
                continue
            if price is None or price <= 0:
                continue
            points.append(HistoryPoint(timestamp=from_timestamp(millis / 1000), price=price))
        points.sort(key=lambda p: p.timestamp)
        return points
