"""Market data providers module."""

from cryptodash.providers.market_data_provider import MarketDataProvider, validate_price_point
from cryptodash.providers.coingecko_provider import CoinGeckoProvider
from cryptodash.providers.yahoo_provider import YahooFinanceProvider
from cryptodash.providers.stub_provider import StubMarketDataProvider
from cryptodash.providers.fallback_provider import FallbackMarketDataProvider
from cryptodash.providers.factory import build_provider

__all__ = [
    "MarketDataProvider",
    "validate_price_point",
    "CoinGeckoProvider",
    "YahooFinanceProvider",
    "StubMarketDataProvider",
    "FallbackMarketDataProvider",
    "build_provider",
]
