"""Build the configured market data provider."""

from typing import Optional

from cryptodash.config.settings import Settings
from cryptodash.core.exceptions import ValidationError
from cryptodash.providers.market_data_provider import MarketDataProvider
from cryptodash.providers.coingecko_provider import CoinGeckoProvider
from cryptodash.providers.yahoo_provider import YahooFinanceProvider
from cryptodash.providers.stub_provider import StubMarketDataProvider
from cryptodash.providers.fallback_provider import FallbackMarketDataProvider

PROVIDER_NAMES = ("coingecko", "yahoo", "stub")


def _build_single(name: str, settings: Settings) -> MarketDataProvider:
    name = name.strip().lower()
    if name == "coingecko":
        return CoinGeckoProvider(
            api_key=settings.crypto_api_key,
            plan=settings.crypto_api_plan,
            vs_currency=settings.vs_currency,
            timeout_seconds=settings.market_data_timeout_seconds,
        )
    if name == "yahoo":
        return YahooFinanceProvider(vs_currency=settings.vs_currency)
    if name == "stub":
        return StubMarketDataProvider()
    raise ValidationError(
        f"Unknown market data provider '{name}' (expected one of {', '.join(PROVIDER_NAMES)})"
    )


def build_provider(settings: Settings) -> MarketDataProvider:
    """Return the primary provider, wrapped with the fallback when one is configured."""
    primary = _build_single(settings.market_data_provider, settings)
    fallback_name: Optional[str] = (settings.market_data_fallback_provider or "").strip().lower()
    if not fallback_name or fallback_name == primary.name:
        return primary
    return FallbackMarketDataProvider(primary, _build_single(fallback_name, settings))
