"""Application settings and configuration."""

from pathlib import Path
from typing import Any, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from cryptodash.core.symbols import normalize_symbol


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.home() / ".cryptodash"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    app_name: str = "Crypto Portfolio Dashboard"
    app_version: str = "0.1.0"

    # Data directory (SQLite file lives here unless DATABASE_URL is set)
    data_dir: Optional[Path] = None
    database_url: Optional[str] = None

    # Secrets: server-side only, never rendered or returned by the API
    crypto_api_key: Optional[str] = None
    crypto_api_plan: str = "demo"
    openai_api_key: Optional[str] = None

    # Public origin of the dashboard (allowed CORS origin)
    public_app_url: str = Field(
        default="http://localhost:8001",
        validation_alias=AliasChoices("NEXT_PUBLIC_APP_URL", "PUBLIC_APP_URL", "public_app_url"),
    )

    # Market data settings
    market_data_provider: str = "coingecko"
    market_data_fallback_provider: Optional[str] = "yahoo"
    vs_currency: str = "usd"
    tracked_symbols: str = "BTC,ETH,SOL"
    market_data_cache_ttl_seconds: int = 60
    history_cache_ttl_seconds: int = 300
    market_data_min_interval_seconds: float = 1.5
    market_data_timeout_seconds: float = 10.0

    # Background refresher (0 disables)
    price_refresh_interval_seconds: int = 0
    snapshot_retention_days: int = 90

    alert_cooldown_minutes: int = 30
    log_level: str = "INFO"

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "cryptodash.db"
        return f"sqlite:///{db_path}"

    def get_tracked_symbols(self) -> list[str]:
        """Return tracked symbols normalized and de-duplicated, in configured order."""
        result: list[str] = []
        for raw in self.tracked_symbols.split(","):
            symbol = normalize_symbol(raw)
            if symbol and symbol not in result:
                result.append(symbol)
        return result

    def masked(self) -> dict[str, Any]:
        """Return a display-safe view of the configuration (secrets as booleans)."""
        return {
            "app_name": self.app_name,
            "public_app_url": self.public_app_url,
            "market_data_provider": self.market_data_provider,
            "market_data_fallback_provider": self.market_data_fallback_provider or None,
            "vs_currency": self.vs_currency,
            "tracked_symbols": self.get_tracked_symbols(),
            "price_refresh_interval_seconds": self.price_refresh_interval_seconds,
            "crypto_api_key_configured": bool(self.crypto_api_key),
            "openai_api_key_configured": bool(self.openai_api_key),
        }


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
