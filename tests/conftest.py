"""
Pytest configuration and fixtures for the crypto dashboard tests.

This module provides:
- In-memory SQLite database fixtures
- Deterministic and failing market data providers
- A controllable monotonic clock for cache and rate-limit tests
- Service and repository fixtures
- An API test client wired to the test database and provider
"""

import os
import tempfile
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from cryptodash.main import app
from cryptodash.api.deps import get_market_data_service, reset_shared_services
from cryptodash.config.settings import Settings, set_settings, reset_settings
from cryptodash.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from cryptodash.repositories.sqlalchemy import orm_models  # noqa: F401
from cryptodash.repositories.sqlalchemy import (
    SqlAlchemyHoldingRepository,
    SqlAlchemySnapshotRepository,
    SqlAlchemyAlertRepository,
)
from cryptodash.core.exceptions import MarketDataError, RateLimitedError
from cryptodash.core.timezone import UTC_TZ
from cryptodash.domain.models import Holding
from cryptodash.domain.views import PricePoint, HistoryPoint
from cryptodash.services import (
    MarketDataService,
    PortfolioService,
    SnapshotService,
    AlertService,
    HoldingCreate,
)
from cryptodash.csv import HoldingsCsvImporter, HoldingsCsvExporter, HoldingsCsvTemplateGenerator


# =============================================================================
# TIME HELPERS
# =============================================================================


def utc_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 12,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create an aware UTC datetime."""
    return UTC_TZ.localize(datetime(year, month, day, hour, minute, second))


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'now' timestamp for deterministic tests."""
    return utc_datetime(2024, 6, 15, 14, 30, 0)


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    """Provide a controllable clock."""
    return FakeClock()


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    # Reset settings for clean state
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory(test_engine) -> sessionmaker:
    """Session factory bound to the test engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(scope="function")
def test_session(session_factory) -> Session:
    """Create test database session."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def holding_repo(test_session) -> SqlAlchemyHoldingRepository:
    """Provide test HoldingRepository."""
    return SqlAlchemyHoldingRepository(test_session)


@pytest.fixture
def snapshot_repo(test_session) -> SqlAlchemySnapshotRepository:
    """Provide test SnapshotRepository."""
    return SqlAlchemySnapshotRepository(test_session)


@pytest.fixture
def alert_repo(test_session) -> SqlAlchemyAlertRepository:
    """Provide test AlertRepository."""
    return SqlAlchemyAlertRepository(test_session)


# =============================================================================
# MARKET DATA FIXTURES
# =============================================================================


class DeterministicMarketProvider:
    """
    Deterministic market data provider for testing.

    Provides fixed prices with no randomness and counts upstream calls.
    """

    name = "deterministic"

    FIXED_PRICES = {
        "BTC": (Decimal("60000.00"), Decimal("2.50"), Decimal("1180000000000")),
        "ETH": (Decimal("3000.00"), Decimal("-1.00"), Decimal("360000000000")),
        "SOL": (Decimal("150.00"), Decimal("5.00"), Decimal("68000000000")),
        "DOGE": (Decimal("0.12500000"), None, None),
    }

    def __init__(self, as_of: Optional[datetime] = None):
        self._as_of = as_of or utc_datetime(2024, 6, 15, 14, 0, 0)
        self.price_calls: list[list[str]] = []
        self.history_calls: list[tuple[str, int]] = []

    def get_prices(self, symbols: list[str]) -> dict[str, PricePoint]:
        """Return deterministic prices for requested symbols."""
        self.price_calls.append(list(symbols))
        result = {}
        for symbol in symbols:
            upper_symbol = symbol.upper()
            if upper_symbol in self.FIXED_PRICES:
                price, change, market_cap = self.FIXED_PRICES[upper_symbol]
                result[upper_symbol] = PricePoint(
                    symbol=upper_symbol,
                    price=price,
                    change_24h_pct=change,
                    market_cap=market_cap,
                    as_of=self._as_of,
                    source=self.name,
                )
        return result

    def get_history(self, symbol: str, days: int) -> list[HistoryPoint]:
        """Return one point per day ending at the fixed price."""
        self.history_calls.append((symbol, days))
        upper_symbol = symbol.upper()
        if upper_symbol not in self.FIXED_PRICES:
            return []
        price = self.FIXED_PRICES[upper_symbol][0]
        return [
            HistoryPoint(timestamp=self._as_of - timedelta(days=days - i), price=price - days + i)
            for i in range(days + 1)
        ]


class FailingMarketProvider:
    """Market provider that always raises MarketDataError."""

    name = "failing"

    def get_prices(self, symbols: list[str]) -> dict[str, PricePoint]:
        raise MarketDataError("Network unavailable")

    def get_history(self, symbol: str, days: int) -> list[HistoryPoint]:
        raise MarketDataError("Network unavailable")


class RateLimitedMarketProvider:
    """Market provider that always answers HTTP 429."""

    name = "limited"

    def __init__(self):
        self.calls = 0

    def get_prices(self, symbols: list[str]) -> dict[str, PricePoint]:
        self.calls += 1
        raise RateLimitedError(self.name)

    def get_history(self, symbol: str, days: int) -> list[HistoryPoint]:
        self.calls += 1
        raise RateLimitedError(self.name)


class SwitchableMarketProvider:
    """Delegates to a healthy provider until switched off."""

    name = "switchable"

    def __init__(self, healthy: DeterministicMarketProvider):
        self._healthy = healthy
        self.failing = False

    def get_prices(self, symbols: list[str]) -> dict[str, PricePoint]:
        if self.failing:
            raise MarketDataError("Network unavailable")
        return self._healthy.get_prices(symbols)

    def get_history(self, symbol: str, days: int) -> list[HistoryPoint]:
        if self.failing:
            raise MarketDataError("Network unavailable")
        return self._healthy.get_history(symbol, days)


@pytest.fixture
def deterministic_provider() -> DeterministicMarketProvider:
    """Provide deterministic market data provider."""
    return DeterministicMarketProvider()


@pytest.fixture
def failing_provider() -> FailingMarketProvider:
    """Provide a market provider that always fails."""
    return FailingMarketProvider()


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def market_data_service(deterministic_provider, fake_clock) -> MarketDataService:
    """Provide test MarketDataService with deterministic provider."""
    return MarketDataService(
        provider=deterministic_provider,
        cache_ttl_seconds=60,
        clock=fake_clock,
        sleep=fake_clock.sleep,
    )


@pytest.fixture
def portfolio_service(holding_repo, market_data_service) -> PortfolioService:
    """Provide test PortfolioService."""
    return PortfolioService(
        holding_repo=holding_repo,
        market_data_service=market_data_service,
    )


@pytest.fixture
def snapshot_service(snapshot_repo) -> SnapshotService:
    """Provide test SnapshotService."""
    return SnapshotService(snapshot_repo)


@pytest.fixture
def alert_service(alert_repo) -> AlertService:
    """Provide test AlertService."""
    return AlertService(alert_repo, cooldown_minutes=30)


@pytest.fixture
def csv_importer(portfolio_service) -> HoldingsCsvImporter:
    """Provide test HoldingsCsvImporter."""
    return HoldingsCsvImporter(portfolio_service)


@pytest.fixture
def csv_exporter(portfolio_service) -> HoldingsCsvExporter:
    """Provide test HoldingsCsvExporter."""
    return HoldingsCsvExporter(portfolio_service)


@pytest.fixture
def csv_template_generator() -> HoldingsCsvTemplateGenerator:
    """Provide test HoldingsCsvTemplateGenerator."""
    return HoldingsCsvTemplateGenerator()


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def holding_factory(portfolio_service) -> Callable[..., Holding]:
    """Factory for creating test holdings."""

    def _create_holding(
        symbol: str = "BTC",
        quantity: Decimal = Decimal("1"),
        cost_basis: Decimal = Decimal("0"),
        note: Optional[str] = None,
    ) -> Holding:
        return portfolio_service.add_holding(
            HoldingCreate(symbol=symbol, quantity=quantity, cost_basis=cost_basis, note=note)
        )

    return _create_holding


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def api_market_service(deterministic_provider) -> MarketDataService:
    """MarketDataService used by the API client (no rate limiting)."""
    return MarketDataService(provider=deterministic_provider, cache_ttl_seconds=60)


@pytest.fixture
def client(test_engine, api_market_service, tmp_path) -> TestClient:
    """Provide FastAPI test client with test database and deterministic prices."""
    set_settings(
        Settings(
            data_dir=tmp_path,
            database_url=None,
            crypto_api_key=None,
            openai_api_key=None,
            market_data_provider="stub",
            market_data_fallback_provider="",
            tracked_symbols="BTC,ETH,SOL",
            price_refresh_interval_seconds=0,
        )
    )
    reset_database()
    reset_shared_services()
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_market_data_service] = lambda: api_market_service
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_database()
    reset_shared_services()
    reset_settings()


# =============================================================================
# TEMP FILE FIXTURES
# =============================================================================


@pytest.fixture
def temp_csv_file():
    """Provide a temporary CSV file path that is cleaned up after test."""
    with tempfile.NamedTemporaryFile(
        mode="w",
        suffix=".csv",
        delete=False,
        encoding="utf-8",
    ) as f:
        tmp_path = f.name

    yield tmp_path

    # Cleanup
    if os.path.exists(tmp_path):
        os.unlink(tmp_path)


@pytest.fixture
def sample_csv_content() -> str:
    """Sample valid CSV content for import testing."""
    return """symbol,quantity,cost_basis,note
BTC,0.5,42000,Cold wallet
eth,2,2500.50,
SOL,10,,Staked
"""


@pytest.fixture
def invalid_csv_content() -> str:
    """Sample CSV content with errors for testing error handling."""
    return """symbol,quantity,cost_basis,note
BTC,0.5,42000,Valid row
BT-C,1,100,Bad symbol
ETH,not_a_number,100,Bad quantity
SOL,-3,100,Negative quantity
"""


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.01"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(actual - expected)
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"
