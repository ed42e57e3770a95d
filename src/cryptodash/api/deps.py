"""Dependency injection for FastAPI."""

from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from cryptodash.config.settings import get_settings
from cryptodash.repositories.sqlalchemy.database import get_db
from cryptodash.repositories.sqlalchemy import (
    SqlAlchemyHoldingRepository,
    SqlAlchemySnapshotRepository,
    SqlAlchemyAlertRepository,
)
from cryptodash.providers import build_provider
from cryptodash.services import (
    MarketDataService,
    PortfolioService,
    SnapshotService,
    AlertService,
    ChartService,
    PriceBroadcaster,
)
from cryptodash.csv import HoldingsCsvImporter, HoldingsCsvExporter

# Process-wide instances: the price cache and subscriber list must outlive a request
_market_data_service: Optional[MarketDataService] = None
_broadcaster: Optional[PriceBroadcaster] = None


def get_market_data_service() -> MarketDataService:
    """Provide the shared MarketDataService (built from settings on first use)."""
    global _market_data_service
    if _market_data_service is None:
        settings = get_settings()
        _market_data_service = MarketDataService(
            provider=build_provider(settings),
            cache_ttl_seconds=settings.market_data_cache_ttl_seconds,
            history_ttl_seconds=settings.history_cache_ttl_seconds,
            min_interval_seconds=settings.market_data_min_interval_seconds,
        )
    return _market_data_service


def get_broadcaster() -> PriceBroadcaster:
    """Provide the shared PriceBroadcaster."""
    global _broadcaster
    if _broadcaster is None:
        _broadcaster = PriceBroadcaster()
    return _broadcaster


def reset_shared_services() -> None:
    """Drop shared instances so they are rebuilt from current settings."""
    global _market_data_service, _broadcaster
    _market_data_service = None
    _broadcaster = None


def get_holding_repo(db: Session = Depends(get_db)) -> SqlAlchemyHoldingRepository:
    """Provide HoldingRepository instance."""
    return SqlAlchemyHoldingRepository(db)


def get_snapshot_repo(db: Session = Depends(get_db)) -> SqlAlchemySnapshotRepository:
    """Provide SnapshotRepository instance."""
    return SqlAlchemySnapshotRepository(db)


def get_alert_repo(db: Session = Depends(get_db)) -> SqlAlchemyAlertRepository:
    """Provide AlertRepository instance."""
    return SqlAlchemyAlertRepository(db)


def get_portfolio_service(
    holding_repo: SqlAlchemyHoldingRepository = Depends(get_holding_repo),
    market: MarketDataService = Depends(get_market_data_service),
) -> PortfolioService:
    """Provide PortfolioService instance."""
    return PortfolioService(holding_repo=holding_repo, market_data_service=market)


def get_snapshot_service(
    snapshot_repo: SqlAlchemySnapshotRepository = Depends(get_snapshot_repo),
) -> SnapshotService:
    """Provide SnapshotService instance."""
    return SnapshotService(snapshot_repo)


def get_alert_service(
    alert_repo: SqlAlchemyAlertRepository = Depends(get_alert_repo),
) -> AlertService:
    """Provide AlertService instance."""
    return AlertService(alert_repo, cooldown_minutes=get_settings().alert_cooldown_minutes)


def get_chart_service() -> ChartService:
    """Provide ChartService instance."""
    return ChartService(currency=get_settings().vs_currency)


def get_csv_importer(
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> HoldingsCsvImporter:
    """Provide HoldingsCsvImporter instance."""
    return HoldingsCsvImporter(portfolio)


def get_csv_exporter(
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> HoldingsCsvExporter:
    """Provide HoldingsCsvExporter instance."""
    return HoldingsCsvExporter(portfolio)
