"""Service layer - business logic orchestration."""

from cryptodash.services.market_data_service import MarketDataService
from cryptodash.services.portfolio_service import PortfolioService, HoldingCreate, HoldingUpdate
from cryptodash.services.snapshot_service import SnapshotService
from cryptodash.services.alert_service import AlertService, AlertCreate, AlertUpdate
from cryptodash.services.chart_service import ChartService, error_placeholder_svg
from cryptodash.services.price_broadcaster import PriceBroadcaster, build_prices_message
from cryptodash.services.price_refresher import PriceRefresher, RefreshResult

__all__ = [
    "MarketDataService",
    "PortfolioService",
    "HoldingCreate",
    "HoldingUpdate",
    "SnapshotService",
    "AlertService",
    "AlertCreate",
    "AlertUpdate",
    "ChartService",
    "error_placeholder_svg",
    "PriceBroadcaster",
    "build_prices_message",
    "PriceRefresher",
    "RefreshResult",
]
