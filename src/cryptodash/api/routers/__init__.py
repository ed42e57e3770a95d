"""API routers package."""

from cryptodash.api.routers.prices import router as prices_router
from cryptodash.api.routers.holdings import router as holdings_router
from cryptodash.api.routers.portfolio import router as portfolio_router
from cryptodash.api.routers.snapshots import router as snapshots_router
from cryptodash.api.routers.alerts import router as alerts_router
from cryptodash.api.routers.pages import router as pages_router
from cryptodash.api.routers.ws import router as ws_router

__all__ = [
    "prices_router",
    "holdings_router",
    "portfolio_router",
    "snapshots_router",
    "alerts_router",
    "pages_router",
    "ws_router",
]
