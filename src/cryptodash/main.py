"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cryptodash import __version__
from cryptodash.config.settings import get_settings
from cryptodash.config.logging_config import setup_logging
from cryptodash.repositories.sqlalchemy.database import init_db, get_session_factory
from cryptodash.api.deps import get_broadcaster, get_market_data_service
from cryptodash.api.routers import (
    prices_router,
    holdings_router,
    portfolio_router,
    snapshots_router,
    alerts_router,
    pages_router,
    ws_router,
)
from cryptodash.core.exceptions import AppError
from cryptodash.services import PriceRefresher

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    init_db()
    settings = get_settings()
    refresher = None
    if settings.price_refresh_interval_seconds > 0:
        refresher = PriceRefresher(
            market_data_service=get_market_data_service(),
            session_factory=get_session_factory(),
            broadcaster=get_broadcaster(),
            tracked_symbols=settings.get_tracked_symbols(),
            interval_seconds=settings.price_refresh_interval_seconds,
            retention_days=settings.snapshot_retention_days,
            alert_cooldown_minutes=settings.alert_cooldown_minutes,
        )
        refresher.start()
    app.state.refresher = refresher
    logger.info("%s started (provider: %s)", settings.app_name, settings.market_data_provider)
    yield
    # Shutdown
    if refresher is not None:
        await refresher.stop()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Crypto prices, holdings valuation and alerts",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.public_app_url.rstrip("/")],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(prices_router)
app.include_router(holdings_router)
app.include_router(portfolio_router)
app.include_router(snapshots_router)
app.include_router(alerts_router)
app.include_router(ws_router)
app.include_router(pages_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict:
    """Health check endpoint; integrations are reported as booleans only."""
    current = get_settings()
    masked = current.masked()
    return {
        "status": "healthy",
        "version": __version__,
        "market_data_provider": current.market_data_provider,
        "integrations": {
            "crypto_api_key": masked["crypto_api_key_configured"],
            "openai_api_key": masked["openai_api_key_configured"],
        },
    }
