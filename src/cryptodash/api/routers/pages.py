"""Server-rendered dashboard pages and SVG charts."""

import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse, Response

from cryptodash.api.deps import (
    get_alert_service,
    get_chart_service,
    get_market_data_service,
    get_portfolio_service,
)
from cryptodash.config.settings import get_settings
from cryptodash.core.exceptions import AppError
from cryptodash.core.symbols import normalize_symbol, validate_symbol
from cryptodash.services import (
    AlertService,
    ChartService,
    MarketDataService,
    PortfolioService,
    error_placeholder_svg,
)
from cryptodash.web import templates

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])

SVG_MEDIA_TYPE = "image/svg+xml"


@router.get("/", response_class=HTMLResponse)
def dashboard(
    request: Request,
    market: MarketDataService = Depends(get_market_data_service),
    portfolio: PortfolioService = Depends(get_portfolio_service),
):
    """Price cards, portfolio totals, holdings and allocation."""
    settings = get_settings()
    tracked = settings.get_tracked_symbols()
    price_error = None
    try:
        prices = market.get_prices(tracked)
    except AppError as e:
        logger.warning("Dashboard rendered without prices: %s", e.message)
        prices = {}
        price_error = e.message

    summary = portfolio.summary()
    stale = summary.stale or any(p.stale for p in prices.values())
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "app_name": settings.app_name,
            "tracked": tracked,
            "prices": prices,
            "price_error": price_error,
            "summary": summary,
            "stale": stale,
        },
    )


@router.get("/assets/{symbol}", response_class=HTMLResponse)
def asset_page(
    request: Request,
    symbol: str,
    days: int = Query(7, ge=1, le=365),
    market: MarketDataService = Depends(get_market_data_service),
):
    """Price card and history chart for one asset."""
    settings = get_settings()
    if not validate_symbol(symbol):
        return templates.TemplateResponse(
            request,
            "asset.html",
            {"app_name": settings.app_name, "symbol": symbol, "point": None,
             "error": f"Invalid symbol: {symbol}", "days": days},
            status_code=404,
        )

    symbol = normalize_symbol(symbol)
    point = None
    error = None
    try:
        point = market.get_price(symbol)
    except AppError as e:
        error = e.message
    return templates.TemplateResponse(
        request,
        "asset.html",
        {"app_name": settings.app_name, "symbol": symbol, "point": point, "error": error, "days": days},
    )


@router.get("/settings", response_class=HTMLResponse)
def settings_page(request: Request, alerts: AlertService = Depends(get_alert_service)):
    """Alert list and the masked configuration."""
    settings = get_settings()
    return templates.TemplateResponse(
        request,
        "settings.html",
        {
            "app_name": settings.app_name,
            "alerts": alerts.list_alerts(),
            "config": settings.masked(),
        },
    )


@router.get("/charts/allocation.svg")
def allocation_chart(
    portfolio: PortfolioService = Depends(get_portfolio_service),
    charts: ChartService = Depends(get_chart_service),
):
    """Allocation pie chart; failures render a placeholder."""
    try:
        svg = charts.allocation_svg(portfolio.summary().allocation)
    except AppError as e:
        svg = error_placeholder_svg(e.message)
    except Exception:
        logger.exception("Allocation chart failed")
        svg = error_placeholder_svg("Chart unavailable")
    return Response(content=svg, media_type=SVG_MEDIA_TYPE)


@router.get("/charts/price/{symbol}.svg")
def price_chart(
    symbol: str,
    days: int = Query(7, ge=1, le=365),
    market: MarketDataService = Depends(get_market_data_service),
    charts: ChartService = Depends(get_chart_service),
):
    """Price history line chart; failures render a placeholder."""
    try:
        points = market.get_history(symbol, days)
        svg = charts.price_history_svg(normalize_symbol(symbol), points)
    except AppError as e:
        svg = error_placeholder_svg(e.message)
    except Exception:
        logger.exception("Price chart failed for %s", symbol)
        svg = error_placeholder_svg("Chart unavailable")
    return Response(content=svg, media_type=SVG_MEDIA_TYPE)
