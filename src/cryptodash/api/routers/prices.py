"""Price endpoints: current quotes and history."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from cryptodash.api.deps import get_market_data_service
from cryptodash.api.schemas import PricePointResponse, HistoryPointResponse, HistoryResponse
from cryptodash.config.settings import get_settings
from cryptodash.core.exceptions import NotFoundError
from cryptodash.core.symbols import normalize_symbol
from cryptodash.services import MarketDataService

router = APIRouter(prefix="/api/prices", tags=["prices"])


@router.get("", response_model=list[PricePointResponse])
def list_prices(
    symbols: Optional[str] = Query(None, description="Comma-separated symbols; defaults to tracked symbols"),
    market: MarketDataService = Depends(get_market_data_service),
):
    """Current prices for the requested (or tracked) symbols."""
    if symbols:
        wanted = [s for s in symbols.split(",") if s.strip()]
    else:
        wanted = get_settings().get_tracked_symbols()
    prices = market.get_prices(wanted)
    return [PricePointResponse.model_validate(p) for p in prices.values()]


@router.get("/{symbol}", response_model=PricePointResponse)
def get_price(symbol: str, market: MarketDataService = Depends(get_market_data_service)):
    """Current price for one symbol."""
    return PricePointResponse.model_validate(market.get_price(symbol))


@router.get("/{symbol}/history", response_model=HistoryResponse)
def get_history(
    symbol: str,
    days: int = Query(7, ge=1, le=365),
    market: MarketDataService = Depends(get_market_data_service),
):
    """Price series for the last N days."""
    points = market.get_history(symbol, days)
    if not points:
        raise NotFoundError("Price history", normalize_symbol(symbol))
    return HistoryResponse(
        symbol=normalize_symbol(symbol),
        days=days,
        points=[HistoryPointResponse.model_validate(p) for p in points],
    )
