"""WebSocket endpoint for live price updates."""

import asyncio
import json
import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from cryptodash.api.deps import get_broadcaster, get_market_data_service
from cryptodash.config.settings import get_settings
from cryptodash.core.exceptions import AppError
from cryptodash.services import MarketDataService, PriceBroadcaster, build_prices_message

logger = logging.getLogger(__name__)

router = APIRouter(tags=["websocket"])


def _initial_message(market: MarketDataService) -> dict:
    try:
        prices = market.get_prices(get_settings().get_tracked_symbols())
    except AppError as e:
        message = build_prices_message({})
        message["error"] = e.message
        return message
    return build_prices_message(prices)


async def _forward(websocket: WebSocket, queue: asyncio.Queue) -> None:
    while True:
        message = await queue.get()
        await websocket.send_json(message)


@router.websocket("/ws/prices")
async def prices_socket(
    websocket: WebSocket,
    market: MarketDataService = Depends(get_market_data_service),
    broadcaster: PriceBroadcaster = Depends(get_broadcaster),
):
    """
    Push price updates to the client.

    The first message carries current prices for the tracked symbols; after
    that every refresher publication is forwarded. A client "ping" gets a
    "pong".
    """
    await websocket.accept()
    queue = broadcaster.subscribe()
    forward = None
    try:
        await websocket.send_json(await asyncio.to_thread(_initial_message, market))
        forward = asyncio.create_task(_forward(websocket, queue))
        while True:
            text = await websocket.receive_text()
            try:
                data = json.loads(text)
            except ValueError:
                await websocket.send_json({"type": "error", "message": "Messages must be JSON"})
                continue
            if isinstance(data, dict) and data.get("type") == "ping":
                await websocket.send_json({"type": "pong"})
    except WebSocketDisconnect:
        logger.debug("Price socket disconnected")
    finally:
        if forward is not None:
            forward.cancel()
            try:
                await forward
            except asyncio.CancelledError:
                pass
            except Exception:
                logger.debug("Price forwarder ended with an error", exc_info=True)
        broadcaster.unsubscribe(queue)
