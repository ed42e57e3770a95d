"""Fan-out of price updates to websocket subscribers."""

import asyncio
import logging
from typing import Any, Optional

from cryptodash.domain.views import PricePoint

logger = logging.getLogger(__name__)


class PriceBroadcaster:
    """
    Keeps one bounded queue per subscriber.

    A slow subscriber loses its oldest queued message instead of blocking
    the publisher.
    """

    def __init__(self, max_queue_size: int = 10):
        self._max_queue_size = max_queue_size
        self._subscribers: set[asyncio.Queue] = set()
        self._last_message: Optional[dict[str, Any]] = None

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    @property
    def last_message(self) -> Optional[dict[str, Any]]:
        return self._last_message

    def subscribe(self) -> asyncio.Queue:
        queue: asyncio.Queue = asyncio.Queue(maxsize=self._max_queue_size)
        self._subscribers.add(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        self._subscribers.discard(queue)

    def publish(self, message: dict[str, Any]) -> int:
        """Queue a message for every subscriber; returns the subscriber count."""
        self._last_message = message
        for queue in list(self._subscribers):
            if queue.full():
                try:
                    queue.get_nowait()
                except asyncio.QueueEmpty:
                    pass
            queue.put_nowait(message)
        return len(self._subscribers)


def build_prices_message(prices: dict[str, PricePoint]) -> dict[str, Any]:
    """JSON-ready websocket message for a set of price points."""
    return {
        "type": "prices",
        "prices": [
            {
                "symbol": p.symbol,
                "price": str(p.price),
                "change_24h_pct": str(p.change_24h_pct) if p.change_24h_pct is not None else None,
                "market_cap": str(p.market_cap) if p.market_cap is not None else None,
                "as_of": p.as_of.isoformat(),
                "stale": p.stale,
            }
            for p in prices.values()
        ],
    }
