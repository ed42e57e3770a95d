"""
Unit tests for PriceBroadcaster.

Tests cover:
- Subscribe / publish / unsubscribe
- Bounded queues dropping the oldest message
- Price message format
"""

import asyncio
from decimal import Decimal

from cryptodash.services import PriceBroadcaster, build_prices_message


class TestPriceBroadcaster:
    """Tests for fan-out to subscribers."""

    def test_publish_reaches_every_subscriber(self):
        async def scenario():
            broadcaster = PriceBroadcaster()
            first = broadcaster.subscribe()
            second = broadcaster.subscribe()

            delivered = broadcaster.publish({"type": "prices", "prices": []})

            assert delivered == 2
            assert first.get_nowait()["type"] == "prices"
            assert second.get_nowait()["type"] == "prices"

        asyncio.run(scenario())

    def test_full_queue_drops_oldest(self):
        """
        GIVEN a subscriber queue of size 2 that is not being drained
        WHEN three messages are published
        THEN the subscriber holds the two newest messages
        """
        async def scenario():
            broadcaster = PriceBroadcaster(max_queue_size=2)
            queue = broadcaster.subscribe()
            for n in range(3):
                broadcaster.publish({"n": n})

            assert [queue.get_nowait()["n"], queue.get_nowait()["n"]] == [1, 2]

        asyncio.run(scenario())

    def test_unsubscribe(self):
        async def scenario():
            broadcaster = PriceBroadcaster()
            queue = broadcaster.subscribe()
            broadcaster.unsubscribe(queue)

            assert broadcaster.publish({"type": "prices"}) == 0
            assert broadcaster.subscriber_count == 0
            assert broadcaster.last_message == {"type": "prices"}

        asyncio.run(scenario())


class TestBuildPricesMessage:
    """Tests for the websocket message format."""

    def test_decimals_are_strings(self, deterministic_provider):
        message = build_prices_message(deterministic_provider.get_prices(["BTC", "DOGE"]))

        assert message["type"] == "prices"
        btc, doge = message["prices"]
        assert btc["symbol"] == "BTC"
        assert btc["price"] == "60000.00"
        assert btc["change_24h_pct"] == "2.50"
        assert btc["stale"] is False
        assert doge["change_24h_pct"] is None
        assert Decimal(doge["price"]) == Decimal("0.125")
