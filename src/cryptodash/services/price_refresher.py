"""Background task that periodically refreshes prices."""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from sqlalchemy.orm import Session

from cryptodash.core.exceptions import MarketDataUnavailableError
from cryptodash.domain.views import PricePoint, TriggeredAlert
from cryptodash.repositories.sqlalchemy import (
    SqlAlchemyHoldingRepository,
    SqlAlchemySnapshotRepository,
    SqlAlchemyAlertRepository,
)
from cryptodash.services.alert_service import AlertService
from cryptodash.services.market_data_service import MarketDataService
from cryptodash.services.portfolio_service import PortfolioService
from cryptodash.services.price_broadcaster import PriceBroadcaster, build_prices_message
from cryptodash.services.snapshot_service import SnapshotService

logger = logging.getLogger(__name__)

PRUNE_EVERY_SECONDS = 3600


@dataclass
class RefreshResult:
    """Outcome of one refresh tick."""

    prices: dict[str, PricePoint] = field(default_factory=dict)
    recorded: int = 0
    triggered: list[TriggeredAlert] = field(default_factory=list)
    pruned: int = 0


class PriceRefresher:
    """
    Fetches prices on a fixed interval.

    Each tick covers tracked symbols plus every held or alerted symbol,
    records snapshots, evaluates alerts and publishes to websocket
    subscribers. A failed tick is logged and the loop keeps going.
    """

    def __init__(
        self,
        market_data_service: MarketDataService,
        session_factory: Callable[[], Session],
        broadcaster: PriceBroadcaster,
        tracked_symbols: list[str],
        interval_seconds: float,
        retention_days: int = 90,
        alert_cooldown_minutes: int = 30,
    ):
        self._market = market_data_service
        self._session_factory = session_factory
        self._broadcaster = broadcaster
        self._tracked = tracked_symbols
        self._interval = interval_seconds
        self._retention_days = retention_days
        self._alert_cooldown = alert_cooldown_minutes
        self._task: Optional[asyncio.Task] = None
        self._last_prune: Optional[float] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def refresh_once(self) -> RefreshResult:
        """Run one tick synchronously (blocking I/O)."""
        result = RefreshResult()
        session = self._session_factory()
        try:
            portfolio = PortfolioService(SqlAlchemyHoldingRepository(session), self._market)
            snapshots = SnapshotService(SqlAlchemySnapshotRepository(session))
            alerts = AlertService(SqlAlchemyAlertRepository(session), cooldown_minutes=self._alert_cooldown)

            symbols = list(dict.fromkeys(self._tracked + portfolio.held_symbols() + alerts.symbols()))
            if not symbols:
                return result

            try:
                result.prices = self._market.get_prices(symbols)
            except MarketDataUnavailableError as e:
                logger.warning("Refresh skipped: %s", e.message)
                return result

            result.recorded = snapshots.record_prices(list(result.prices.values()))
            result.triggered = alerts.evaluate(result.prices)
            snapshots.record_portfolio(portfolio.summary(prices=result.prices))

            now = time.monotonic()
            if self._last_prune is None or now - self._last_prune >= PRUNE_EVERY_SECONDS:
                result.pruned = snapshots.prune(self._retention_days)
                self._last_prune = now
        finally:
            session.close()
        return result

    async def tick(self) -> RefreshResult:
        """Run one refresh off the event loop and publish the prices."""
        result = await asyncio.to_thread(self.refresh_once)
        if result.prices:
            self._broadcaster.publish(build_prices_message(result.prices))
        for alert in result.triggered:
            self._broadcaster.publish({"type": "alert", "alert_id": alert.alert.alert_id, "message": alert.message})
        return result

    async def run(self) -> None:
        logger.info("Price refresher started (every %ss)", self._interval)
        while True:
            try:
                await self.tick()
            except Exception:
                logger.exception("Price refresh failed")
            await asyncio.sleep(self._interval)

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self.run())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Price refresher stopped")
