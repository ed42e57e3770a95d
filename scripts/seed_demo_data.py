#!/usr/bin/env python3
"""
Seed the local database with demo holdings, alerts and a week of snapshots.
Uses the stub provider so no network access or API key is needed.
"""

import random
import sys
import uuid
from datetime import timedelta
from decimal import Decimal
from pathlib import Path

# Add src to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from cryptodash.config.logging_config import setup_logging
from cryptodash.core.exceptions import AppError
from cryptodash.core.money import quantize_money, quantize_price
from cryptodash.core.timezone import now_utc
from cryptodash.domain.models import AlertCondition, PortfolioSnapshot, PriceSnapshot
from cryptodash.providers import StubMarketDataProvider
from cryptodash.repositories.sqlalchemy import (
    SqlAlchemyAlertRepository,
    SqlAlchemyHoldingRepository,
    SqlAlchemySnapshotRepository,
)
from cryptodash.repositories.sqlalchemy.database import get_session, init_db
from cryptodash.services import (
    AlertCreate,
    AlertService,
    HoldingCreate,
    MarketDataService,
    PortfolioService,
)

DEMO_HOLDINGS = [
    ("BTC", "0.75", "42000", "Cold wallet"),
    ("ETH", "6.5", "2100", "Staked"),
    ("SOL", "120", "95.40", None),
    ("USDC", "2500", "1", "Dry powder"),
]

DEMO_ALERTS = [
    ("BTC", AlertCondition.PRICE_ABOVE, "70000"),
    ("ETH", AlertCondition.PRICE_BELOW, "2800"),
    ("SOL", AlertCondition.CHANGE_24H_ABOVE, "5"),
]


def seed_demo_data(days: int = 7) -> None:
    """Create demo holdings and alerts, then backfill hourly snapshots."""
    init_db()
    session = get_session()
    try:
        market = MarketDataService(StubMarketDataProvider(seed=7))
        portfolio = PortfolioService(SqlAlchemyHoldingRepository(session), market)
        alerts = AlertService(SqlAlchemyAlertRepository(session))
        snapshot_repo = SqlAlchemySnapshotRepository(session)

        if portfolio.list_holdings():
            print("Holdings already present; skipping demo holdings")
        else:
            for symbol, quantity, cost_basis, note in DEMO_HOLDINGS:
                portfolio.add_holding(HoldingCreate(symbol, quantity, cost_basis, note))
                print(f"✓ Added {quantity} {symbol}")

        for symbol, condition, threshold in DEMO_ALERTS:
            try:
                alerts.create_alert(AlertCreate(symbol, condition, threshold))
                print(f"✓ Alert {symbol} {condition.value} {threshold}")
            except AppError as e:
                print(f"✗ Alert {symbol}: {e.message}")

        holdings = portfolio.list_holdings()
        prices = market.get_prices([h.symbol for h in holdings])
        rng = random.Random(7)
        now = now_utc()
        total_cost = quantize_money(sum((h.total_cost for h in holdings), Decimal("0")))

        price_rows = []
        portfolio_rows = []
        for hour in range(days * 24, 0, -1):
            as_of = now - timedelta(hours=hour)
            total_value = Decimal("0")
            for holding in holdings:
                base = prices[holding.symbol].price
                drift = Decimal(str(1 + rng.uniform(-0.03, 0.03)))
                price = quantize_price(base * drift)
                price_rows.append(
                    PriceSnapshot(snapshot_id=str(uuid.uuid4()), symbol=holding.symbol, price=price, as_of=as_of)
                )
                total_value += holding.quantity * price
            portfolio_rows.append(
                PortfolioSnapshot(
                    snapshot_id=str(uuid.uuid4()),
                    total_value=quantize_money(total_value),
                    total_cost=total_cost,
                    as_of=as_of,
                )
            )

        snapshot_repo.add_price_snapshots(price_rows)
        for row in portfolio_rows:
            snapshot_repo.add_portfolio_snapshot(row)
        print(f"✓ Backfilled {len(price_rows)} price and {len(portfolio_rows)} portfolio snapshots")
    finally:
        session.close()


if __name__ == "__main__":
    setup_logging()
    seed_demo_data()
