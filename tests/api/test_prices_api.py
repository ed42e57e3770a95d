"""
API tests for price and snapshot endpoints.

Tests cover:
- Current prices (default tracked symbols, explicit list, single symbol)
- Price history
- Unavailable market data (503)
- Stored price snapshots
"""

from decimal import Decimal

from fastapi.testclient import TestClient

from cryptodash.main import app
from cryptodash.api.deps import get_market_data_service
from cryptodash.services import MarketDataService

from tests.conftest import FailingMarketProvider


class TestPricesAPI:
    """Tests for GET /api/prices."""

    def test_default_uses_tracked_symbols(self, client: TestClient):
        response = client.get("/api/prices")

        assert response.status_code == 200
        data = response.json()
        assert [p["symbol"] for p in data] == ["BTC", "ETH", "SOL"]
        assert Decimal(data[0]["price"]) == Decimal("60000.00")
        assert data[0]["stale"] is False
        assert data[0]["source"] == "deterministic"

    def test_explicit_symbols(self, client: TestClient):
        response = client.get("/api/prices", params={"symbols": "doge, btc,BT-C"})

        assert response.status_code == 200
        assert [p["symbol"] for p in response.json()] == ["DOGE", "BTC"]

    def test_single_price(self, client: TestClient):
        response = client.get("/api/prices/eth")

        assert response.status_code == 200
        assert Decimal(response.json()["change_24h_pct"]) == Decimal("-1.00")

    def test_unknown_symbol_is_404(self, client: TestClient):
        response = client.get("/api/prices/XYZ")

        assert response.status_code == 404
        assert response.json()["error"] == "NOT_FOUND"

    def test_unavailable_market_is_503(self, client: TestClient):
        """
        GIVEN the provider is down and nothing is cached
        WHEN prices are requested
        THEN the response is 503 with MARKET_DATA_UNAVAILABLE
        """
        app.dependency_overrides[get_market_data_service] = lambda: MarketDataService(FailingMarketProvider())

        response = client.get("/api/prices")

        assert response.status_code == 503
        assert response.json()["error"] == "MARKET_DATA_UNAVAILABLE"

    def test_response_never_contains_api_key(self, client: TestClient):
        assert "api_key" not in client.get("/api/prices").text


class TestHistoryAPI:
    """Tests for GET /api/prices/{symbol}/history."""

    def test_history(self, client: TestClient):
        response = client.get("/api/prices/BTC/history", params={"days": 3})

        assert response.status_code == 200
        data = response.json()
        assert data["symbol"] == "BTC"
        assert data["days"] == 3
        assert len(data["points"]) == 4

    def test_days_out_of_range_is_422(self, client: TestClient):
        assert client.get("/api/prices/BTC/history", params={"days": 0}).status_code == 422
        assert client.get("/api/prices/BTC/history", params={"days": 400}).status_code == 422

    def test_no_history_is_404(self, client: TestClient):
        assert client.get("/api/prices/XYZ/history").status_code == 404


class TestSnapshotsAPI:
    """Tests for GET /api/snapshots/{symbol}."""

    def test_empty_list(self, client: TestClient):
        response = client.get("/api/snapshots/BTC")

        assert response.status_code == 200
        assert response.json() == []

    def test_invalid_symbol_is_400(self, client: TestClient):
        assert client.get("/api/snapshots/BT-C").status_code == 400

    def test_limit_out_of_range_is_422(self, client: TestClient):
        assert client.get("/api/snapshots/BTC", params={"limit": 0}).status_code == 422
