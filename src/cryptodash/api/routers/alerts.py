"""Alert setting endpoints."""

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from cryptodash.api.deps import get_alert_service, get_market_data_service
from cryptodash.api.schemas import (
    AlertCreateRequest,
    AlertUpdateRequest,
    AlertResponse,
    TriggeredAlertResponse,
)
from cryptodash.core.exceptions import MarketDataUnavailableError
from cryptodash.services import AlertService, AlertCreate, AlertUpdate, MarketDataService

router = APIRouter(prefix="/api/alerts", tags=["alerts"])


@router.get("", response_model=list[AlertResponse])
def list_alerts(alerts: AlertService = Depends(get_alert_service)):
    """List alert settings."""
    return [AlertResponse.model_validate(a) for a in alerts.list_alerts()]


@router.post("", response_model=AlertResponse, status_code=201)
def create_alert(data: AlertCreateRequest, alerts: AlertService = Depends(get_alert_service)):
    """Create an alert setting."""
    alert = alerts.create_alert(
        AlertCreate(
            symbol=data.symbol,
            condition=data.condition,
            threshold=data.threshold,
            enabled=data.enabled,
            note=data.note,
        )
    )
    return AlertResponse.model_validate(alert)


@router.post("/check", response_model=list[TriggeredAlertResponse])
def check_alerts(
    alerts: AlertService = Depends(get_alert_service),
    market: MarketDataService = Depends(get_market_data_service),
):
    """Evaluate enabled alerts against current prices."""
    symbols = alerts.symbols()
    if not symbols:
        return []
    try:
        prices = market.get_prices(symbols)
    except MarketDataUnavailableError:
        return []
    return [TriggeredAlertResponse.model_validate(t) for t in alerts.evaluate(prices)]


@router.get("/{alert_id}", response_model=AlertResponse)
def get_alert(alert_id: str, alerts: AlertService = Depends(get_alert_service)):
    """Get one alert setting."""
    return AlertResponse.model_validate(alerts.get_alert(alert_id))


@router.patch("/{alert_id}", response_model=AlertResponse)
def update_alert(
    alert_id: str,
    data: AlertUpdateRequest,
    alerts: AlertService = Depends(get_alert_service),
):
    """Partially update an alert setting."""
    alert = alerts.update_alert(
        alert_id,
        AlertUpdate(threshold=data.threshold, enabled=data.enabled, note=data.note),
    )
    return AlertResponse.model_validate(alert)


@router.delete("/{alert_id}", status_code=204)
def delete_alert(alert_id: str, alerts: AlertService = Depends(get_alert_service)):
    """Delete an alert setting."""
    alerts.delete_alert(alert_id)
    return Response(status_code=204)
