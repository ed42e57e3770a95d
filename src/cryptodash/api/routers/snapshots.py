"""Stored price snapshot endpoints."""

from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Query

from cryptodash.api.deps import get_snapshot_service
from cryptodash.api.schemas import PriceSnapshotResponse
from cryptodash.core.timezone import now_utc
from cryptodash.services import SnapshotService

router = APIRouter(prefix="/api/snapshots", tags=["snapshots"])


@router.get("/{symbol}", response_model=list[PriceSnapshotResponse])
def list_price_snapshots(
    symbol: str,
    days: Optional[int] = Query(None, ge=1, le=365),
    limit: int = Query(500, ge=1, le=5000),
    snapshots: SnapshotService = Depends(get_snapshot_service),
):
    """Recorded prices for a symbol, oldest first."""
    since = now_utc() - timedelta(days=days) if days else None
    return [
        PriceSnapshotResponse.model_validate(s)
        for s in snapshots.list_price_snapshots(symbol, since=since, limit=limit)
    ]
