"""Portfolio endpoints: valuation, allocation and recorded totals."""

from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Query

from cryptodash.api.deps import get_portfolio_service, get_snapshot_service
from cryptodash.api.schemas import (
    AllocationItemResponse,
    AllocationResponse,
    PortfolioSummaryResponse,
    PortfolioSnapshotResponse,
)
from cryptodash.core.timezone import now_utc
from cryptodash.services import PortfolioService, SnapshotService

router = APIRouter(prefix="/api/portfolio", tags=["portfolio"])


@router.get("/summary", response_model=PortfolioSummaryResponse)
def get_summary(portfolio: PortfolioService = Depends(get_portfolio_service)):
    """
    Value every holding at current prices.

    Holdings without a price are listed in missing_symbols; stale is true
    when any price came from an expired cache entry.
    """
    return PortfolioSummaryResponse.model_validate(portfolio.summary())


@router.get("/allocation", response_model=AllocationResponse)
def get_allocation(portfolio: PortfolioService = Depends(get_portfolio_service)):
    """Market value share per symbol."""
    summary = portfolio.summary()
    return AllocationResponse(
        items=[AllocationItemResponse.model_validate(i) for i in summary.allocation],
        total_value=summary.total_value,
        as_of=summary.as_of,
    )


@router.get("/snapshots", response_model=list[PortfolioSnapshotResponse])
def list_portfolio_snapshots(
    days: Optional[int] = Query(None, ge=1, le=365),
    limit: int = Query(500, ge=1, le=5000),
    snapshots: SnapshotService = Depends(get_snapshot_service),
):
    """Recorded portfolio totals, oldest first."""
    since = now_utc() - timedelta(days=days) if days else None
    return [
        PortfolioSnapshotResponse.model_validate(s)
        for s in snapshots.list_portfolio_snapshots(since=since, limit=limit)
    ]
