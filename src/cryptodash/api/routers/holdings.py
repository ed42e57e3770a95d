"""Holding endpoints: CRUD plus CSV import/export."""

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import Response

from cryptodash.api.deps import get_portfolio_service, get_csv_importer, get_csv_exporter
from cryptodash.api.schemas import (
    HoldingCreateRequest,
    HoldingUpdateRequest,
    HoldingResponse,
    ImportSummaryResponse,
)
from cryptodash.core.exceptions import ValidationError
from cryptodash.csv import HoldingsCsvImporter, HoldingsCsvExporter
from cryptodash.services import PortfolioService, HoldingCreate, HoldingUpdate

router = APIRouter(prefix="/api/holdings", tags=["holdings"])


@router.get("", response_model=list[HoldingResponse])
def list_holdings(portfolio: PortfolioService = Depends(get_portfolio_service)):
    """List all holdings."""
    return [HoldingResponse.model_validate(h) for h in portfolio.list_holdings()]


@router.post("", response_model=HoldingResponse, status_code=201)
def create_holding(
    data: HoldingCreateRequest,
    portfolio: PortfolioService = Depends(get_portfolio_service),
):
    """Create a holding."""
    holding = portfolio.add_holding(
        HoldingCreate(
            symbol=data.symbol,
            quantity=data.quantity,
            cost_basis=data.cost_basis,
            note=data.note,
        )
    )
    return HoldingResponse.model_validate(holding)


@router.get("/export")
def export_holdings(exporter: HoldingsCsvExporter = Depends(get_csv_exporter)):
    """Download all holdings as CSV."""
    return Response(
        content=exporter.export_text(),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="holdings.csv"'},
    )


@router.post("/import", response_model=ImportSummaryResponse)
async def import_holdings(
    file: UploadFile = File(...),
    importer: HoldingsCsvImporter = Depends(get_csv_importer),
):
    """Import holdings from an uploaded CSV file."""
    raw = await file.read()
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise ValidationError("CSV file must be UTF-8 encoded")
    summary = importer.import_text(text)
    return ImportSummaryResponse(
        imported_count=summary.imported_count,
        error_count=summary.error_count,
        errors=summary.errors,
    )


@router.get("/{holding_id}", response_model=HoldingResponse)
def get_holding(holding_id: str, portfolio: PortfolioService = Depends(get_portfolio_service)):
    """Get one holding."""
    return HoldingResponse.model_validate(portfolio.get_holding(holding_id))


@router.patch("/{holding_id}", response_model=HoldingResponse)
def update_holding(
    holding_id: str,
    data: HoldingUpdateRequest,
    portfolio: PortfolioService = Depends(get_portfolio_service),
):
    """Partially update a holding."""
    holding = portfolio.update_holding(
        holding_id,
        HoldingUpdate(
            symbol=data.symbol,
            quantity=data.quantity,
            cost_basis=data.cost_basis,
            note=data.note,
        ),
    )
    return HoldingResponse.model_validate(holding)


@router.delete("/{holding_id}", status_code=204)
def delete_holding(holding_id: str, portfolio: PortfolioService = Depends(get_portfolio_service)):
    """Delete a holding."""
    portfolio.delete_holding(holding_id)
    return Response(status_code=204)
