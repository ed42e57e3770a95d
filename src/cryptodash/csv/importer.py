"""CSV import functionality."""

import csv
import io
import logging
from pathlib import Path
from typing import Iterable

from cryptodash.core.exceptions import AppError, ValidationError
from cryptodash.domain.views import ImportSummary
from cryptodash.services.portfolio_service import PortfolioService, HoldingCreate

logger = logging.getLogger(__name__)

# Expected CSV columns
CSV_COLUMNS = [
    "symbol",
    "quantity",
    "cost_basis",
    "note",
]
REQUIRED_COLUMNS = {"symbol", "quantity"}


class HoldingsCsvImporter:
    """
    CSV importer for bulk holding entry.

    Expected format: symbol, quantity, cost_basis, note (cost_basis and note optional).
    Bad rows are reported in the summary; good rows are still imported.
    """

    def __init__(self, portfolio_service: PortfolioService):
        self._portfolio = portfolio_service

    def import_csv(self, path: str) -> ImportSummary:
        """Import holdings from a CSV file."""
        file_path = Path(path)
        if not file_path.exists():
            raise ValidationError(f"File not found: {path}")

        with open(file_path, newline="", encoding="utf-8-sig") as csvfile:
            return self._import_rows(csv.DictReader(csvfile))

    def import_text(self, text: str) -> ImportSummary:
        """Import holdings from CSV content (e.g. an uploaded file)."""
        return self._import_rows(csv.DictReader(io.StringIO(text.lstrip("\ufeff"))))

    def _import_rows(self, reader: csv.DictReader) -> ImportSummary:
        fieldnames: Iterable[str] = reader.fieldnames or []
        missing = REQUIRED_COLUMNS - {f.strip() for f in fieldnames}
        if missing:
            raise ValidationError(f"Missing required columns: {', '.join(sorted(missing))}")

        summary = ImportSummary()
        for row_num, row in enumerate(reader, start=2):  # Start at 2 (header is row 1)
            # DictReader files surplus fields under the None key
            if row.get(None):
                summary.error_count += 1
                summary.errors.append(f"Row {row_num}: too many fields (quote notes that contain commas)")
                continue
            row = {(k or "").strip(): (v or "").strip() for k, v in row.items()}
            if not any(row.values()):
                continue
            try:
                self._portfolio.add_holding(
                    HoldingCreate(
                        symbol=row.get("symbol", ""),
                        quantity=row.get("quantity", ""),
                        cost_basis=row.get("cost_basis") or "0",
                        note=row.get("note") or None,
                    )
                )
                summary.imported_count += 1
            except AppError as e:
                summary.error_count += 1
                summary.errors.append(f"Row {row_num}: {e.message}")

        logger.info("Imported %d holdings (%d errors)", summary.imported_count, summary.error_count)
        return summary
