"""CSV export functionality."""

import csv
import io
from pathlib import Path

from cryptodash.services.portfolio_service import PortfolioService
from cryptodash.csv.importer import CSV_COLUMNS


class HoldingsCsvExporter:
    """
    CSV exporter for holdings.

    The output can be re-imported with HoldingsCsvImporter.
    """

    def __init__(self, portfolio_service: PortfolioService):
        self._portfolio = portfolio_service

    def export_csv(self, path: str) -> None:
        """Export holdings to a CSV file."""
        file_path = Path(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        with open(file_path, "w", newline="", encoding="utf-8") as csvfile:
            self._write(csvfile)

    def export_text(self) -> str:
        """Export holdings as CSV text."""
        buffer = io.StringIO()
        self._write(buffer)
        return buffer.getvalue()

    def _write(self, stream) -> None:
        writer = csv.DictWriter(stream, fieldnames=CSV_COLUMNS)
        writer.writeheader()
        for holding in self._portfolio.list_holdings():
            writer.writerow({
                "symbol": holding.symbol,
                "quantity": str(holding.quantity),
                "cost_basis": str(holding.cost_basis),
                "note": holding.note or "",
            })
