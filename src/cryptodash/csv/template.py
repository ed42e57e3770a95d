"""CSV template generation."""

import csv
from pathlib import Path

from cryptodash.csv.importer import CSV_COLUMNS


class HoldingsCsvTemplateGenerator:
    """Generator for blank CSV import templates."""

    def generate_template(self, path: str) -> None:
        """
        Generate a CSV template with headers and example rows.

        Args:
            path: Output file path for the template
        """
        file_path = Path(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        with open(file_path, "w", newline="", encoding="utf-8") as csvfile:
            writer = csv.DictWriter(csvfile, fieldnames=CSV_COLUMNS)
            writer.writeheader()
            writer.writerow({"symbol": "BTC", "quantity": "0.25", "cost_basis": "42000.00", "note": "Cold wallet"})
            writer.writerow({"symbol": "ETH", "quantity": "3", "cost_basis": "2300.50", "note": ""})
