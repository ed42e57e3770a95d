"""CSV import/export utilities."""

from cryptodash.csv.importer import HoldingsCsvImporter, CSV_COLUMNS
from cryptodash.csv.exporter import HoldingsCsvExporter
from cryptodash.csv.template import HoldingsCsvTemplateGenerator

__all__ = [
    "HoldingsCsvImporter",
    "HoldingsCsvExporter",
    "HoldingsCsvTemplateGenerator",
    "CSV_COLUMNS",
]
