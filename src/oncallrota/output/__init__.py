"""Output generation for rotas (console, CSV, PDF)."""

from oncallrota.output.console import format_schedule_table, print_schedule
from oncallrota.output.csv_export import CSVExporter
from oncallrota.output.pdf_generator import PDFGenerator

__all__ = [
    "CSVExporter",
    "PDFGenerator",
    "format_schedule_table",
    "print_schedule",
]
