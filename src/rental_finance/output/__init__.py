"""Income statement exports for Excel and CSV."""

from rental_finance.output.csv_exporter import CSVExporter
from rental_finance.output.excel_writer import ExcelWriter

__all__ = ["ExcelWriter", "CSVExporter"]
