"""CSV export of an income statement."""

import csv
from decimal import Decimal
from pathlib import Path

from rental_finance.config import Config
from rental_finance.models.report import IncomeStatement
from rental_finance.output.layout import (
    RowKind,
    StatementRow,
    ValueFormat,
    Value,
    build_rows,
    display_amount,
    row_cells,
    statement_header,
    statement_subtitle,
    statement_title,
)
from rental_finance.utils.logging_config import get_logger
from rental_finance.utils.sanitize import sanitize_cell

logger = get_logger(__name__)


class CSVExporter:
    """Writes an income statement as a single CSV table.

    Amounts are written as plain numbers (no grouping) so spreadsheet
    imports keep them numeric; empty cells stay empty.
    """

    def __init__(self, config: Config):
        """Initialize CSV exporter.

        Args:
            config: Application configuration.
        """
        self.config = config
        self.output_config = config.output

    def export(self, output_path: Path, statement: IncomeStatement) -> Path:
        """Write the statement to output_path.

        Returns:
            The written path.
        """
        logger.info(f"Writing CSV income statement to {output_path}")
        output_path.parent.mkdir(parents=True, exist_ok=True)

        date_format = self.output_config.date_format
        with open(output_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow([statement_title(statement)])
            writer.writerow([statement_subtitle(statement, date_format)])
            writer.writerow([])
            writer.writerow(statement_header(statement))
            for row in build_rows(statement, date_format):
                writer.writerow(self._row(row, statement))

        logger.info(f"CSV income statement saved: {output_path}")
        return output_path

    def _row(self, row: StatementRow, statement: IncomeStatement) -> list[object]:
        if row.kind == RowKind.GROUP:
            return [sanitize_cell(row.label.upper())]
        label = f"  {row.label}" if row.kind == RowKind.CHILD else row.label
        return [
            sanitize_cell(label),
            *(self._cell(value, row.value_format, statement) for value in row_cells(row, statement)),
        ]

    def _cell(self, value: Value, value_format: ValueFormat, statement: IncomeStatement) -> str:
        if value is None:
            return ""
        if value_format == ValueFormat.AMOUNT:
            return str(display_amount(Decimal(value), statement.currency, self.output_config))
        return str(value)
