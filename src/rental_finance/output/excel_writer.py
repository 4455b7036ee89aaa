"""Excel workbook writer for income statements."""

from decimal import Decimal
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from rental_finance.config import Config
from rental_finance.models.currency import Currency
from rental_finance.models.report import IncomeStatement
from rental_finance.output.layout import (
    RowKind,
    StatementRow,
    ValueFormat,
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


class ExcelWriter:
    """Writes an income statement to a one-sheet Excel workbook."""

    SHEET_TITLE = "Income Statement"

    def __init__(self, config: Config):
        """Initialize Excel writer.

        Args:
            config: Application configuration.
        """
        self.config = config
        self.output_config = config.output

        self.header_font = Font(bold=True, color="FFFFFF")
        self.header_fill = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
        self.group_font = Font(bold=True, color="666666")
        self.total_font = Font(bold=True)
        self.result_font = Font(bold=True, size=12)
        self.right_aligned = Alignment(horizontal="right")
        self.child_indent = Alignment(indent=2)
        self.total_border = Border(top=Side(style="thin"))

    def write(self, output_path: Path, statement: IncomeStatement) -> None:
        """Write the statement to an .xlsx workbook."""
        logger.info(f"Writing Excel workbook to {output_path}")

        wb = Workbook()
        ws = wb.active
        ws.title = self.SHEET_TITLE

        ws.cell(row=1, column=1, value=statement_title(statement)).font = Font(bold=True, size=14)
        date_format = self.output_config.date_format
        ws.cell(row=2, column=1, value=statement_subtitle(statement, date_format))

        header_row = 4
        header = statement_header(statement)
        for col, text in enumerate(header, start=1):
            cell = ws.cell(row=header_row, column=col, value=text)
            cell.font = self.header_font
            cell.fill = self.header_fill
            if col > 1:
                cell.alignment = self.right_aligned

        row_idx = header_row + 1
        for row in build_rows(statement, date_format):
            self._write_row(ws, row_idx, row, statement)
            row_idx += 1

        ws.freeze_panes = ws.cell(row=header_row + 1, column=2)
        ws.column_dimensions["A"].width = 42
        for col in range(2, len(header) + 1):
            ws.column_dimensions[get_column_letter(col)].width = 14

        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)
        logger.info(f"Excel workbook saved: {output_path}")

    def _write_row(self, ws: Worksheet, row_idx: int, row: StatementRow, statement: IncomeStatement) -> None:
        label_cell = ws.cell(row=row_idx, column=1, value=sanitize_cell(row.label))
        if row.kind == RowKind.GROUP:
            label_cell.font = self.group_font
            return
        if row.kind == RowKind.CHILD:
            label_cell.alignment = self.child_indent

        font = None
        if row.kind == RowKind.TOTAL:
            font = self.total_font
        elif row.kind == RowKind.RESULT:
            font = self.result_font
        if font is not None:
            label_cell.font = font

        for offset, value in enumerate(row_cells(row, statement)):
            cell = ws.cell(row=row_idx, column=offset + 2)
            if value is None:
                continue
            if row.value_format == ValueFormat.AMOUNT:
                cell.value = display_amount(Decimal(value), statement.currency, self.output_config)
                cell.number_format = self._money_format(statement.currency)
            elif row.value_format == ValueFormat.PERCENT:
                cell.value = Decimal(value) / Decimal("100")
                cell.number_format = "0%"
            else:
                cell.value = value
                cell.number_format = "0"
            if font is not None:
                cell.font = font
            if row.kind in (RowKind.TOTAL, RowKind.RESULT):
                cell.border = self.total_border

    def _money_format(self, currency: Currency) -> str:
        """Excel number format for money values."""
        if currency == Currency.XAF:
            return '#,##0_);[Red](#,##0)'
        places = "0" * self.output_config.decimal_places
        fraction = f".{places}" if places else ""
        return f'#,##0{fraction}_);[Red](#,##0{fraction})'
