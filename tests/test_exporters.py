"""Tests for CSV and Excel statement exports."""

import csv
from datetime import date
from decimal import Decimal
from pathlib import Path

from openpyxl import load_workbook

from rental_finance.config import Config, OutputConfig
from rental_finance.models.booking import Booking
from rental_finance.models.expense import Expense
from rental_finance.models.report import IncomeStatement
from rental_finance.output import CSVExporter, ExcelWriter
from rental_finance.processing.income_statement import generate_income_statement


def create_statement(comparison: str = "none") -> IncomeStatement:
    """A quarterly statement with one booking and two expenses."""
    bookings = [
        Booking(id="b1", property_id="p1", check_in=date(2024, 1, 10),
                check_out=date(2024, 1, 15), total_price_fcfa=Decimal("250000")),
    ]
    expenses = [
        Expense(id="e1", date=date(2024, 2, 1), category="rent", amount_fcfa=Decimal("300000")),
        Expense(id="e2", date=date(2024, 2, 3), category="=cmd|calc", amount_fcfa=Decimal("1234")),
    ]
    return generate_income_statement(
        bookings, expenses, [], 2024, "quarter", comparison, as_of=date(2024, 12, 31)
    )


def read_csv(path: Path) -> list[list[str]]:
    """Read all rows of a CSV file."""
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


class TestCSVExporter:
    """Tests for CSVExporter."""

    def test_export(self, tmp_path: Path) -> None:
        """The statement is written as a table with rounded XAF amounts."""
        path = CSVExporter(Config()).export(tmp_path / "out" / "statement.csv", create_statement())

        rows = read_csv(path)
        assert rows[0] == ["État des résultats 2024 - Trimestriel"]
        assert rows[3] == ["Compte", "Q1", "Q2", "Q3", "Q4", "Total"]

        by_label = {row[0]: row[1:] for row in rows[4:] if row}
        assert by_label["Revenus d'hébergement"] == ["250000", "0", "0", "0", "250000"]
        assert by_label["Loyer"] == ["300000", "0", "0", "0", "300000"]
        assert by_label["Autre"] == ["1000", "0", "0", "0", "1000"]
        assert by_label["RÉSULTAT NET"][0] == "-51000"
        assert by_label["Nuits réservées"] == ["5", "0", "0", "0", "5"]
        assert by_label["Prix moyen par nuit (XAF)"] == ["50000", "", "", "", "50000"]

    def test_comparison_columns(self, tmp_path: Path) -> None:
        """Comparison columns are present when requested."""
        path = CSVExporter(Config()).export(tmp_path / "statement.csv", create_statement("lastYear"))

        rows = read_csv(path)
        assert rows[3][-5:] == ["Q1 LY", "Q2 LY", "Q3 LY", "Q4 LY", "Total LY"]

    def test_configured_date_format(self, tmp_path: Path) -> None:
        """The subtitle follows the configured date format."""
        config = Config(output=OutputConfig(date_format="%Y-%m-%d"))
        path = CSVExporter(config).export(tmp_path / "statement.csv", create_statement())

        rows = read_csv(path)
        assert rows[1] == ["2024-01-01 - 2024-12-31 • Devise: XAF"]


class TestExcelWriter:
    """Tests for ExcelWriter."""

    def test_write(self, tmp_path: Path) -> None:
        """The workbook holds the header and numeric amounts."""
        path = tmp_path / "statement.xlsx"
        ExcelWriter(Config()).write(path, create_statement())

        wb = load_workbook(path)
        ws = wb.active
        assert ws.title == "Income Statement"
        assert ws.cell(row=1, column=1).value == "État des résultats 2024 - Trimestriel"
        header = [ws.cell(row=4, column=c).value for c in range(1, 7)]
        assert header == ["Compte", "Q1", "Q2", "Q3", "Q4", "Total"]

        labels = {ws.cell(row=r, column=1).value: r for r in range(5, ws.max_row + 1)}
        revenue_row = labels["Revenus d'hébergement"]
        assert ws.cell(row=revenue_row, column=2).value == 250000
        assert ws.cell(row=revenue_row, column=6).value == 250000
        net_row = labels["RÉSULTAT NET"]
        assert ws.cell(row=net_row, column=2).value == -51000
