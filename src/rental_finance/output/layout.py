"""Tabular layout of an income statement shared by every renderer.

The table has one label column, one column per period, a Total column and,
when the statement carries a comparison, one column per comparison period
plus a comparison total.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from rental_finance.config import OutputConfig
from rental_finance.models.currency import Currency
from rental_finance.models.period import PeriodType
from rental_finance.models.report import IncomeStatement, line_label
from rental_finance.utils.decimal_utils import (
    format_amount,
    quantize_money,
    round_to_step,
    sum_amounts,
)

Value = Union[Decimal, int, None]

EMPTY_CELL = "—"

PERIOD_TYPE_TITLES = {
    PeriodType.MONTH: "Mensuel",
    PeriodType.QUARTER: "Trimestriel",
    PeriodType.YEAR: "Annuel",
}


class RowKind(Enum):
    """Visual role of a row."""

    GROUP = "group"
    KPI = "kpi"
    LINE = "line"
    CHILD = "child"
    TOTAL = "total"
    RESULT = "result"


class ValueFormat(Enum):
    """How a row's values are displayed."""

    AMOUNT = "amount"
    NIGHTS = "nights"
    PERCENT = "percent"


@dataclass
class StatementRow:
    """One row of the rendered statement.

    Attributes:
        label: Text of the label column.
        kind: Visual role.
        value_format: Display format of the values.
        values: One value per period; None renders as an empty cell.
        total: Value of the Total column.
        comparison: Values per comparison period, None when the row has no
            comparison figures.
        comparison_total: Total of the comparison values.
    """

    label: str
    kind: RowKind
    value_format: ValueFormat = ValueFormat.AMOUNT
    values: list[Value] = field(default_factory=list)
    total: Value = None
    comparison: Optional[list[Value]] = None
    comparison_total: Value = None


def statement_title(statement: IncomeStatement) -> str:
    """Report title, e.g. "État des résultats 2024 - Trimestriel"."""
    return f"État des résultats {statement.year} - {PERIOD_TYPE_TITLES[statement.period_type]}"


def statement_subtitle(statement: IncomeStatement, date_format: str = "%d/%m/%Y") -> str:
    """Covered date range and currency."""
    if statement.periods:
        start = min(p.start for p in statement.periods)
        end = max(p.end for p in statement.periods)
        span = f"{start.strftime(date_format)} - {end.strftime(date_format)}"
    else:
        span = str(statement.year)
    return f"{span} • Devise: {statement.currency.value}"


def statement_header(statement: IncomeStatement) -> list[str]:
    """Column headers."""
    header = ["Compte", *(p.label for p in statement.periods), "Total"]
    if statement.comparison is not None:
        header.extend(f"{p.label} LY" for p in statement.comparison.periods)
        header.append("Total LY")
    return header


def build_rows(statement: IncomeStatement, date_format: str = "%d/%m/%Y") -> list[StatementRow]:
    """Lay the statement out as rows.

    The Total column sums amounts and nights, divides total revenue by total
    nights for the average nightly price and averages the occupancy rates.
    Lines without comparison figures leave their comparison cells empty.
    """
    comparison = statement.comparison
    currency = statement.currency.value
    rows: list[StatementRow] = []

    def amount_row(
        label: str,
        values: list[Decimal],
        kind: RowKind = RowKind.LINE,
        comparison_values: Optional[list[Decimal]] = None,
    ) -> StatementRow:
        return StatementRow(
            label=label,
            kind=kind,
            values=list(values),
            total=sum_amounts(values),
            comparison=list(comparison_values) if comparison_values is not None else None,
            comparison_total=sum_amounts(comparison_values) if comparison_values is not None else None,
        )

    # KPIs
    nights = statement.kpis.nights_booked
    total_nights = sum(nights)
    total_revenue = sum_amounts(statement.revenue.total)
    rates = statement.kpis.occupancy_rate
    rows.append(StatementRow("Indicateurs opérationnels (non-comptables)", RowKind.GROUP))
    rows.append(
        StatementRow(
            "Nuits réservées",
            RowKind.KPI,
            ValueFormat.NIGHTS,
            values=list(nights),
            total=total_nights,
        )
    )
    rows.append(
        StatementRow(
            f"Prix moyen par nuit ({currency})",
            RowKind.KPI,
            values=[
                price if n > 0 else None
                for price, n in zip(statement.kpis.avg_night_price, nights)
            ],
            total=quantize_money(total_revenue / total_nights) if total_nights > 0 else None,
        )
    )
    rows.append(
        StatementRow(
            "Taux d'occupation",
            RowKind.KPI,
            ValueFormat.PERCENT,
            values=list(rates),
            total=quantize_money(sum_amounts(rates) / len(rates)) if rates else Decimal("0"),
        )
    )

    # Revenue
    rows.append(StatementRow("Revenus", RowKind.GROUP))
    rows.append(
        amount_row(
            "Revenus d'hébergement",
            statement.revenue.accommodation,
            comparison_values=comparison.revenue_total if comparison else None,
        )
    )

    # Fixed costs
    fixed = statement.fixed_costs
    rows.append(StatementRow("Coûts fixes", RowKind.GROUP))
    rows.append(amount_row(line_label("rent"), fixed.rent))
    rows.append(amount_row(line_label("common_areas"), fixed.common_areas))
    rows.append(amount_row(line_label("internet"), fixed.internet))
    rows.append(
        amount_row(
            "Total Coûts Fixes",
            fixed.total,
            RowKind.TOTAL,
            comparison.fixed_costs_total if comparison else None,
        )
    )
    rows.append(
        amount_row(
            "BÉNÉFICE BRUT",
            statement.gross_profit,
            RowKind.RESULT,
            comparison.gross_profit if comparison else None,
        )
    )

    # Operational costs
    operational = statement.operational_costs
    rows.append(StatementRow("Coûts opérationnels", RowKind.GROUP))
    for line in operational.categories_to_include:
        rows.append(amount_row(line.label, line.values))
        if line.key == "utilities":
            rows.append(
                amount_row(
                    line_label("utilities_electricity"),
                    operational.line("utilities_electricity"),
                    RowKind.CHILD,
                )
            )
            rows.append(
                amount_row(line_label("utilities_water"), operational.line("utilities_water"), RowKind.CHILD)
            )
    rows.append(
        amount_row(
            "Total Coûts Opérationnels",
            operational.total,
            RowKind.TOTAL,
            comparison.operational_costs_total if comparison else None,
        )
    )
    rows.append(
        amount_row(
            "RÉSULTAT NET",
            statement.net_income,
            RowKind.RESULT,
            comparison.net_income if comparison else None,
        )
    )

    # Year to date, in the Total column
    ytd = statement.ytd
    ytd_label = "Cumul annuel (YTD)"
    if ytd.period is not None:
        ytd_label = f"{ytd_label} au {ytd.period.end.strftime(date_format)}"
    no_periods: list[Value] = [None] * len(statement.periods)
    rows.append(StatementRow(ytd_label, RowKind.GROUP))
    for label, value, kind in (
        ("Revenus", ytd.revenue_total, RowKind.LINE),
        ("Coûts fixes", ytd.fixed_costs_total, RowKind.LINE),
        ("Bénéfice brut", ytd.gross_profit, RowKind.TOTAL),
        ("Coûts opérationnels", ytd.operational_costs_total, RowKind.LINE),
        ("Résultat net", ytd.net_income, RowKind.RESULT),
    ):
        rows.append(StatementRow(label, kind, values=list(no_periods), total=value))

    return rows


def row_cells(row: StatementRow, statement: IncomeStatement) -> list[Value]:
    """Values of a row in column order, label excluded."""
    width = len(statement.periods)
    values = list(row.values) if row.values else [None] * width
    cells: list[Value] = [*values, row.total]
    if statement.comparison is not None:
        comparison_width = len(statement.comparison.periods)
        if row.comparison is not None:
            cells.extend(row.comparison)
        else:
            cells.extend([None] * comparison_width)
        cells.append(row.comparison_total)
    return cells


def display_amount(amount: Decimal, currency: Currency, output: OutputConfig) -> Decimal:
    """Amount as displayed: XAF rounded to the configured step, EUR to cents."""
    if currency == Currency.XAF:
        return round_to_step(amount, output.xaf_rounding)
    return quantize_money(amount, output.decimal_places)


def format_value(
    value: Value,
    value_format: ValueFormat,
    currency: Currency,
    output: OutputConfig,
) -> str:
    """Display text of a cell."""
    if value is None:
        return EMPTY_CELL
    if value_format == ValueFormat.NIGHTS:
        return str(value)
    if value_format == ValueFormat.PERCENT:
        return f"{round_to_step(Decimal(value), 1)}%"
    places = 0 if currency == Currency.XAF else output.decimal_places
    return format_amount(display_amount(Decimal(value), currency, output), places)
