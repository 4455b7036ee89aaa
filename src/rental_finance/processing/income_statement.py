"""Income statement aggregation.

Each period goes through two phases. The first sums revenue, fixed costs and
operational lines from the categorized expenses. The second compares the
categorized cost total with the authoritative total of every expense dated
in the period and, when they differ by more than the tolerance, returns new
figures with the difference added to the "other" line.
"""

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from rental_finance.config import Config
from rental_finance.models.booking import Booking
from rental_finance.models.category import ExpenseCategory
from rental_finance.models.currency import Currency
from rental_finance.models.expense import Expense
from rental_finance.models.period import ComparisonType, Period, PeriodType
from rental_finance.models.property import Property
from rental_finance.models.report import (
    OPERATIONAL_LINE_KEYS,
    CategoryLine,
    ComparisonSummary,
    FixedCostSection,
    IncomeStatement,
    KPISeries,
    OperationalCostSection,
    RevenueSection,
    YTDSummary,
    line_label,
)
from rental_finance.processing.categorizer import ExpenseCategorizer
from rental_finance.processing.metrics import (
    calculate_average_night_price,
    calculate_nights_booked,
    calculate_occupancy_rate,
    calculate_total_expenses,
    calculate_total_revenue,
)
from rental_finance.processing.periods import generate_periods, ytd_period
from rental_finance.utils.logging_config import LogContext, get_logger

logger = get_logger(__name__)

# Operational lines summed straight from one category
_SINGLE_CATEGORY_LINES: dict[str, ExpenseCategory] = {
    "canal_sat": ExpenseCategory.CANAL_SAT,
    "laundry": ExpenseCategory.LAUNDRY,
    "consumables": ExpenseCategory.CONSUMABLES,
    "supplies": ExpenseCategory.SUPPLIES,
    "maintenance": ExpenseCategory.MAINTENANCE,
    "wages": ExpenseCategory.WAGES,
    "taxes": ExpenseCategory.TAXES,
    "transport": ExpenseCategory.TRANSPORT,
    "mobile_data": ExpenseCategory.MOBILE_DATA,
    "marketing": ExpenseCategory.MARKETING,
    "furnishings": ExpenseCategory.FURNISHINGS,
    "security": ExpenseCategory.SECURITY,
    "other": ExpenseCategory.OTHER,
}


def _today() -> date:
    return date.today()


@dataclass(frozen=True)
class _PeriodFigures:
    """Figures of one period.

    operational maps every key of OPERATIONAL_LINE_KEYS plus
    utilities_electricity and utilities_water to its amount.
    """

    nights: int
    avg_night_price: Decimal
    occupancy_rate: Decimal
    revenue: Decimal
    rent: Decimal
    common_areas: Decimal
    internet: Decimal
    operational: dict[str, Decimal]
    authoritative_expenses: Decimal

    @property
    def fixed_total(self) -> Decimal:
        return self.rent + self.common_areas + self.internet

    @property
    def operational_total(self) -> Decimal:
        return sum((self.operational[key] for key in OPERATIONAL_LINE_KEYS), Decimal("0"))

    @property
    def gross_profit(self) -> Decimal:
        return self.revenue - self.fixed_total

    @property
    def net_income(self) -> Decimal:
        return self.revenue - self.fixed_total - self.operational_total


def reconciliation_delta(categorized: Decimal, authoritative: Decimal, tolerance: Decimal) -> Decimal:
    """Adjustment bringing categorized costs in line with the authoritative total.

    Returns:
        authoritative - categorized when the gap exceeds tolerance, else zero.
    """
    delta = authoritative - categorized
    if abs(delta) > tolerance:
        return delta
    return Decimal("0")


class IncomeStatementBuilder:
    """Computes income statements over in-memory bookings and expenses.

    Inputs are never mutated and no state is kept between calls.
    """

    def __init__(self, settings: Optional[Config] = None, currency: Optional[Currency] = None):
        """Initialize builder.

        Args:
            settings: Configuration; defaults apply when None.
            currency: Overrides the configured reporting currency.
        """
        self.settings = settings or Config()
        self.currency = currency or self.settings.report.currency
        self.tolerance = self.settings.report.reconciliation_tolerance
        self.categorizer = ExpenseCategorizer(
            currency=self.currency,
            utility_keywords=self.settings.report.utility_keywords,
        )

    def categorized_figures(
        self,
        period: Period,
        bookings: Sequence[Booking],
        expenses: Sequence[Expense],
        properties: Sequence[Property],
    ) -> _PeriodFigures:
        """First phase: figures straight from the categorized expenses."""
        nights = calculate_nights_booked(bookings, period)
        revenue = calculate_total_revenue(bookings, period, self.currency)

        totals = self.categorizer.category_totals(expenses, period)
        utilities = self.categorizer.utility_split(expenses, period)

        operational = {key: totals[category] for key, category in _SINGLE_CATEGORY_LINES.items()}
        operational["utilities_electricity"] = utilities.electricity
        operational["utilities_water"] = utilities.water
        operational["utilities"] = utilities.electricity + utilities.water
        operational["cleaning"] = (
            totals[ExpenseCategory.CLEANING] + totals[ExpenseCategory.CLEANING_MATERIAL]
        )

        return _PeriodFigures(
            nights=nights,
            avg_night_price=calculate_average_night_price(revenue, nights),
            occupancy_rate=calculate_occupancy_rate(nights, properties, period),
            revenue=revenue,
            rent=totals[ExpenseCategory.RENT],
            common_areas=totals[ExpenseCategory.COMMON_AREAS],
            internet=utilities.internet,
            operational=operational,
            authoritative_expenses=calculate_total_expenses(expenses, period, self.currency),
        )

    def reconcile(self, figures: _PeriodFigures, label: str = "") -> _PeriodFigures:
        """Second phase: new figures whose costs match the authoritative total."""
        categorized = figures.fixed_total + figures.operational_total
        delta = reconciliation_delta(categorized, figures.authoritative_expenses, self.tolerance)
        if delta == 0:
            return figures

        logger.debug(
            f"{label}: categorized costs {categorized} differ from expense total "
            f"{figures.authoritative_expenses}, adding {delta} to other"
        )
        operational = dict(figures.operational)
        operational["other"] = operational["other"] + delta
        return replace(figures, operational=operational)

    def period_figures(
        self,
        periods: Iterable[Period],
        bookings: Sequence[Booking],
        expenses: Sequence[Expense],
        properties: Sequence[Property],
    ) -> list[_PeriodFigures]:
        """Reconciled figures for each period, in order."""
        return [
            self.reconcile(self.categorized_figures(p, bookings, expenses, properties), p.label)
            for p in periods
        ]

    def comparison_summary(
        self,
        periods: list[Period],
        bookings: Sequence[Booking],
        expenses: Sequence[Expense],
        properties: Sequence[Property],
    ) -> ComparisonSummary:
        """Top-level totals for a second period axis."""
        figures = self.period_figures(periods, bookings, expenses, properties)
        return ComparisonSummary(
            periods=periods,
            revenue_total=[f.revenue for f in figures],
            fixed_costs_total=[f.fixed_total for f in figures],
            gross_profit=[f.gross_profit for f in figures],
            operational_costs_total=[f.operational_total for f in figures],
            net_income=[f.net_income for f in figures],
        )

    def ytd_summary(
        self,
        year: int,
        as_of: date,
        bookings: Sequence[Booking],
        expenses: Sequence[Expense],
        properties: Sequence[Property],
    ) -> YTDSummary:
        """Totals from January 1 through as_of as a single period."""
        period = ytd_period(year, as_of)
        figures = self.period_figures([period], bookings, expenses, properties)[0]
        return YTDSummary(
            revenue_total=figures.revenue,
            fixed_costs_total=figures.fixed_total,
            gross_profit=figures.gross_profit,
            operational_costs_total=figures.operational_total,
            net_income=figures.net_income,
            period=period,
        )

    def safe_ytd_summary(
        self,
        year: int,
        as_of: date,
        bookings: Sequence[Booking],
        expenses: Sequence[Expense],
        properties: Sequence[Property],
    ) -> YTDSummary:
        """Year-to-date summary, or zeros if it cannot be computed."""
        try:
            return self.ytd_summary(year, as_of, bookings, expenses, properties)
        except Exception:
            logger.exception(f"Year-to-date computation failed for {year} as of {as_of}, using zeros")
            return YTDSummary.zero()

    def build(
        self,
        bookings: Sequence[Booking],
        expenses: Sequence[Expense],
        properties: Sequence[Property],
        year: int,
        period_type: "PeriodType | str" = PeriodType.QUARTER,
        comparison_type: "ComparisonType | str" = ComparisonType.NONE,
        property_id: Optional[str] = None,
        selected_period_indices: Optional[Sequence[int]] = None,
        as_of: Optional[date] = None,
    ) -> IncomeStatement:
        """Build the income statement. See generate_income_statement."""
        period_type = PeriodType(period_type)
        comparison_type = ComparisonType(comparison_type)
        if as_of is None:
            as_of = _today()

        with LogContext(
            logger,
            "income statement generation",
            year=year,
            period_type=period_type.value,
            comparison=comparison_type.value,
            property_id=property_id,
        ):
            if property_id is not None:
                bookings = [b for b in bookings if b.property_id == property_id]
                expenses = [e for e in expenses if e.property_id == property_id]
                properties = [p for p in properties if p.id == property_id]
            else:
                bookings, expenses, properties = list(bookings), list(expenses), list(properties)

            locale = self.settings.report.label_locale
            periods = generate_periods(year, period_type, selected_period_indices, locale)
            figures = self.period_figures(periods, bookings, expenses, properties)
            operational_costs = self._operational_section(figures)

            comparison = None
            if comparison_type == ComparisonType.LAST_YEAR:
                last_year_periods = generate_periods(
                    year - 1, period_type, selected_period_indices, locale
                )
                comparison = self.comparison_summary(
                    last_year_periods, bookings, expenses, properties
                )

            statement = IncomeStatement(
                year=year,
                period_type=period_type,
                comparison_type=comparison_type,
                currency=self.currency,
                periods=periods,
                kpis=KPISeries(
                    nights_booked=[f.nights for f in figures],
                    avg_night_price=[f.avg_night_price for f in figures],
                    occupancy_rate=[f.occupancy_rate for f in figures],
                ),
                revenue=RevenueSection(
                    accommodation=[f.revenue for f in figures],
                    total=[f.revenue for f in figures],
                ),
                fixed_costs=FixedCostSection(
                    rent=[f.rent for f in figures],
                    common_areas=[f.common_areas for f in figures],
                    internet=[f.internet for f in figures],
                    total=[f.fixed_total for f in figures],
                ),
                gross_profit=[f.gross_profit for f in figures],
                operational_costs=operational_costs,
                net_income=[f.net_income for f in figures],
                ytd=self.safe_ytd_summary(year, as_of, bookings, expenses, properties),
                comparison=comparison,
                property_id=property_id,
                as_of=as_of,
            )

        logger.info(
            f"Generated {period_type.value} income statement for {year}: "
            f"{len(periods)} periods, {len(operational_costs.categories_to_include)} operational lines"
        )
        return statement

    @staticmethod
    def _operational_section(figures: list[_PeriodFigures]) -> OperationalCostSection:
        lines = {
            key: [f.operational[key] for f in figures]
            for key in (*OPERATIONAL_LINE_KEYS, "utilities_electricity", "utilities_water")
        }
        categories_to_include = [
            CategoryLine(key=key, label=line_label(key), values=lines[key])
            for key in OPERATIONAL_LINE_KEYS
            if any(value != 0 for value in lines[key])
        ]
        return OperationalCostSection(
            **lines,
            categories_to_include=categories_to_include,
            total=[f.operational_total for f in figures],
        )


def generate_income_statement(
    bookings: Sequence[Booking],
    expenses: Sequence[Expense],
    properties: Sequence[Property],
    year: int,
    period_type: "PeriodType | str" = PeriodType.QUARTER,
    comparison_type: "ComparisonType | str" = ComparisonType.NONE,
    property_id: Optional[str] = None,
    selected_period_indices: Optional[Sequence[int]] = None,
    *,
    as_of: Optional[date] = None,
    settings: Optional[Config] = None,
    currency: "Currency | str | None" = None,
) -> IncomeStatement:
    """Generate a period-bucketed income statement.

    Args:
        bookings: All bookings; cancelled ones and those without dates are
            ignored.
        expenses: All expenses; those without a date are ignored.
        properties: Properties providing the occupancy denominator.
        year: Report year.
        period_type: month, quarter or year.
        comparison_type: "none" or "lastYear".
        property_id: Restrict the report to one property.
        selected_period_indices: Zero-based indices of the periods to show.
        as_of: End of the year-to-date window; today when None.
        settings: Configuration; defaults apply when None.
        currency: Overrides the configured reporting currency.

    Returns:
        The assembled IncomeStatement.

    Raises:
        ValueError: If period_type, comparison_type or currency is unknown.
    """
    builder = IncomeStatementBuilder(
        settings=settings,
        currency=Currency.parse(currency) if currency is not None else None,
    )
    return builder.build(
        bookings,
        expenses,
        properties,
        year,
        period_type=period_type,
        comparison_type=comparison_type,
        property_id=property_id,
        selected_period_indices=selected_period_indices,
        as_of=as_of,
    )
