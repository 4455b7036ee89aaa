"""Income statement result models.

Every per-period list holds one value per reporting period, in period
order.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from rental_finance.models.currency import Currency
from rental_finance.models.period import ComparisonType, Period, PeriodType

# Operational lines in report order
OPERATIONAL_LINE_KEYS = (
    "utilities",
    "canal_sat",
    "cleaning",
    "laundry",
    "consumables",
    "supplies",
    "maintenance",
    "wages",
    "taxes",
    "transport",
    "mobile_data",
    "marketing",
    "furnishings",
    "security",
    "other",
)

LINE_LABELS: dict[str, str] = {
    "rent": "Loyer",
    "common_areas": "Parties communes",
    "internet": "Internet",
    "utilities": "Charges (Eau, Électricité)",
    "utilities_electricity": "Électricité (ENEO)",
    "utilities_water": "Eau (Camwater)",
    "canal_sat": "Canal+",
    "cleaning": "Nettoyage",
    "laundry": "Blanchisserie",
    "consumables": "Consommables (Savon, Huile, etc.)",
    "supplies": "Fournitures",
    "maintenance": "Maintenance",
    "wages": "Conciergerie",
    "taxes": "Taxes & Impôts",
    "transport": "Transport",
    "mobile_data": "Données mobiles",
    "marketing": "Marketing",
    "furnishings": "Mobilier",
    "security": "Sécurité",
    "other": "Autre",
}


def line_label(key: str) -> str:
    """Display label for a statement line, falling back to the key."""
    return LINE_LABELS.get(key, key)


@dataclass
class KPISeries:
    """Operating indicators per period (not accounting figures)."""

    nights_booked: list[int] = field(default_factory=list)
    avg_night_price: list[Decimal] = field(default_factory=list)
    occupancy_rate: list[Decimal] = field(default_factory=list)


@dataclass
class RevenueSection:
    accommodation: list[Decimal] = field(default_factory=list)
    total: list[Decimal] = field(default_factory=list)


@dataclass
class FixedCostSection:
    """Costs that do not depend on occupancy."""

    rent: list[Decimal] = field(default_factory=list)
    common_areas: list[Decimal] = field(default_factory=list)
    internet: list[Decimal] = field(default_factory=list)
    total: list[Decimal] = field(default_factory=list)


@dataclass
class CategoryLine:
    """An operational line shown in the breakdown.

    Attributes:
        key: Line key, one of OPERATIONAL_LINE_KEYS.
        label: Display label.
        values: One value per period.
    """

    key: str
    label: str
    values: list[Decimal]


@dataclass
class OperationalCostSection:
    """Variable costs of running the properties.

    utilities is the sum of utilities_electricity and utilities_water, the
    internet share of utilities being a fixed cost. other includes
    unclassified expenses and any reconciliation adjustment.

    Attributes:
        categories_to_include: Lines with a non-zero value in at least one
            period, in report order.
        total: Sum of all operational lines per period.
    """

    utilities: list[Decimal] = field(default_factory=list)
    utilities_electricity: list[Decimal] = field(default_factory=list)
    utilities_water: list[Decimal] = field(default_factory=list)
    canal_sat: list[Decimal] = field(default_factory=list)
    cleaning: list[Decimal] = field(default_factory=list)
    laundry: list[Decimal] = field(default_factory=list)
    consumables: list[Decimal] = field(default_factory=list)
    supplies: list[Decimal] = field(default_factory=list)
    maintenance: list[Decimal] = field(default_factory=list)
    wages: list[Decimal] = field(default_factory=list)
    taxes: list[Decimal] = field(default_factory=list)
    transport: list[Decimal] = field(default_factory=list)
    mobile_data: list[Decimal] = field(default_factory=list)
    marketing: list[Decimal] = field(default_factory=list)
    furnishings: list[Decimal] = field(default_factory=list)
    security: list[Decimal] = field(default_factory=list)
    other: list[Decimal] = field(default_factory=list)
    categories_to_include: list[CategoryLine] = field(default_factory=list)
    total: list[Decimal] = field(default_factory=list)

    def line(self, key: str) -> list[Decimal]:
        """Per-period values of an operational line by key."""
        if key not in OPERATIONAL_LINE_KEYS and key not in ("utilities_electricity", "utilities_water"):
            raise KeyError(key)
        values: list[Decimal] = getattr(self, key)
        return values


@dataclass
class ComparisonSummary:
    """Top-level totals for the same periods one year earlier."""

    periods: list[Period] = field(default_factory=list)
    revenue_total: list[Decimal] = field(default_factory=list)
    fixed_costs_total: list[Decimal] = field(default_factory=list)
    gross_profit: list[Decimal] = field(default_factory=list)
    operational_costs_total: list[Decimal] = field(default_factory=list)
    net_income: list[Decimal] = field(default_factory=list)


@dataclass
class YTDSummary:
    """Totals from January 1 of the report year through the as-of date."""

    revenue_total: Decimal = field(default_factory=lambda: Decimal("0"))
    fixed_costs_total: Decimal = field(default_factory=lambda: Decimal("0"))
    gross_profit: Decimal = field(default_factory=lambda: Decimal("0"))
    operational_costs_total: Decimal = field(default_factory=lambda: Decimal("0"))
    net_income: Decimal = field(default_factory=lambda: Decimal("0"))
    period: Optional[Period] = None

    @classmethod
    def zero(cls) -> "YTDSummary":
        """All-zero summary used when the year-to-date figures are unavailable."""
        return cls()


@dataclass
class IncomeStatement:
    """Period-bucketed income statement.

    Invariants per period: net_income equals revenue.total minus
    fixed_costs.total minus operational_costs.total, and the two cost
    totals add up to the authoritative expense total within the
    reconciliation tolerance.
    """

    year: int
    period_type: PeriodType
    comparison_type: ComparisonType
    currency: Currency
    periods: list[Period]
    kpis: KPISeries
    revenue: RevenueSection
    fixed_costs: FixedCostSection
    gross_profit: list[Decimal]
    operational_costs: OperationalCostSection
    net_income: list[Decimal]
    ytd: YTDSummary
    comparison: Optional[ComparisonSummary] = None
    property_id: Optional[str] = None
    as_of: Optional[date] = None
