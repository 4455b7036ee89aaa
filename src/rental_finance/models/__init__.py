"""Data models for bookings, expenses, properties and income statements."""

from rental_finance.models.booking import Booking, BookingStatus
from rental_finance.models.category import ExpenseCategory, Unclassified, classify
from rental_finance.models.currency import Currency
from rental_finance.models.expense import Expense
from rental_finance.models.period import ComparisonType, Period, PeriodType
from rental_finance.models.property import Property, PropertyStatus
from rental_finance.models.report import (
    CategoryLine,
    ComparisonSummary,
    FixedCostSection,
    IncomeStatement,
    KPISeries,
    OperationalCostSection,
    RevenueSection,
    YTDSummary,
)

__all__ = [
    "Booking",
    "BookingStatus",
    "Expense",
    "Property",
    "PropertyStatus",
    "Currency",
    "ExpenseCategory",
    "Unclassified",
    "classify",
    "Period",
    "PeriodType",
    "ComparisonType",
    "IncomeStatement",
    "KPISeries",
    "RevenueSection",
    "FixedCostSection",
    "OperationalCostSection",
    "CategoryLine",
    "ComparisonSummary",
    "YTDSummary",
]
