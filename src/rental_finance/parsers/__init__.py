"""Loaders for booking, expense and property exports."""

from rental_finance.parsers.base import BaseParser, ParseError
from rental_finance.parsers.csv_parser import (
    BookingCSVParser,
    ExpenseCSVParser,
    PropertyCSVParser,
    load_bookings,
    load_expenses,
    load_properties,
)

__all__ = [
    "BaseParser",
    "ParseError",
    "BookingCSVParser",
    "ExpenseCSVParser",
    "PropertyCSVParser",
    "load_bookings",
    "load_expenses",
    "load_properties",
]
