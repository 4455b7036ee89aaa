"""Booking and expense metrics over a reporting window.

All functions take a Period and never mutate their inputs. Cancelled
bookings and records with missing dates contribute nothing.
"""

from decimal import Decimal
from typing import Iterable

from rental_finance.models.booking import Booking
from rental_finance.models.currency import Currency
from rental_finance.models.expense import Expense
from rental_finance.models.period import Period
from rental_finance.models.property import Property
from rental_finance.utils.date_utils import overlap_nights
from rental_finance.utils.decimal_utils import quantize_money

OCCUPANCY_CAP = Decimal("100")


def _nights_in_period(booking: Booking, period: Period) -> int:
    if booking.is_cancelled or booking.check_in is None or booking.check_out is None:
        return 0
    if booking.check_out <= booking.check_in:
        return 0
    return overlap_nights(booking.check_in, booking.check_out, period.start, period.end)


def calculate_nights_booked(bookings: Iterable[Booking], period: Period) -> int:
    """Booked nights falling inside the period, across all bookings."""
    return sum(_nights_in_period(b, period) for b in bookings)


def calculate_total_revenue(
    bookings: Iterable[Booking],
    period: Period,
    currency: Currency = Currency.XAF,
) -> Decimal:
    """Accommodation revenue earned in the period.

    A stay straddling the period boundary contributes its total price in
    proportion to the share of its nights inside the period. Stays entirely
    inside the period contribute their full price.

    Returns:
        Revenue rounded to cents.
    """
    total = Decimal("0")
    for booking in bookings:
        nights_in_period = _nights_in_period(booking, period)
        if nights_in_period == 0:
            continue
        stay_nights = booking.nights
        price = booking.total_price(currency)
        if nights_in_period == stay_nights:
            total += price
        else:
            total += price * Decimal(nights_in_period) / Decimal(stay_nights)
    return quantize_money(total)


def calculate_average_night_price(revenue: Decimal, nights: int) -> Decimal:
    """Revenue per booked night, zero when nothing was booked."""
    if nights <= 0:
        return Decimal("0.00")
    return quantize_money(revenue / Decimal(nights))


def available_units(properties: Iterable[Property]) -> int:
    """Rentable units across active properties, at least one."""
    units = sum(p.units for p in properties if p.is_active)
    return max(units, 1)


def calculate_occupancy_rate(
    nights_booked: int,
    properties: Iterable[Property],
    period: Period,
) -> Decimal:
    """Booked nights as a percentage of available unit-nights, capped at 100."""
    available_nights = period.days * available_units(properties)
    if available_nights <= 0:
        return Decimal("0.00")
    rate = Decimal(nights_booked) * Decimal("100") / Decimal(available_nights)
    return quantize_money(min(rate, OCCUPANCY_CAP))


def calculate_total_expenses(
    expenses: Iterable[Expense],
    period: Period,
    currency: Currency = Currency.XAF,
) -> Decimal:
    """Authoritative expense total: every expense dated in the period.

    Independent of category, so it serves as the reference the categorized
    breakdown is reconciled against.
    """
    total = Decimal("0")
    for expense in expenses:
        if period.contains(expense.date):
            total += expense.amount(currency)
    return total
