"""Tests for booking and expense metrics."""

from datetime import date
from decimal import Decimal

from rental_finance.models.booking import Booking, BookingStatus
from rental_finance.models.currency import Currency
from rental_finance.models.expense import Expense
from rental_finance.models.period import Period
from rental_finance.models.property import Property, PropertyStatus
from rental_finance.processing.metrics import (
    available_units,
    calculate_average_night_price,
    calculate_nights_booked,
    calculate_occupancy_rate,
    calculate_total_expenses,
    calculate_total_revenue,
)

JANUARY = Period(label="Jan", start=date(2024, 1, 1), end=date(2024, 1, 31))
Q1 = Period(label="Q1", start=date(2024, 1, 1), end=date(2024, 3, 31))
Q2 = Period(label="Q2", start=date(2024, 4, 1), end=date(2024, 6, 30))


def create_booking(
    check_in: date | None,
    check_out: date | None,
    price: str = "0",
    status: BookingStatus = BookingStatus.CONFIRMED,
    price_eur: str = "0",
) -> Booking:
    """Helper to create a Booking for testing."""
    return Booking(
        id="b1",
        property_id="p1",
        check_in=check_in,
        check_out=check_out,
        total_price_fcfa=Decimal(price),
        total_price_eur=Decimal(price_eur),
        status=status,
    )


class TestNightsBooked:
    """Tests for calculate_nights_booked."""

    def test_stay_inside_period(self) -> None:
        """Nights are check-out minus check-in."""
        bookings = [create_booking(date(2024, 1, 10), date(2024, 1, 15))]

        assert calculate_nights_booked(bookings, Q1) == 5

    def test_stay_straddling_periods(self) -> None:
        """A stay is split at the period boundary."""
        bookings = [create_booking(date(2024, 3, 30), date(2024, 4, 2))]

        assert calculate_nights_booked(bookings, Q1) == 2
        assert calculate_nights_booked(bookings, Q2) == 1

    def test_cancelled_and_invalid_bookings_ignored(self) -> None:
        """Cancelled, undated and inverted stays contribute nothing."""
        bookings = [
            create_booking(date(2024, 1, 10), date(2024, 1, 15), status=BookingStatus.CANCELLED),
            create_booking(None, date(2024, 1, 15)),
            create_booking(date(2024, 1, 10), None),
            create_booking(date(2024, 1, 15), date(2024, 1, 10)),
        ]

        assert calculate_nights_booked(bookings, Q1) == 0


class TestRevenue:
    """Tests for calculate_total_revenue."""

    def test_full_stay_in_period(self) -> None:
        """A stay inside the period contributes its total price."""
        bookings = [create_booking(date(2024, 1, 10), date(2024, 1, 15), "250000")]

        assert calculate_total_revenue(bookings, Q1) == Decimal("250000")

    def test_prorated_across_periods(self) -> None:
        """A straddling stay is split by nights."""
        bookings = [create_booking(date(2024, 3, 30), date(2024, 4, 2), "300000")]

        assert calculate_total_revenue(bookings, Q1) == Decimal("200000.00")
        assert calculate_total_revenue(bookings, Q2) == Decimal("100000.00")

    def test_rounded_to_cents(self) -> None:
        """Prorated revenue is rounded half-up to cents."""
        bookings = [create_booking(date(2024, 3, 31), date(2024, 4, 3), "100")]

        assert calculate_total_revenue(bookings, Q1) == Decimal("33.33")

    def test_currency_selection(self) -> None:
        """EUR revenue uses the EUR price."""
        bookings = [create_booking(date(2024, 1, 10), date(2024, 1, 15), "250000", price_eur="381")]

        assert calculate_total_revenue(bookings, Q1, Currency.EUR) == Decimal("381")

    def test_cancelled_excluded(self) -> None:
        """Cancelled bookings earn nothing."""
        bookings = [
            create_booking(date(2024, 1, 10), date(2024, 1, 15), "250000", BookingStatus.CANCELLED)
        ]

        assert calculate_total_revenue(bookings, Q1) == Decimal("0")


class TestKpis:
    """Tests for average price and occupancy."""

    def test_average_night_price(self) -> None:
        """Revenue divided by nights, zero without nights."""
        assert calculate_average_night_price(Decimal("250000"), 5) == Decimal("50000.00")
        assert calculate_average_night_price(Decimal("250000"), 0) == Decimal("0")

    def test_occupancy_one_unit(self) -> None:
        """Booked nights over period days for a single unit."""
        properties = [Property(id="p1")]

        assert calculate_occupancy_rate(31, properties, JANUARY) == Decimal("100.00")
        assert calculate_occupancy_rate(10, properties, JANUARY) == Decimal("32.26")

    def test_occupancy_counts_active_units_only(self) -> None:
        """Inactive properties offer no nights."""
        properties = [
            Property(id="p1", units=2),
            Property(id="p2", status=PropertyStatus.INACTIVE, units=3),
        ]

        assert available_units(properties) == 2
        assert calculate_occupancy_rate(31, properties, JANUARY) == Decimal("50.00")

    def test_occupancy_without_properties(self) -> None:
        """At least one unit is assumed."""
        assert available_units([]) == 1

    def test_occupancy_capped(self) -> None:
        """Overlapping bookings cannot push occupancy above 100."""
        assert calculate_occupancy_rate(62, [Property(id="p1")], JANUARY) == Decimal("100")


class TestTotalExpenses:
    """Tests for calculate_total_expenses."""

    def test_sums_every_category(self) -> None:
        """All expenses dated in the period count, whatever their category."""
        expenses = [
            Expense(id="1", date=date(2024, 1, 5), category="rent", amount_fcfa=Decimal("100")),
            Expense(id="2", date=date(2024, 1, 31), category="nonsense", amount_fcfa=Decimal("20")),
            Expense(id="3", date=date(2024, 2, 1), category="rent", amount_fcfa=Decimal("300")),
            Expense(id="4", date=None, category="rent", amount_fcfa=Decimal("400")),
        ]

        assert calculate_total_expenses(expenses, JANUARY) == Decimal("120")
