"""Tests for amount, date, sanitizing and logging helpers."""

import logging
from datetime import date, datetime
from decimal import Decimal

import pytest

from rental_finance.utils.date_utils import (
    days_in_range,
    overlap_nights,
    parse_date,
    safe_parse_date,
)
from rental_finance.utils.decimal_utils import (
    format_amount,
    parse_amount,
    round_to_step,
    safe_decimal,
)
from rental_finance.utils.logging_config import LogContext, get_logger
from rental_finance.utils.sanitize import sanitize_cell


class TestParseAmount:
    """Tests for parse_amount."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("150000", Decimal("150000")),
            ("150 000", Decimal("150000")),
            ("150,000.50", Decimal("150000.50")),
            ("1 234,50 €", Decimal("1234.50")),
            ("25000 FCFA", Decimal("25000")),
            ("-45.5", Decimal("-45.5")),
        ],
    )
    def test_formats(self, raw: str, expected: Decimal) -> None:
        """Grouped, decimal-comma and currency-marked amounts parse."""
        assert parse_amount(raw) == expected

    def test_invalid(self) -> None:
        """Text that is not an amount raises ValueError."""
        with pytest.raises(ValueError):
            parse_amount("n/a")

    def test_empty(self) -> None:
        """A bare currency marker is empty."""
        with pytest.raises(ValueError):
            parse_amount("FCFA")


class TestSafeDecimal:
    """Tests for safe_decimal."""

    def test_malformed_values_default(self) -> None:
        """None, booleans, text and non-finite values give the default."""
        assert safe_decimal(None) == Decimal("0")
        assert safe_decimal(True) == Decimal("0")
        assert safe_decimal("abc") == Decimal("0")
        assert safe_decimal("NaN") == Decimal("0")
        assert safe_decimal(float("inf"), Decimal("-1")) == Decimal("-1")

    def test_numbers(self) -> None:
        """Numbers and numeric strings convert exactly."""
        assert safe_decimal(" 12.50 ") == Decimal("12.50")
        assert safe_decimal(3) == Decimal("3")
        assert safe_decimal(0.1) == Decimal("0.1")


class TestRounding:
    """Tests for round_to_step and format_amount."""

    def test_round_to_step(self) -> None:
        """Amounts round half-up to the nearest step."""
        assert round_to_step(Decimal("1249"), 500) == Decimal("1000")
        assert round_to_step(Decimal("1250"), 500) == Decimal("1500")
        assert round_to_step(Decimal("-1250"), 500) == Decimal("-1500")
        assert round_to_step(Decimal("12.5"), 1) == Decimal("13")

    def test_format_amount(self) -> None:
        """Thousands are grouped with spaces."""
        assert format_amount(Decimal("1250000"), 0) == "1 250 000"
        assert format_amount(Decimal("1234.5")) == "1 234.50"


class TestDates:
    """Tests for date parsing and night counting."""

    @pytest.mark.parametrize(
        "raw",
        ["2024-01-10", "2024-01-10T14:00:00", "10/01/2024", "10.01.2024", "10-01-2024", "20240110"],
    )
    def test_parse_date(self, raw: str) -> None:
        """Supported formats read January 10, 2024."""
        assert parse_date(raw) == date(2024, 1, 10)

    def test_parse_date_invalid(self) -> None:
        """Impossible dates raise ValueError."""
        with pytest.raises(ValueError):
            parse_date("31/02/2024")

    def test_safe_parse_date(self) -> None:
        """Date objects pass through, bad strings give the default."""
        assert safe_parse_date(datetime(2024, 3, 1, 12, 0)) == date(2024, 3, 1)
        assert safe_parse_date(date(2024, 3, 1)) == date(2024, 3, 1)
        assert safe_parse_date("soon") is None
        assert safe_parse_date(20240301) is None

    def test_overlap_nights(self) -> None:
        """A stay's nights are split at window boundaries."""
        # Jan 30 - Feb 3: nights of Jan 30, Jan 31, Feb 1, Feb 2
        assert overlap_nights(date(2024, 1, 30), date(2024, 2, 3), date(2024, 1, 1), date(2024, 1, 31)) == 2
        assert overlap_nights(date(2024, 1, 30), date(2024, 2, 3), date(2024, 2, 1), date(2024, 2, 29)) == 2
        assert overlap_nights(date(2024, 1, 30), date(2024, 2, 3), date(2024, 3, 1), date(2024, 3, 31)) == 0

    def test_days_in_range(self) -> None:
        """Windows are inclusive."""
        assert days_in_range(date(2024, 2, 1), date(2024, 2, 29)) == 29
        assert days_in_range(date(2024, 2, 2), date(2024, 2, 1)) == 0


class TestSanitizeCell:
    """Tests for sanitize_cell."""

    def test_formula_text_quoted(self) -> None:
        """Text that would run as a formula is prefixed."""
        assert sanitize_cell("=SUM(A1:A2)") == "'=SUM(A1:A2)"
        assert sanitize_cell("@cmd") == "'@cmd"

    def test_safe_values_unchanged(self) -> None:
        """Plain text and numbers are left alone."""
        assert sanitize_cell("Loyer") == "Loyer"
        assert sanitize_cell(Decimal("-500")) == Decimal("-500")
        assert sanitize_cell(None) is None


class TestLogging:
    """Tests for logger helpers."""

    def test_get_logger_namespace(self) -> None:
        """Module loggers live under the package logger."""
        assert get_logger("tests.module").name == "rental_finance.tests.module"
        assert get_logger("rental_finance.cli").name == "rental_finance.cli"

    def test_log_context_masks_guest_data(self, caplog: pytest.LogCaptureFixture) -> None:
        """Guest names are masked in the start message."""
        logger = get_logger("tests.context")
        with caplog.at_level(logging.DEBUG, logger="rental_finance"):
            with LogContext(logger, "import", guest_name="Jane Doe", rows=3):
                pass

        assert "guest_name=***" in caplog.text
        assert "Jane Doe" not in caplog.text
        assert "Completed import" in caplog.text

    def test_log_context_reraises(self, caplog: pytest.LogCaptureFixture) -> None:
        """Errors are logged and propagate."""
        logger = get_logger("tests.context")
        with caplog.at_level(logging.ERROR, logger="rental_finance"):
            with pytest.raises(RuntimeError):
                with LogContext(logger, "export"):
                    raise RuntimeError("disk full")

        assert "Error in export" in caplog.text
