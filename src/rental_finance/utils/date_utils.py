"""Date parsing and night-counting utilities."""

import re
from datetime import date, datetime, timedelta

# Slash-separated dates are read day first (DD/MM/YYYY), the convention of
# the booking exports. Use ISO format to avoid any ambiguity.
DATE_PATTERNS = [
    (r"^(\d{4})-(\d{1,2})-(\d{1,2})$", "%Y-%m-%d"),
    (r"^(\d{4})-(\d{1,2})-(\d{1,2})[T ]\d{1,2}:\d{2}(:\d{2})?$", None),
    (r"^(\d{1,2})/(\d{1,2})/(\d{4})$", "%d/%m/%Y"),
    (r"^(\d{1,2})/(\d{1,2})/(\d{2})$", "%d/%m/%y"),
    (r"^(\d{1,2})\.(\d{1,2})\.(\d{4})$", "%d.%m.%Y"),
    (r"^(\d{1,2})-(\d{1,2})-(\d{4})$", "%d-%m-%Y"),
    (r"^(\d{8})$", "%Y%m%d"),
]

COMPILED_PATTERNS = [(re.compile(pattern), fmt) for pattern, fmt in DATE_PATTERNS]


def parse_date(raw_date: str) -> date:
    """Parse a date string.

    Handles ISO dates and timestamps (2024-01-15, 2024-01-15T14:00:00),
    day-first dates (15/01/2024, 15.01.2024, 15-01-2024) and compact
    dates (20240115).

    Raises:
        ValueError: If the date cannot be parsed.
    """
    if not raw_date:
        raise ValueError("Empty date string")

    date_str = raw_date.strip()
    if not date_str:
        raise ValueError("Empty date string after stripping whitespace")

    for pattern, fmt in COMPILED_PATTERNS:
        if not pattern.match(date_str):
            continue
        try:
            if fmt is None:
                return datetime.fromisoformat(date_str.replace(" ", "T")).date()
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue

    raise ValueError(f"Cannot parse date: '{raw_date}'")


def safe_parse_date(raw_date: object, default: date | None = None) -> date | None:
    """Parse a date-like value, returning default on failure.

    Accepts date and datetime instances as well as strings.
    """
    if raw_date is None or raw_date == "":
        return default
    if isinstance(raw_date, datetime):
        return raw_date.date()
    if isinstance(raw_date, date):
        return raw_date
    if not isinstance(raw_date, str):
        return default

    try:
        return parse_date(raw_date)
    except ValueError:
        return default


def is_date_in_range(
    d: date,
    start_date: date | None = None,
    end_date: date | None = None,
) -> bool:
    """Check if a date is within an inclusive range.

    Args:
        d: Date to check.
        start_date: Start of range (inclusive). None means no lower bound.
        end_date: End of range (inclusive). None means no upper bound.
    """
    if start_date is not None and d < start_date:
        return False
    if end_date is not None and d > end_date:
        return False
    return True


def nights_between(check_in: date, check_out: date) -> int:
    """Number of nights of a stay; zero for inverted ranges."""
    return max(0, (check_out - check_in).days)


def overlap_nights(check_in: date, check_out: date, start: date, end: date) -> int:
    """Nights of a stay falling inside the inclusive window [start, end].

    The night of a date belongs to that date, so a stay occupies the nights
    check_in .. check_out - 1.
    """
    first = max(check_in, start)
    last_exclusive = min(check_out, end + timedelta(days=1))
    return nights_between(first, last_exclusive)


def days_in_range(start: date, end: date) -> int:
    """Number of days in the inclusive window [start, end]."""
    return max(0, (end - start).days + 1)
