"""Reporting period model."""

from dataclasses import dataclass
from datetime import date
from enum import Enum

from rental_finance.utils.date_utils import days_in_range, is_date_in_range


class PeriodType(Enum):
    """Granularity of the reporting periods."""

    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


class ComparisonType(Enum):
    """Which comparison columns accompany the statement."""

    NONE = "none"
    LAST_YEAR = "lastYear"


@dataclass(frozen=True)
class Period:
    """A reporting period covering [start, end], both dates inclusive.

    Attributes:
        label: Short display label ("Jan", "Q2", "2024").
        start: First day of the period.
        end: Last day of the period.
    """

    label: str
    start: date
    end: date

    @property
    def days(self) -> int:
        return days_in_range(self.start, self.end)

    def contains(self, d: date | None) -> bool:
        """True if d falls in the period. Missing dates never match."""
        if d is None:
            return False
        return is_date_in_range(d, self.start, self.end)
