"""Reporting period generation."""

import calendar
from datetime import date
from typing import Iterable, Optional

from rental_finance.models.period import Period, PeriodType

MONTH_ABBREVIATIONS: dict[str, tuple[str, ...]] = {
    "en": ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
    "fr": (
        "janv.", "févr.", "mars", "avr.", "mai", "juin",
        "juil.", "août", "sept.", "oct.", "nov.", "déc.",
    ),
}


def month_labels(locale: str = "en") -> tuple[str, ...]:
    """Month abbreviations for a locale; unknown locales use English."""
    return MONTH_ABBREVIATIONS.get(locale.split("_")[0].lower(), MONTH_ABBREVIATIONS["en"])


def _month_end(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def _all_periods(year: int, period_type: PeriodType, locale: str) -> list[Period]:
    if period_type == PeriodType.YEAR:
        return [Period(label=str(year), start=date(year, 1, 1), end=date(year, 12, 31))]

    if period_type == PeriodType.QUARTER:
        return [
            Period(
                label=f"Q{q + 1}",
                start=date(year, q * 3 + 1, 1),
                end=_month_end(year, q * 3 + 3),
            )
            for q in range(4)
        ]

    labels = month_labels(locale)
    return [
        Period(label=labels[m - 1], start=date(year, m, 1), end=_month_end(year, m))
        for m in range(1, 13)
    ]


def generate_periods(
    year: int,
    period_type: "PeriodType | str",
    selected_indices: Optional[Iterable[int]] = None,
    locale: str = "en",
) -> list[Period]:
    """Build the reporting periods of a year.

    Args:
        year: Fiscal (calendar) year.
        period_type: month, quarter or year.
        selected_indices: Zero-based indices of the periods to keep
            (0-11 for months, 0-3 for quarters). None keeps every period.
            Out-of-range indices are ignored and an empty selection gives no
            periods. Ignored for the year granularity.
        locale: Language of month labels.

    Returns:
        Periods in chronological order.

    Raises:
        ValueError: If period_type is not a known granularity.
    """
    period_type = PeriodType(period_type)
    periods = _all_periods(year, period_type, locale)

    if selected_indices is None or period_type == PeriodType.YEAR:
        return periods

    wanted = {i for i in selected_indices if 0 <= i < len(periods)}
    return [p for i, p in enumerate(periods) if i in wanted]


def ytd_period(year: int, as_of: date) -> Period:
    """Window from January 1 of year through as_of, inclusive."""
    return Period(label="YTD", start=date(year, 1, 1), end=as_of)
