"""Decimal helpers for money amounts.

Amounts are always Decimal. XAF has no minor unit in practice, EUR is kept
to cents.
"""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional

# Currency markers accepted around amounts in exported files
CURRENCY_MARKERS = re.compile(r"(€|EUR|XAF|FCFA|CFA|F)\s*$|^\s*(€|EUR|XAF|FCFA)", re.IGNORECASE)


def safe_decimal(value: Optional[object], default: Decimal = Decimal("0")) -> Decimal:
    """Convert a raw value to Decimal, returning default when malformed.

    Args:
        value: String, int, float, Decimal or None.
        default: Value returned for None or unparseable input.

    Returns:
        Decimal value or default.
    """
    if value is None or isinstance(value, bool):
        return default

    try:
        if isinstance(value, Decimal):
            result = value
        elif isinstance(value, (int, float, str)):
            result = Decimal(str(value).strip())
        else:
            return default
    except (InvalidOperation, ValueError):
        return default

    if not result.is_finite():
        return default
    return result


def parse_amount(raw_amount: str) -> Decimal:
    """Parse an amount string from a spreadsheet export.

    Handles "150000", "150 000", "150,000.50", "1 234,50 €", "25000 FCFA".
    A single comma followed by one or two digits is a decimal separator,
    otherwise commas and spaces group thousands.

    Raises:
        ValueError: If the string cannot be parsed.
    """
    if raw_amount is None:
        raise ValueError("Empty amount")

    amount_str = CURRENCY_MARKERS.sub("", str(raw_amount)).strip()
    amount_str = amount_str.replace(" ", "").replace("\u00a0", "").replace("\u202f", "")
    if not amount_str:
        raise ValueError("Empty amount")

    if "," in amount_str and "." not in amount_str and re.search(r",\d{1,2}$", amount_str):
        amount_str = amount_str.replace(",", ".")
    else:
        amount_str = amount_str.replace(",", "")

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Cannot parse amount '{raw_amount}': {e}") from e
    if not amount.is_finite():
        raise ValueError(f"Cannot parse amount '{raw_amount}'")
    return amount


def quantize_money(amount: Decimal, places: int = 2) -> Decimal:
    """Round half-up to the given number of decimal places."""
    return amount.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def round_to_step(amount: Decimal, step: int) -> Decimal:
    """Round half-up to the nearest multiple of step (e.g. 500 XAF).

    A step below 2 only drops the fractional part.
    """
    if step < 2:
        return amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    step_dec = Decimal(step)
    return (amount / step_dec).quantize(Decimal("1"), rounding=ROUND_HALF_UP) * step_dec


def format_amount(amount: Decimal, decimal_places: int = 2, thousands_sep: str = " ") -> str:
    """Format an amount with grouped thousands, e.g. "1 250 000" or "-45.50"."""
    rounded = quantize_money(amount, decimal_places)
    text = f"{rounded:,.{decimal_places}f}"
    return text.replace(",", thousands_sep)


def sum_amounts(amounts: list[Decimal]) -> Decimal:
    """Sum Decimal amounts starting from Decimal zero."""
    total = Decimal("0")
    for amount in amounts:
        total += amount
    return total
