"""Expense data model."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from rental_finance.models.currency import Currency
from rental_finance.utils.date_utils import safe_parse_date
from rental_finance.utils.decimal_utils import safe_decimal


@dataclass(frozen=True)
class Expense:
    """A single expense.

    Attributes:
        id: Unique identifier for this expense.
        date: Effective date; None when missing or unparseable.
        category: Category label as recorded. Not guaranteed to be a known
            category; see models.category.classify.
        amount_eur: Amount in EUR.
        amount_fcfa: Amount in XAF.
        vendor: Vendor name, used to split utilities by provider.
        description: Free-text description.
        property_id: Property the expense belongs to, if any.
    """

    id: str
    date: Optional[date]
    category: str
    amount_eur: Decimal = field(default_factory=lambda: Decimal("0"))
    amount_fcfa: Decimal = field(default_factory=lambda: Decimal("0"))
    vendor: Optional[str] = None
    description: str = ""
    property_id: Optional[str] = None

    def __post_init__(self) -> None:
        # Normalize records built directly rather than through from_dict
        object.__setattr__(self, "date", safe_parse_date(self.date))
        object.__setattr__(self, "amount_eur", safe_decimal(self.amount_eur))
        object.__setattr__(self, "amount_fcfa", safe_decimal(self.amount_fcfa))

    def amount(self, currency: Currency) -> Decimal:
        """Amount in the given currency."""
        if currency == Currency.EUR:
            return self.amount_eur
        return self.amount_fcfa

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "Expense":
        """Create from a dictionary, tolerating malformed dates and amounts."""
        vendor = data.get("vendor")
        property_id = data.get("property_id")
        return cls(
            id=str(data.get("id", "")),
            date=safe_parse_date(data.get("date")),
            category=str(data.get("category") or ""),
            amount_eur=safe_decimal(data.get("amount_eur")),
            amount_fcfa=safe_decimal(data.get("amount_fcfa")),
            vendor=str(vendor) if vendor not in (None, "") else None,
            description=str(data.get("description") or ""),
            property_id=str(property_id) if property_id not in (None, "") else None,
        )
