"""Booking data model."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from rental_finance.models.currency import Currency
from rental_finance.utils.date_utils import nights_between, safe_parse_date
from rental_finance.utils.decimal_utils import safe_decimal


class BookingStatus(Enum):
    """Lifecycle status of a booking."""

    INQUIRY = "inquiry"
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, value: object) -> "BookingStatus":
        """Parse a status string; unknown values are treated as confirmed."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.CONFIRMED


@dataclass(frozen=True)
class Booking:
    """A guest stay at a property.

    The stay occupies the nights from check_in up to, but not including,
    check_out. Either date may be missing on records imported from
    incomplete exports; such bookings contribute nothing to a report.

    Attributes:
        id: Unique identifier for this booking.
        property_id: Property the stay is at.
        check_in: Arrival date.
        check_out: Departure date.
        total_price_eur: Price of the whole stay in EUR.
        total_price_fcfa: Price of the whole stay in XAF.
        status: Booking status. Cancelled bookings never count.
        guest_name: Guest display name.
    """

    id: str
    property_id: Optional[str]
    check_in: Optional[date]
    check_out: Optional[date]
    total_price_eur: Decimal = field(default_factory=lambda: Decimal("0"))
    total_price_fcfa: Decimal = field(default_factory=lambda: Decimal("0"))
    status: BookingStatus = BookingStatus.CONFIRMED
    guest_name: str = ""

    def __post_init__(self) -> None:
        # Normalize records built directly rather than through from_dict
        object.__setattr__(self, "check_in", safe_parse_date(self.check_in))
        object.__setattr__(self, "check_out", safe_parse_date(self.check_out))
        object.__setattr__(self, "total_price_eur", safe_decimal(self.total_price_eur))
        object.__setattr__(self, "total_price_fcfa", safe_decimal(self.total_price_fcfa))
        object.__setattr__(self, "status", BookingStatus.parse(self.status))

    @property
    def is_cancelled(self) -> bool:
        return self.status == BookingStatus.CANCELLED

    @property
    def nights(self) -> int:
        """Length of the stay in nights (0 when dates are missing)."""
        if self.check_in is None or self.check_out is None:
            return 0
        return nights_between(self.check_in, self.check_out)

    def total_price(self, currency: Currency) -> Decimal:
        """Price of the whole stay in the given currency."""
        if currency == Currency.EUR:
            return self.total_price_eur
        return self.total_price_fcfa

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "Booking":
        """Create from a dictionary, tolerating malformed dates and amounts."""
        property_id = data.get("property_id")
        return cls(
            id=str(data.get("id", "")),
            property_id=str(property_id) if property_id not in (None, "") else None,
            check_in=safe_parse_date(data.get("check_in")),
            check_out=safe_parse_date(data.get("check_out")),
            total_price_eur=safe_decimal(data.get("total_price_eur")),
            total_price_fcfa=safe_decimal(data.get("total_price_fcfa")),
            status=BookingStatus.parse(data.get("status", "confirmed")),
            guest_name=str(data.get("guest_name") or ""),
        )
