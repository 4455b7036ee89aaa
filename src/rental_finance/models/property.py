"""Property data model."""

from dataclasses import dataclass
from enum import Enum


class PropertyStatus(Enum):
    """Operational status of a property."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    MAINTENANCE = "maintenance"


@dataclass(frozen=True)
class Property:
    """A rentable property.

    Attributes:
        id: Unique identifier for this property.
        name: Display name.
        status: Only active properties offer nights for rent.
        units: Number of separately rentable units.
    """

    id: str
    name: str = ""
    status: PropertyStatus = PropertyStatus.ACTIVE
    units: int = 1

    @property
    def is_active(self) -> bool:
        return self.status == PropertyStatus.ACTIVE

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "Property":
        """Create from dictionary."""
        raw_status = str(data.get("status") or "active").strip().lower()
        try:
            status = PropertyStatus(raw_status)
        except ValueError:
            status = PropertyStatus.INACTIVE

        try:
            units = int(str(data.get("units") or 1))
        except ValueError:
            units = 1

        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name") or ""),
            status=status,
            units=max(units, 0),
        )
