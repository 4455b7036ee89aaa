"""Expense category catalog and classification."""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class ExpenseCategory(Enum):
    """Known expense categories.

    CLEANING_MATERIAL is a legacy category reported together with CLEANING.
    """

    RENT = "rent"
    UTILITIES = "utilities"
    CANAL_SAT = "canal_sat"
    COMMON_AREAS = "common_areas"
    CLEANING = "cleaning"
    LAUNDRY = "laundry"
    CONSUMABLES = "consumables"
    CLEANING_MATERIAL = "cleaning_material"
    SUPPLIES = "supplies"
    MAINTENANCE = "maintenance"
    WAGES = "wages"
    TAXES = "taxes"
    TRANSPORT = "transport"
    MOBILE_DATA = "mobile_data"
    MARKETING = "marketing"
    FURNISHINGS = "furnishings"
    SECURITY = "security"
    OTHER = "other"

    @property
    def label(self) -> str:
        """Display label used when recording expenses."""
        return CATEGORY_LABELS[self]


CATEGORY_LABELS: dict[ExpenseCategory, str] = {
    ExpenseCategory.RENT: "Loyer",
    ExpenseCategory.UTILITIES: "Charges (Eau, Électricité, Internet)",
    ExpenseCategory.CANAL_SAT: "Canal+",
    ExpenseCategory.COMMON_AREAS: "Parties communes",
    ExpenseCategory.CLEANING: "Nettoyage",
    ExpenseCategory.LAUNDRY: "Blanchisserie",
    ExpenseCategory.CONSUMABLES: "Consommables (Savon, Huile, etc.)",
    ExpenseCategory.CLEANING_MATERIAL: "Matériel de nettoyage",
    ExpenseCategory.SUPPLIES: "Fournitures",
    ExpenseCategory.MAINTENANCE: "Maintenance",
    ExpenseCategory.WAGES: "Salaires",
    ExpenseCategory.TAXES: "Taxes & Impôts",
    ExpenseCategory.TRANSPORT: "Transport",
    ExpenseCategory.MOBILE_DATA: "Données mobiles",
    ExpenseCategory.MARKETING: "Marketing",
    ExpenseCategory.FURNISHINGS: "Mobilier",
    ExpenseCategory.SECURITY: "Sécurité",
    ExpenseCategory.OTHER: "Autre",
}


@dataclass(frozen=True)
class Unclassified:
    """A category label that matches no known category.

    Attributes:
        raw: The label as recorded on the expense.
    """

    raw: str


CategoryMatch = Union[ExpenseCategory, Unclassified]


def _normalize(text: str) -> str:
    return text.strip().casefold()


_LOOKUP: dict[str, ExpenseCategory] = {}
for _category in ExpenseCategory:
    _LOOKUP[_normalize(_category.value)] = _category
    _LOOKUP.setdefault(_normalize(_category.label), _category)


def classify(raw: object) -> CategoryMatch:
    """Map a recorded category label to a known category.

    Matching is case-insensitive and ignores surrounding whitespace, and
    accepts either the category value ("cleaning_material") or its display
    label ("Matériel de nettoyage").

    Args:
        raw: Category label from an expense record. None and non-strings
            are unclassified.

    Returns:
        The matching ExpenseCategory, or Unclassified carrying the raw label.
    """
    if not isinstance(raw, str):
        return Unclassified(raw="" if raw is None else str(raw))
    return _LOOKUP.get(_normalize(raw), Unclassified(raw=raw))
