"""Expense categorization for income statement lines."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

from rental_finance.config import UtilityKeywords
from rental_finance.models.category import ExpenseCategory, Unclassified, classify
from rental_finance.models.currency import Currency
from rental_finance.models.expense import Expense
from rental_finance.models.period import Period
from rental_finance.utils.logging_config import get_logger

logger = get_logger(__name__)


def matches_keyword(expense: Expense, keyword: str) -> bool:
    """Case-insensitive substring match on the vendor or the description."""
    needle = keyword.casefold()
    vendor = (expense.vendor or "").casefold()
    description = (expense.description or "").casefold()
    return needle in vendor or needle in description


def matches_category(
    expense: Expense,
    category: ExpenseCategory,
    keyword: Optional[str] = None,
) -> bool:
    """Check an expense belongs to a category and, optionally, mentions a keyword.

    Args:
        expense: Expense to test.
        category: Required category.
        keyword: Extra filter on vendor or description, e.g. "ENEO" to pick
            electricity bills out of utilities.
    """
    if classify(expense.category) != category:
        return False
    return keyword is None or matches_keyword(expense, keyword)


@dataclass(frozen=True)
class UtilitySplit:
    """Utilities of one period split by provider keyword.

    Bills matching no keyword stay out of every line and are picked up by
    reconciliation.
    """

    internet: Decimal
    electricity: Decimal
    water: Decimal


class ExpenseCategorizer:
    """Sums expenses per category for a reporting window.

    Unclassified expenses are accumulated into OTHER, never dropped.
    """

    def __init__(
        self,
        currency: Currency = Currency.XAF,
        utility_keywords: Optional[UtilityKeywords] = None,
    ):
        """Initialize categorizer.

        Args:
            currency: Currency amounts are summed in.
            utility_keywords: Keywords splitting the utilities category.
        """
        self.currency = currency
        self.utility_keywords = utility_keywords or UtilityKeywords()

    def category_totals(
        self,
        expenses: Iterable[Expense],
        period: Period,
    ) -> dict[ExpenseCategory, Decimal]:
        """Total per category of expenses dated in the period.

        Every category is present in the result, zero when unused.
        """
        totals = {category: Decimal("0") for category in ExpenseCategory}
        unknown: dict[str, int] = {}

        for expense in expenses:
            if not period.contains(expense.date):
                continue
            match = classify(expense.category)
            if isinstance(match, Unclassified):
                unknown[match.raw] = unknown.get(match.raw, 0) + 1
                match = ExpenseCategory.OTHER
            totals[match] += expense.amount(self.currency)

        if unknown:
            summary = ", ".join(f"'{raw}' x{count}" for raw, count in sorted(unknown.items()))
            logger.debug(f"{period.label}: unknown categories counted as other: {summary}")

        return totals

    def category_total(
        self,
        expenses: Iterable[Expense],
        period: Period,
        category: ExpenseCategory,
        keyword: Optional[str] = None,
    ) -> Decimal:
        """Total of one category in the period, optionally keyword-filtered."""
        total = Decimal("0")
        for expense in expenses:
            if period.contains(expense.date) and matches_category(expense, category, keyword):
                total += expense.amount(self.currency)
        return total

    def utility_split(self, expenses: Iterable[Expense], period: Period) -> UtilitySplit:
        """Split the period's utilities into internet, electricity and water."""
        expenses = list(expenses)
        keywords = self.utility_keywords
        return UtilitySplit(
            internet=self.category_total(expenses, period, ExpenseCategory.UTILITIES, keywords.internet),
            electricity=self.category_total(
                expenses, period, ExpenseCategory.UTILITIES, keywords.electricity
            ),
            water=self.category_total(expenses, period, ExpenseCategory.UTILITIES, keywords.water),
        )
