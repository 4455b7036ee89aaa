"""Income statement computation pipeline."""

from rental_finance.processing.categorizer import (
    ExpenseCategorizer,
    matches_category,
    matches_keyword,
)
from rental_finance.processing.income_statement import (
    IncomeStatementBuilder,
    generate_income_statement,
    reconciliation_delta,
)
from rental_finance.processing.periods import generate_periods, ytd_period

__all__ = [
    "ExpenseCategorizer",
    "matches_category",
    "matches_keyword",
    "IncomeStatementBuilder",
    "generate_income_statement",
    "reconciliation_delta",
    "generate_periods",
    "ytd_period",
]
