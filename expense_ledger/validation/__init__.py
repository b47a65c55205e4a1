"""Input validation package."""

from expense_ledger.validation.validator import (
    ExpenseFields,
    LedgerValidator,
    parse_amount,
)

__all__ = ["ExpenseFields", "LedgerValidator", "parse_amount"]
