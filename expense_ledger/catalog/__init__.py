"""Static reference data: expense categories and currency choices."""

from expense_ledger.catalog.categories import (
    DEFAULT_CATALOG,
    EXPENSE_CATEGORIES,
    PRIMARY_EXPENSE_CATEGORIES,
    CategoryCatalog,
)
from expense_ledger.catalog.currency import (
    CURRENCY_OPTIONS,
    DEFAULT_CURRENCY_SYMBOL,
    CurrencyOption,
    format_amount,
    format_remaining,
)

__all__ = [
    "CURRENCY_OPTIONS",
    "DEFAULT_CATALOG",
    "DEFAULT_CURRENCY_SYMBOL",
    "EXPENSE_CATEGORIES",
    "PRIMARY_EXPENSE_CATEGORIES",
    "CategoryCatalog",
    "CurrencyOption",
    "format_amount",
    "format_remaining",
]
