"""Currency symbol choices and amount formatting."""

from decimal import Decimal
from typing import NamedTuple


class CurrencyOption(NamedTuple):
    label: str
    value: str


CURRENCY_OPTIONS: tuple[CurrencyOption, ...] = (
    CurrencyOption("Soles (S/)", "S/"),
    CurrencyOption("Dólares ($)", "$"),
    CurrencyOption("Euros (€)", "€"),
    CurrencyOption("Pesos Mexicanos (MXN$)", "MXN$"),
)

DEFAULT_CURRENCY_SYMBOL = "S/"


def format_amount(amount: Decimal, symbol: str) -> str:
    """Render an amount with two decimals, e.g. ``S/50.00``."""
    return f"{symbol}{Decimal(amount):.2f}"


def format_remaining(remaining: Decimal, symbol: str) -> str:
    """
    Label for what is left of a budget.

    A negative remainder means the budget was exceeded and is shown
    as a positive "Excedido" amount.
    """
    remaining = Decimal(remaining)
    if remaining >= 0:
        return f"Restante: {format_amount(remaining, symbol)}"
    return f"Excedido: {format_amount(abs(remaining), symbol)}"
