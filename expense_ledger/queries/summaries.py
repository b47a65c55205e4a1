"""
Summary Queries

DESIGN DECISION: Every function here is a pure function of its input.
Summaries are computed from an in-memory list of expenses by a single
linear scan; nothing is cached and nothing touches storage. Calling a
function twice on the same input yields the same output.

Dates are compared as calendar months/years in device-local time.
Months are 1-indexed (1 = January).
"""

from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union

from expense_ledger.models.ledger import (
    BudgetProgress,
    BudgetStatus,
    ChartSlice,
    Expense,
    GroupBy,
    SavingsGoal,
    Summary,
    to_local,
)


ZERO = Decimal("0")
HUNDRED = Decimal("100")

MONTH_NAMES = (
    "Enero", "Febrero", "Marzo", "Abril", "Mayo", "Junio",
    "Julio", "Agosto", "Septiembre", "Octubre", "Noviembre", "Diciembre",
)

MONTHLY_PALETTE = (
    "#FF6384", "#36A2EB", "#FFCE56", "#4BC0C0", "#9966FF", "#FF9F40",
    "#FFCD56", "#C9CBCF", "#7E57C2", "#BDBDBD", "#4DB6AC", "#FF8A65",
    "#64B5F6", "#81C784", "#FFD54F", "#A1887F", "#E0E0E0", "#BA68C8",
)

ANNUAL_PALETTE = (
    "#673ab7", "#D500F9", "#FF4081", "#FFC107", "#00BCD4", "#8BC34A",
    "#FF9800", "#795548", "#9E9E9E", "#607D8B", "#F44336", "#E91E63",
    "#2196F3", "#FF5722", "#607D8B", "#7C4DFF", "#3F51B5", "#009688",
)


def _check_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")


def _in_month(moment: datetime, year: int, month: int) -> bool:
    local = to_local(moment)
    return local.year == year and local.month == month


def expenses_in_month(
    expenses: Iterable[Expense],
    year: int,
    month: int,
) -> list[Expense]:
    """Expenses dated within the given calendar month, in input order."""
    _check_month(month)
    return [e for e in expenses if _in_month(e.date, year, month)]


def expenses_in_year(expenses: Iterable[Expense], year: int) -> list[Expense]:
    return [e for e in expenses if to_local(e.date).year == year]


def _group_key(expense: Expense, group_by: GroupBy) -> str:
    if group_by == GroupBy.MAIN_CATEGORY:
        return expense.main_category
    return expense.sub_category


def _summarize(expenses: Iterable[Expense], group_by: GroupBy) -> Summary:
    """
    Sum amounts per group key.

    Expenses with an empty key are skipped entirely, so they count
    toward neither a group nor the total.
    """
    groups: dict[str, Decimal] = {}
    total = ZERO
    for expense in expenses:
        key = _group_key(expense, group_by)
        if not key:
            continue
        groups[key] = groups.get(key, ZERO) + expense.amount
        total += expense.amount
    return Summary(groups=groups, total=total)


def monthly_summary(
    expenses: Iterable[Expense],
    year: int,
    month: int,
    group_by: Union[GroupBy, str] = GroupBy.MAIN_CATEGORY,
) -> Summary:
    """
    Totals for one calendar month grouped by main or sub category.

    Example:
        monthly_summary(expenses, 2024, 3, GroupBy.MAIN_CATEGORY)
        -> Summary(groups={"Gastos Necesarios": 80}, total=80)
    """
    return _summarize(expenses_in_month(expenses, year, month), GroupBy(group_by))


def annual_summary(expenses: Iterable[Expense], year: int) -> Summary:
    """Totals for one calendar year, always grouped by main category."""
    return _summarize(expenses_in_year(expenses, year), GroupBy.MAIN_CATEGORY)


def available_years(
    expenses: Iterable[Expense],
    today: Optional[date] = None,
) -> list[int]:
    """
    Distinct years that have expenses, newest first.

    With no expenses at all, the current year is the only entry.
    """
    years = sorted({to_local(e.date).year for e in expenses}, reverse=True)
    if years:
        return years
    return [(today or date.today()).year]


def chart_data(
    groups: Mapping[str, Decimal],
    palette: Sequence[str] = MONTHLY_PALETTE,
) -> list[ChartSlice]:
    """
    Project summary groups onto pie-chart slices.

    Non-positive values are dropped; colours are assigned round-robin
    from the palette in mapping order, skipping dropped entries.
    """
    slices = []
    for label, value in groups.items():
        if value <= 0:
            continue
        index = len(slices) % len(palette)
        slices.append(ChartSlice(
            label=label,
            value=value,
            color_index=index,
            color=palette[index],
        ))
    return slices


def month_label(year: int, month: int) -> str:
    """Heading for a monthly report, e.g. ``Marzo 2024``."""
    _check_month(month)
    return f"{MONTH_NAMES[month - 1]} {year}"


def month_total(expenses: Iterable[Expense], now: datetime) -> Decimal:
    """Sum of every expense in the calendar month of ``now``."""
    local = to_local(now)
    return sum(
        (e.amount for e in expenses_in_month(expenses, local.year, local.month)),
        ZERO,
    )


# =============================================================================
# BUDGETS
# =============================================================================

def budget_status(
    percentage: Decimal,
    warning_percentage: Union[float, Decimal],
) -> BudgetStatus:
    if percentage >= HUNDRED:
        return BudgetStatus.OVER_BUDGET
    if percentage >= Decimal(str(warning_percentage)):
        return BudgetStatus.WARNING
    return BudgetStatus.NORMAL


def budget_progress(
    category: str,
    amount: Decimal,
    expenses: Iterable[Expense],
    now: datetime,
    warning_percentage: Union[float, Decimal] = 75.0,
) -> BudgetProgress:
    """
    How much of a monthly budget has been used.

    spent counts expenses whose main category matches ``category``
    case-insensitively and whose date falls in the month of ``now``.
    remaining goes negative once the budget is exceeded.
    """
    amount = Decimal(amount)
    wanted = category.strip().casefold()
    local = to_local(now)

    spent = sum(
        (
            e.amount
            for e in expenses_in_month(expenses, local.year, local.month)
            if e.main_category.strip().casefold() == wanted
        ),
        ZERO,
    )
    percentage = spent / amount * HUNDRED if amount else ZERO

    return BudgetProgress(
        category=category,
        amount=amount,
        spent=spent,
        remaining=amount - spent,
        percentage=percentage,
        status=budget_status(percentage, warning_percentage),
    )


# =============================================================================
# SAVINGS
# =============================================================================

def goal_progress(goal: SavingsGoal) -> Decimal:
    """Percentage of the target reached; unclamped, 0 for a zero target."""
    if goal.target_amount == 0:
        return ZERO
    return goal.current_amount / goal.target_amount * HUNDRED


def total_saved(goals: Iterable[SavingsGoal]) -> Decimal:
    return sum((goal.current_amount for goal in goals), ZERO)
