"""Summary and progress queries over ledger collections."""

from expense_ledger.queries.summaries import (
    ANNUAL_PALETTE,
    MONTH_NAMES,
    MONTHLY_PALETTE,
    annual_summary,
    available_years,
    budget_progress,
    budget_status,
    chart_data,
    expenses_in_month,
    expenses_in_year,
    goal_progress,
    month_label,
    month_total,
    monthly_summary,
    total_saved,
)

__all__ = [
    "ANNUAL_PALETTE",
    "MONTH_NAMES",
    "MONTHLY_PALETTE",
    "annual_summary",
    "available_years",
    "budget_progress",
    "budget_status",
    "chart_data",
    "expenses_in_month",
    "expenses_in_year",
    "goal_progress",
    "month_label",
    "month_total",
    "monthly_summary",
    "total_saved",
]
