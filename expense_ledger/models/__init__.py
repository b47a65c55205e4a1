"""
Data Models Package

This package contains all Pydantic models used in the Expense Ledger.
All data flowing through the system must conform to these schemas.
"""

from expense_ledger.models.ledger import (
    BudgetProgress,
    BudgetStatus,
    ChartSlice,
    Contribution,
    DashboardOverview,
    Expense,
    GroupBy,
    SavingsGoal,
    Summary,
    ValidationIssue,
)
from expense_ledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "BudgetProgress",
    "BudgetStatus",
    "ChartSlice",
    "Contribution",
    "DashboardOverview",
    "Expense",
    "GroupBy",
    "SavingsGoal",
    "Summary",
    "ValidationIssue",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
