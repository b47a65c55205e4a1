"""
Expense Ledger - Source Package

A personal finance ledger for recording expenses, savings goals
and monthly category budgets, with the summaries built on top of them.

DESIGN PRINCIPLES:
1. Validate before touching storage
2. Fail early, fail visibly
3. Whole collections are the unit of persistence
4. Every mutation is logged
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Expense Ledger Team"

from expense_ledger.ledger import LedgerEngine, create_ledger

__all__ = ["LedgerEngine", "create_ledger"]
