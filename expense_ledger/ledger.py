"""
Ledger Engine

This module ties the components together and defines every ledger
operation: expenses, budgets, savings goals, and the summaries built
on top of them.

DESIGN DECISION: The engine enforces the boundaries:
- Input is validated before any storage access
- Each mutation is a full read-modify-write of one collection
- Lists handed to callers are never mutated afterwards
- Every mutation (and every rejected input) is audited

Concurrency: a single writer is assumed. Nothing guards the gap
between reading a collection and writing it back.
"""

from collections.abc import Callable
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional, Union

from expense_ledger.audit import AuditLogger
from expense_ledger.catalog import DEFAULT_CATALOG, CategoryCatalog
from expense_ledger.config import LedgerSettings, Settings, get_settings
from expense_ledger.errors import NotFoundError, ValidationError
from expense_ledger.models.audit import AuditEventBuilder
from expense_ledger.models.ledger import (
    NO_SUBCATEGORY_LABEL,
    BudgetProgress,
    Contribution,
    DashboardOverview,
    Expense,
    GroupBy,
    SavingsGoal,
    Summary,
    ValidationIssue,
    combined_label,
    local_now,
    new_id,
)
from expense_ledger.queries import summaries
from expense_ledger.services.currency import CurrencyPreference
from expense_ledger.services.storage import (
    CollectionRepository,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStoreInterface,
)
from expense_ledger.validation import LedgerValidator


def _fresh_id(taken: set[str]) -> str:
    record_id = new_id()
    while record_id in taken:
        record_id = new_id()
    return record_id


def _budget_key(category: str) -> str:
    return category.strip().lower()


class LedgerEngine:
    """
    Owns the Expense, SavingsGoal and Budget collections.

    Every public coroutine reads what it needs from the store, so the
    engine holds no collection state of its own between calls.
    """

    def __init__(
        self,
        repository: CollectionRepository,
        catalog: Optional[CategoryCatalog] = None,
        settings: Optional[LedgerSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._repository = repository
        self._validator = LedgerValidator(catalog or DEFAULT_CATALOG)
        self._settings = settings or get_settings().ledger
        self._audit = audit_logger or AuditLogger()
        self._clock = clock or local_now
        self.currency = CurrencyPreference(repository, self._settings, self._audit)

    @property
    def catalog(self) -> CategoryCatalog:
        return self._validator.catalog

    @property
    def settings(self) -> LedgerSettings:
        return self._settings

    @property
    def repository(self) -> CollectionRepository:
        return self._repository

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit

    def _validated(self, operation: str, check: Callable[..., Any], *args: Any) -> Any:
        """Run a validator, auditing the rejection before re-raising it."""
        try:
            return check(*args)
        except ValidationError as e:
            self._audit.log_validation_failed(operation, e.issues)
            raise

    # =========================================================================
    # EXPENSES
    # =========================================================================

    async def list_expenses(self) -> list[Expense]:
        """All expenses in insertion order (never re-sorted by date)."""
        return await self._repository.load_expenses()

    async def recent_expenses(self, limit: Optional[int] = None) -> list[Expense]:
        """
        The last ``limit`` expenses by insertion order.

        Raises:
            ValidationError: limit is less than 1
        """
        if limit is None:
            limit = self._settings.recent_expenses_limit
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            issue = ValidationIssue(
                field="limit",
                issue_type="invalid_value",
                message="Limit must be a whole number of at least 1",
            )
            self._audit.log_validation_failed("recent_expenses", [issue])
            raise ValidationError([issue])
        expenses = await self._repository.load_expenses()
        return expenses[-limit:]

    async def add_expense(
        self,
        amount: Union[Decimal, float, int, str],
        description: str,
        main_category: str,
        sub_category: str = "",
    ) -> Expense:
        """
        Record a new expense dated now.

        Raises:
            ValidationError: non-positive amount, no description and no
                subcategory, or a category not in the catalog
            StorageError: the collection could not be read or written
        """
        fields = self._validated(
            "add_expense",
            self._validator.validate_new_expense,
            amount, description, main_category, sub_category,
        )

        expenses = await self._repository.load_expenses()
        expense = Expense(
            id=_fresh_id({e.id for e in expenses}),
            amount=fields.amount,
            description=fields.description,
            main_category=fields.main_category,
            sub_category=fields.sub_category,
            category=combined_label(fields.main_category, fields.sub_category),
            date=self._clock(),
        )
        await self._repository.save_expenses([*expenses, expense])

        self._audit.record(
            AuditEventBuilder.expense_added,
            expense_id=expense.id,
            main_category=expense.main_category,
            amount=str(expense.amount),
        )
        return expense

    async def edit_expense(
        self,
        expense_id: str,
        amount: Union[Decimal, float, int, str],
        description: str,
        main_category: str,
        sub_category: str = "",
    ) -> Expense:
        """
        Replace the editable fields of an expense, keeping its id and date.

        Raises:
            ValidationError: non-positive amount, blank description, or a
                category not in the catalog
            NotFoundError: no expense has this id
            StorageError: the collection could not be read or written
        """
        fields = self._validated(
            "edit_expense",
            self._validator.validate_expense_edit,
            amount, description, main_category, sub_category,
        )

        expenses = await self._repository.load_expenses()
        index = next(
            (i for i, e in enumerate(expenses) if e.id == expense_id), None
        )
        if index is None:
            raise NotFoundError("expense", expense_id)

        updated = expenses[index].model_copy(update={
            "amount": fields.amount,
            "description": fields.description,
            "main_category": fields.main_category,
            "sub_category": fields.sub_category,
            "category": combined_label(
                fields.main_category,
                fields.sub_category or fields.description or NO_SUBCATEGORY_LABEL,
            ),
        })
        new_expenses = list(expenses)
        new_expenses[index] = updated
        await self._repository.save_expenses(new_expenses)

        self._audit.record(
            AuditEventBuilder.expense_edited,
            expense_id=updated.id,
            main_category=updated.main_category,
            amount=str(updated.amount),
        )
        return updated

    async def delete_expense(self, expense_id: str) -> None:
        """
        Remove exactly one expense.

        Raises:
            NotFoundError: no expense has this id (including a repeat delete)
            StorageError: the collection could not be read or written
        """
        expenses = await self._repository.load_expenses()
        remaining = [e for e in expenses if e.id != expense_id]
        if len(remaining) == len(expenses):
            raise NotFoundError("expense", expense_id)

        await self._repository.save_expenses(remaining)
        self._audit.record(AuditEventBuilder.expense_deleted, expense_id)

    # =========================================================================
    # SUMMARIES
    # =========================================================================

    async def monthly_summary(
        self,
        year: int,
        month: int,
        group_by: Union[GroupBy, str] = GroupBy.MAIN_CATEGORY,
    ) -> Summary:
        expenses = await self._repository.load_expenses()
        return summaries.monthly_summary(expenses, year, month, group_by)

    async def annual_summary(self, year: int) -> Summary:
        expenses = await self._repository.load_expenses()
        return summaries.annual_summary(expenses, year)

    async def available_years(self) -> list[int]:
        expenses = await self._repository.load_expenses()
        return summaries.available_years(expenses, self._clock().date())

    # =========================================================================
    # BUDGETS
    # =========================================================================

    async def list_budgets(self) -> dict[str, Decimal]:
        """Budgets keyed by lower-cased category name."""
        return await self._repository.load_budgets()

    async def set_budget(
        self,
        category: str,
        amount: Union[Decimal, float, int, str],
    ) -> dict[str, Decimal]:
        """
        Create or overwrite the monthly budget of a category.

        Returns the full budget mapping after the change.
        """
        canonical, parsed = self._validated(
            "set_budget", self._validator.validate_budget, category, amount,
        )
        key = _budget_key(canonical)

        budgets = await self._repository.load_budgets()
        new_budgets = {**budgets, key: parsed}
        await self._repository.save_budgets(new_budgets)

        self._audit.record(AuditEventBuilder.budget_set, key, str(parsed))
        return new_budgets

    async def delete_budget(self, category: str) -> dict[str, Decimal]:
        """Remove a category's budget; a missing budget is not an error."""
        key = _budget_key(category)
        budgets = await self._repository.load_budgets()
        existed = key in budgets
        if existed:
            budgets = {k: v for k, v in budgets.items() if k != key}
            await self._repository.save_budgets(budgets)

        self._audit.record(AuditEventBuilder.budget_deleted, key, existed)
        return budgets

    def budget_progress(
        self,
        category: str,
        amount: Decimal,
        expenses: list[Expense],
        now: Optional[datetime] = None,
    ) -> BudgetProgress:
        """Progress of one budget using the configured warning threshold."""
        return summaries.budget_progress(
            category,
            amount,
            expenses,
            now or self._clock(),
            self._settings.budget_warning_percentage,
        )

    async def budget_progress_report(
        self,
        now: Optional[datetime] = None,
    ) -> list[BudgetProgress]:
        """Progress of every stored budget for the month of ``now``."""
        budgets = await self._repository.load_budgets()
        expenses = await self._repository.load_expenses()
        now = now or self._clock()
        return [
            self.budget_progress(category, amount, expenses, now)
            for category, amount in budgets.items()
        ]

    # =========================================================================
    # SAVINGS
    # =========================================================================

    async def list_goals(self) -> list[SavingsGoal]:
        return await self._repository.load_goals()

    async def add_goal(
        self,
        name: str,
        target_amount: Union[Decimal, float, int, str],
    ) -> SavingsGoal:
        """Create a savings goal starting at zero with no contributions."""
        goal_name, target = self._validated(
            "add_goal", self._validator.validate_goal, name, target_amount,
        )

        goals = await self._repository.load_goals()
        goal = SavingsGoal(
            id=_fresh_id({g.id for g in goals}),
            name=goal_name,
            target_amount=target,
            created_at=self._clock(),
        )
        await self._repository.save_goals([*goals, goal])

        self._audit.record(
            AuditEventBuilder.goal_added, goal.id, goal.name, str(target)
        )
        return goal

    async def add_contribution(
        self,
        goal_id: str,
        amount: Union[Decimal, float, int, str],
    ) -> SavingsGoal:
        """
        Append a contribution and raise the goal's current amount.

        Overfunding past the target is allowed.

        Raises:
            ValidationError: non-positive amount
            NotFoundError: no goal has this id
            StorageError: the collection could not be read or written
        """
        parsed = self._validated(
            "add_contribution", self._validator.validate_contribution, amount,
        )

        goals = await self._repository.load_goals()
        index = next((i for i, g in enumerate(goals) if g.id == goal_id), None)
        if index is None:
            raise NotFoundError("savings goal", goal_id)

        goal = goals[index]
        updated = goal.model_copy(update={
            "current_amount": goal.current_amount + parsed,
            "contributions": [
                *goal.contributions,
                Contribution(amount=parsed, date=self._clock()),
            ],
        })
        new_goals = list(goals)
        new_goals[index] = updated
        await self._repository.save_goals(new_goals)

        self._audit.record(
            AuditEventBuilder.contribution_added,
            goal_id=goal_id,
            amount=str(parsed),
            current_amount=str(updated.current_amount),
        )
        return updated

    @staticmethod
    def goal_progress(goal: SavingsGoal) -> Decimal:
        return summaries.goal_progress(goal)

    # =========================================================================
    # DASHBOARD
    # =========================================================================

    async def dashboard(self, now: Optional[datetime] = None) -> DashboardOverview:
        """Home screen figures for the month of ``now``."""
        now = now or self._clock()
        expenses = await self._repository.load_expenses()
        goals = await self._repository.load_goals()
        budgets = await self._repository.load_budgets()

        month_total = summaries.month_total(expenses, now)
        return DashboardOverview(
            month_total=month_total,
            total_saved=summaries.total_saved(goals),
            balance=-month_total,
            recent_expenses=expenses[-self._settings.recent_expenses_limit:],
            budgets=[
                self.budget_progress(category, amount, expenses, now)
                for category, amount in budgets.items()
            ],
        )


def create_ledger(
    store: Optional[KeyValueStoreInterface] = None,
    settings: Optional[Settings] = None,
    catalog: Optional[CategoryCatalog] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> LedgerEngine:
    """
    Factory function to create a ready-to-use ledger.

    Args:
        store: Key-value store to use. When omitted, one is built from
               the storage settings (JSON file by default).
        settings: Settings root; defaults to the cached application settings.
        catalog: Category catalog; defaults to the built-in taxonomy.
        clock: Callable returning "now"; defaults to local time.
    """
    settings = settings or get_settings()
    ledger_settings = settings.ledger

    if store is None:
        storage_settings = settings.storage
        if storage_settings.backend == "memory":
            store = InMemoryKeyValueStore()
        else:
            store = JsonFileKeyValueStore(storage_settings.path)

    audit_logger = AuditLogger()
    repository = CollectionRepository(
        store,
        key_prefix=ledger_settings.storage_key_prefix,
        audit_logger=audit_logger,
    )
    return LedgerEngine(
        repository,
        catalog=catalog,
        settings=ledger_settings,
        audit_logger=audit_logger,
        clock=clock,
    )
