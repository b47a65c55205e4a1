"""
Collection Repository

Maps the ledger's collections onto store keys. Every collection is
read and written whole: callers read the full list, change it in
memory and hand the full list back.

Store layout:
    expenses        JSON array of Expense
    savingsGoals    JSON array of SavingsGoal
    budgets         JSON object, lower-cased category -> amount
    currencySymbol  raw symbol text
"""

from decimal import Decimal
from typing import Optional

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from expense_ledger.audit import AuditLogger, get_audit_logger
from expense_ledger.models.ledger import Expense, SavingsGoal
from expense_ledger.services.storage.interface import (
    KeyValueStoreInterface,
    StorageError,
)


EXPENSES_KEY = "expenses"
SAVINGS_GOALS_KEY = "savingsGoals"
BUDGETS_KEY = "budgets"
CURRENCY_KEY = "currencySymbol"

_EXPENSES = TypeAdapter(list[Expense])
_GOALS = TypeAdapter(list[SavingsGoal])
_BUDGETS = TypeAdapter(dict[str, Decimal])


class CollectionRepository:
    """
    Typed read/write access to the ledger's store keys.

    Raises StorageError for anything that goes wrong at the storage
    boundary: the store raising, a write reported as failed, or a
    stored value that cannot be decoded.
    """

    def __init__(
        self,
        store: KeyValueStoreInterface,
        key_prefix: str = "",
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._prefix = key_prefix
        self._audit = audit_logger or get_audit_logger()

    @property
    def store(self) -> KeyValueStoreInterface:
        return self._store

    def key(self, name: str) -> str:
        """Full store key for a collection name."""
        return f"{self._prefix}{name}"

    async def read_text(self, name: str) -> Optional[str]:
        key = self.key(name)
        try:
            return await self._store.get(key)
        except StorageError as e:
            self._audit.log_storage_error(key, "read", str(e))
            raise
        except Exception as e:
            self._audit.log_storage_error(key, "read", str(e))
            raise StorageError(f"Failed to read {key}: {e}", key=key) from e

    async def write_text(self, name: str, value: str) -> None:
        key = self.key(name)
        try:
            ok = await self._store.set(key, value)
        except StorageError as e:
            self._audit.log_storage_error(key, "write", str(e))
            raise
        except Exception as e:
            self._audit.log_storage_error(key, "write", str(e))
            raise StorageError(f"Failed to write {key}: {e}", key=key) from e

        if not ok:
            self._audit.log_storage_error(key, "write", "store reported failure")
            raise StorageError(f"Store rejected write to {key}", key=key)

    async def _read_decoded(self, name: str, adapter: TypeAdapter, default):
        text = await self.read_text(name)
        if text is None:
            return default
        try:
            return adapter.validate_json(text)
        except PydanticValidationError as e:
            key = self.key(name)
            self._audit.log_storage_error(key, "decode", str(e))
            raise StorageError(f"Stored value under {key} is malformed", key=key) from e

    # -------------------------------------------------------------------------
    # Expenses
    # -------------------------------------------------------------------------

    async def load_expenses(self) -> list[Expense]:
        return await self._read_decoded(EXPENSES_KEY, _EXPENSES, [])

    async def save_expenses(self, expenses: list[Expense]) -> None:
        payload = _EXPENSES.dump_json(expenses, by_alias=True).decode("utf-8")
        await self.write_text(EXPENSES_KEY, payload)

    # -------------------------------------------------------------------------
    # Savings goals
    # -------------------------------------------------------------------------

    async def load_goals(self) -> list[SavingsGoal]:
        return await self._read_decoded(SAVINGS_GOALS_KEY, _GOALS, [])

    async def save_goals(self, goals: list[SavingsGoal]) -> None:
        payload = _GOALS.dump_json(goals, by_alias=True).decode("utf-8")
        await self.write_text(SAVINGS_GOALS_KEY, payload)

    # -------------------------------------------------------------------------
    # Budgets
    # -------------------------------------------------------------------------

    async def load_budgets(self) -> dict[str, Decimal]:
        return await self._read_decoded(BUDGETS_KEY, _BUDGETS, {})

    async def save_budgets(self, budgets: dict[str, Decimal]) -> None:
        payload = _BUDGETS.dump_json(budgets).decode("utf-8")
        await self.write_text(BUDGETS_KEY, payload)
