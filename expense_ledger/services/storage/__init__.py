"""
Storage Services Package

Provides the abstract key-value store interface, its implementations,
and the repository that maps ledger collections onto store keys.
"""

from expense_ledger.services.storage.interface import (
    ConnectionError,
    KeyValueStoreInterface,
    StorageError,
)
from expense_ledger.services.storage.json_file import JsonFileKeyValueStore
from expense_ledger.services.storage.memory import InMemoryKeyValueStore
from expense_ledger.services.storage.repository import (
    BUDGETS_KEY,
    CURRENCY_KEY,
    EXPENSES_KEY,
    SAVINGS_GOALS_KEY,
    CollectionRepository,
)

__all__ = [
    # Interface
    "KeyValueStoreInterface",
    # Exceptions
    "ConnectionError",
    "StorageError",
    # Implementations
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    # Repository
    "BUDGETS_KEY",
    "CURRENCY_KEY",
    "EXPENSES_KEY",
    "SAVINGS_GOALS_KEY",
    "CollectionRepository",
]
