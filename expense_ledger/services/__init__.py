"""Services package."""

from expense_ledger.services.currency import CurrencyPreference
from expense_ledger.services.storage import (
    CollectionRepository,
    ConnectionError,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStoreInterface,
    StorageError,
)

__all__ = [
    # Settings services
    "CurrencyPreference",
    # Storage services
    "CollectionRepository",
    "ConnectionError",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStoreInterface",
    "StorageError",
]
