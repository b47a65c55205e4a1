"""
Abstract Storage Interface

DESIGN DECISION: The ledger only needs a string-keyed text store with
two operations, get and set. Keeping the interface this small allows us to:
1. Back it with a JSON file on disk, device storage, or anything else
2. Use in-memory storage for testing
3. Keep business logic decoupled from storage implementation

Values are whole serialized collections; there are no partial updates.
"""

from abc import ABC, abstractmethod
from typing import Optional

from expense_ledger.errors import ConnectionError, StorageError


class KeyValueStoreInterface(ABC):
    """
    Abstract asynchronous key-value store.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Read the text stored under a key.

        Args:
            key: The key to read

        Returns:
            The stored text, or None if the key is absent

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> bool:
        """
        Store text under a key, replacing any previous value.

        Args:
            key: The key to write
            value: The full text to store

        Returns:
            True if written successfully, False otherwise

        Raises:
            StorageError: If the backend cannot be written
        """
        pass


__all__ = ["ConnectionError", "KeyValueStoreInterface", "StorageError"]
