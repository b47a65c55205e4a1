"""
Ledger Exceptions

Every error raised by the ledger is recoverable at the call site:
the caller re-prompts the user or re-fetches state. Nothing here is fatal.
"""

from typing import Optional

from expense_ledger.models.ledger import ValidationIssue


class LedgerError(Exception):
    """Base exception for ledger operations."""
    pass


class ValidationError(LedgerError):
    """
    User input was rejected before anything touched storage.

    Carries every issue found, not just the first one.
    """

    def __init__(self, issues: list[ValidationIssue]):
        self.issues = list(issues)
        super().__init__("; ".join(issue.message for issue in self.issues))

    @property
    def fields(self) -> list[str]:
        return [issue.field for issue in self.issues]


class NotFoundError(LedgerError):
    """An operation referenced an id that is not in the collection."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} not found: {entity_id}")


class StorageError(LedgerError):
    """The key-value store could not be read or written."""

    def __init__(self, message: str, key: Optional[str] = None):
        self.key = key
        super().__init__(message)


class ConnectionError(StorageError):
    """Could not open the storage backend."""
    pass
