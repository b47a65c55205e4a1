"""Shared fixtures: an in-memory store, a fixed clock and an engine wired to both."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

import pytest

from expense_ledger.audit import AuditLogger
from expense_ledger.config import LedgerSettings
from expense_ledger.ledger import LedgerEngine
from expense_ledger.models.ledger import Expense
from expense_ledger.services.storage import (
    CollectionRepository,
    InMemoryKeyValueStore,
)


FIXED_NOW = datetime(2024, 3, 15, 12, 0, 0)


class FlakyStore(InMemoryKeyValueStore):
    """In-memory store whose reads or writes can be switched to fail."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        super().__init__(initial)
        self.fail_reads = False
        self.reject_writes = False
        self.raise_on_write = False

    async def get(self, key):
        if self.fail_reads:
            raise OSError("device storage unavailable")
        return await super().get(key)

    async def set(self, key, value):
        if self.raise_on_write:
            raise OSError("disk full")
        if self.reject_writes:
            return False
        return await super().set(key, value)


def make_expense(
    amount,
    main_category: str,
    when: datetime,
    sub_category: str = "",
    description: str = "test",
) -> Expense:
    return Expense(
        amount=Decimal(str(amount)),
        description=description,
        main_category=main_category,
        sub_category=sub_category,
        date=when,
    )


@pytest.fixture
def store() -> FlakyStore:
    return FlakyStore()


@pytest.fixture
def audit_logger() -> AuditLogger:
    return AuditLogger()


@pytest.fixture
def repository(store, audit_logger) -> CollectionRepository:
    return CollectionRepository(store, audit_logger=audit_logger)


@pytest.fixture
def ledger(repository, audit_logger) -> LedgerEngine:
    return LedgerEngine(
        repository,
        settings=LedgerSettings(),
        audit_logger=audit_logger,
        clock=lambda: FIXED_NOW,
    )
