"""
Currency Preference

The display currency symbol is a single stored setting. It is owned by
this object and passed explicitly to formatting calls; nothing reads it
from module-level state.
"""

from typing import Optional

from expense_ledger.audit import AuditLogger, get_audit_logger
from expense_ledger.catalog.currency import format_amount
from expense_ledger.config import LedgerSettings, get_settings
from expense_ledger.errors import ValidationError
from expense_ledger.models.audit import AuditEventBuilder
from expense_ledger.services.storage.repository import (
    CURRENCY_KEY,
    CollectionRepository,
)
from expense_ledger.validation import LedgerValidator


class CurrencyPreference:
    """
    Load / change the currency symbol.

    Until load() is awaited the symbol is the configured default.
    """

    def __init__(
        self,
        repository: CollectionRepository,
        settings: Optional[LedgerSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._repository = repository
        self._settings = settings or get_settings().ledger
        self._audit = audit_logger or get_audit_logger()
        self._validator = LedgerValidator()
        self._symbol = self._settings.default_currency_symbol

    @property
    def default(self) -> str:
        return self._settings.default_currency_symbol

    @property
    def symbol(self) -> str:
        return self._symbol

    async def load(self) -> str:
        """Read the stored symbol; falls back to the default when unset."""
        stored = await self._repository.read_text(CURRENCY_KEY)
        self._symbol = stored if stored else self.default
        return self._symbol

    async def set(self, symbol: str) -> str:
        """
        Persist a new symbol.

        The in-memory value only changes once the write succeeded.
        """
        try:
            value = self._validator.validate_currency_symbol(symbol)
        except ValidationError as e:
            self._audit.log_validation_failed("set_currency", e.issues)
            raise
        await self._repository.write_text(CURRENCY_KEY, value)
        self._symbol = value
        self._audit.record(AuditEventBuilder.currency_changed, value)
        return value

    def format(self, amount) -> str:
        return format_amount(amount, self._symbol)
