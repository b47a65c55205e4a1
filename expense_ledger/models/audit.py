"""
Audit Models for Expense Ledger

Every mutation of the ledger is recorded as an audit event.
This provides:
1. Traceability of what changed and when
2. Debugging information when a store write fails
3. A history the user can be shown

DESIGN DECISION: Audit events are append-only. We never modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator


DESCRIPTION_MAX_LENGTH = 500


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Expenses
    EXPENSE_ADDED = "expense_added"
    EXPENSE_EDITED = "expense_edited"
    EXPENSE_DELETED = "expense_deleted"

    # Budgets
    BUDGET_SET = "budget_set"
    BUDGET_DELETED = "budget_deleted"

    # Savings
    GOAL_ADDED = "goal_added"
    CONTRIBUTION_ADDED = "contribution_added"

    # Settings
    CURRENCY_CHANGED = "currency_changed"

    # Failures
    VALIDATION_FAILED = "validation_failed"
    STORAGE_ERROR = "storage_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every mutation (and every failure to persist one) creates one of these.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # What entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'budget', 'goal')"
    )
    entity_id: Optional[str] = None

    description: str = Field(..., max_length=DESCRIPTION_MAX_LENGTH)
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    @field_validator('description', mode='before')
    @classmethod
    def clip_description(cls, v: Any) -> Any:
        """Descriptions are a one-line summary; full values belong in details."""
        if isinstance(v, str) and len(v) > DESCRIPTION_MAX_LENGTH:
            return v[:DESCRIPTION_MAX_LENGTH - 3] + "..."
        return v

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_added(expense_id, "Ahorros", "40")
        event = AuditEventBuilder.storage_error("expenses", "write", "disk full")
    """

    @staticmethod
    def expense_added(
        expense_id: str,
        main_category: str,
        amount: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=expense_id,
            description=f"Expense added: {main_category} - {amount}",
            details={
                "main_category": main_category,
                "amount": amount,
            },
        )

    @staticmethod
    def expense_edited(
        expense_id: str,
        main_category: str,
        amount: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_EDITED,
            entity_type="expense",
            entity_id=expense_id,
            description=f"Expense edited: {main_category} - {amount}",
            details={
                "main_category": main_category,
                "amount": amount,
            },
        )

    @staticmethod
    def expense_deleted(expense_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            entity_type="expense",
            entity_id=expense_id,
            description="Expense deleted",
        )

    @staticmethod
    def budget_set(category: str, amount: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_SET,
            entity_type="budget",
            entity_id=category,
            description=f"Budget set to {amount}",
            details={
                "category": category,
                "amount": amount,
            },
        )

    @staticmethod
    def budget_deleted(category: str, existed: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_DELETED,
            entity_type="budget",
            entity_id=category,
            description="Budget deleted",
            details={
                "category": category,
                "existed": existed,
            },
        )

    @staticmethod
    def goal_added(goal_id: str, name: str, target_amount: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.GOAL_ADDED,
            entity_type="goal",
            entity_id=goal_id,
            description="Savings goal added",
            details={
                "name": name,
                "target_amount": target_amount,
            },
        )

    @staticmethod
    def contribution_added(
        goal_id: str,
        amount: str,
        current_amount: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CONTRIBUTION_ADDED,
            entity_type="goal",
            entity_id=goal_id,
            description=f"Contribution of {amount} added",
            details={
                "amount": amount,
                "current_amount": current_amount,
            },
        )

    @staticmethod
    def currency_changed(symbol: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CURRENCY_CHANGED,
            entity_type="setting",
            entity_id="currencySymbol",
            description="Currency symbol changed",
            details={"symbol": symbol},
        )

    @staticmethod
    def validation_failed(
        operation: str,
        issues: list[dict],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            description=f"{operation} rejected with {len(issues)} issues",
            details={
                "operation": operation,
                "issues": issues,
            },
        )

    @staticmethod
    def storage_error(
        key: str,
        action: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            entity_type="store_key",
            entity_id=key,
            description=f"Storage {action} failed",
            error_message=error_message,
            details={"action": action},
        )
