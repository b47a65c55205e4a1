"""
Audit Logger

DESIGN DECISION: Every mutation of the ledger is logged.
This provides:
1. Traceability of what changed
2. Debugging capability when a store write fails
3. A record of rejected input

The audit logger writes structured events through structlog.
It never raises: a logging failure must not turn a successful
ledger operation into an error.
"""

import logging
from collections.abc import Callable
from typing import Any, Optional

import structlog

from expense_ledger.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from expense_ledger.models.ledger import ValidationIssue


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

# Plain stdlib logger used when the structured pipeline itself fails
_fallback_logger = logging.getLogger("expense_ledger.audit.fallback")


class AuditLogger:
    """
    Central audit logging service.

    Keeps the most recent events in memory so callers (and tests)
    can inspect what happened during a session.
    """

    def __init__(self, history_size: int = 200):
        self._logger = structlog.get_logger("expense_ledger.audit")
        self._history: list[AuditEvent] = []
        self._history_size = history_size

    @property
    def history(self) -> list[AuditEvent]:
        """Events logged so far, oldest first."""
        return list(self._history)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at the level matching its severity."""
        self._history.append(event)
        del self._history[:-self._history_size]

        try:
            log_dict = event.to_log_dict()
            if event.severity == AuditSeverity.ERROR:
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception:
            # Never let logging break the ledger operation
            _fallback_logger.error(
                "audit_log_failed event_id=%s", event.event_id, exc_info=True
            )

    def record(self, build: Callable[..., AuditEvent], *args: Any, **kwargs: Any) -> None:
        """
        Build an event with one of the AuditEventBuilder factories and log it.

        A factory that fails is reported to the fallback logger and
        never reaches the caller.
        """
        try:
            event = build(*args, **kwargs)
        except Exception:
            _fallback_logger.error(
                "audit_event_build_failed builder=%s",
                getattr(build, "__name__", build),
                exc_info=True,
            )
            return
        self.log(event)

    def log_validation_failed(
        self,
        operation: str,
        issues: list[ValidationIssue],
    ) -> None:
        self.record(
            AuditEventBuilder.validation_failed,
            operation=operation,
            issues=[issue.model_dump() for issue in issues],
        )

    def log_storage_error(
        self,
        key: str,
        action: str,
        error_message: str,
    ) -> None:
        self.record(
            AuditEventBuilder.storage_error,
            key=key,
            action=action,
            error_message=error_message,
        )


_default_logger: Optional[AuditLogger] = None


def get_audit_logger() -> AuditLogger:
    """Shared logger for components created without an explicit one."""
    global _default_logger
    if _default_logger is None:
        _default_logger = AuditLogger()
    return _default_logger
