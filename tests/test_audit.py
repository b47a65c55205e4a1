"""Tests for the audit logger."""

import pytest

from expense_ledger.audit import AuditLogger
from expense_ledger.models.audit import AuditEventBuilder, AuditEventType


class BrokenLogger:
    """Stand-in for a structlog logger whose every call fails."""

    def _fail(self, *args, **kwargs):
        raise RuntimeError("log sink unavailable")

    info = warning = error = debug = _fail


class TestAuditLogger:
    """The audit logger records events and never raises."""

    def test_history_is_bounded(self):
        audit_logger = AuditLogger(history_size=2)
        for i in range(3):
            audit_logger.log(AuditEventBuilder.expense_deleted(str(i)))
        assert [e.entity_id for e in audit_logger.history] == ["1", "2"]

    def test_failing_sink_does_not_raise(self):
        audit_logger = AuditLogger()
        audit_logger._logger = BrokenLogger()

        audit_logger.log(AuditEventBuilder.storage_error("expenses", "write", "x"))
        audit_logger.log_validation_failed("add_goal", [])

        types = [e.event_type for e in audit_logger.history]
        assert types == [
            AuditEventType.STORAGE_ERROR,
            AuditEventType.VALIDATION_FAILED,
        ]

    def test_record_builds_and_logs(self):
        audit_logger = AuditLogger()
        audit_logger.record(AuditEventBuilder.budget_set, "ahorros", "100")
        [event] = audit_logger.history
        assert event.event_type == AuditEventType.BUDGET_SET
        assert event.details == {"category": "ahorros", "amount": "100"}

    def test_record_swallows_builder_failure(self):
        def failing_builder(**kwargs):
            raise ValueError("bad event")

        audit_logger = AuditLogger()
        audit_logger.record(failing_builder, goal_id="g1")
        assert audit_logger.history == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
