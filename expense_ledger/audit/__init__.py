"""Audit logging package."""

from expense_ledger.audit.logger import AuditLogger, get_audit_logger

__all__ = ["AuditLogger", "get_audit_logger"]
