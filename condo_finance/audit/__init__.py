"""Audit logging package."""

from condo_finance.audit.events import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from condo_finance.audit.logger import (
    AuditLogger,
    configure_logging,
    create_correlation_id,
)

__all__ = [
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditLogger",
    "AuditSeverity",
    "configure_logging",
    "create_correlation_id",
]
