"""
Audit Models for Condo Finance

Every dataset load, failed or not, produces an audit event. This gives:
1. A trail of which file replaced which source, and when
2. Debugging information when a file yields nothing usable
3. A short history the dashboard can show next to the upload panel

DESIGN DECISION: Events are kept in memory only. Nothing here is persisted.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from condo_finance.models.records import DatasetKind


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Dataset loading
    DATASET_LOADED = "dataset_loaded"
    DATASET_EMPTY = "dataset_empty"
    DATASET_LOAD_FAILED = "dataset_load_failed"

    # Derivation
    SERIES_DERIVED = "series_derived"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of the audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # Which source the event is about, if any
    dataset: Optional[DatasetKind] = None

    # Ties together the events of one user action (e.g. one upload)
    correlation_id: Optional[UUID] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "dataset": self.dataset.value if self.dataset else None,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.dataset_loaded(DatasetKind.FUNDS, 42, "fundos.csv")
    """

    @staticmethod
    def dataset_loaded(
        dataset: DatasetKind,
        record_count: int,
        source_name: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATASET_LOADED,
            dataset=dataset,
            correlation_id=correlation_id,
            description=f"Loaded {record_count} {dataset.value} records",
            details={
                "record_count": record_count,
                "source_name": source_name,
            },
        )

    @staticmethod
    def dataset_empty(
        dataset: DatasetKind,
        line_count: int,
        source_name: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATASET_EMPTY,
            severity=AuditSeverity.WARNING,
            dataset=dataset,
            correlation_id=correlation_id,
            description=f"No {dataset.value} records found in {line_count} lines",
            details={
                "line_count": line_count,
                "source_name": source_name,
            },
        )

    @staticmethod
    def dataset_load_failed(
        dataset: DatasetKind,
        error_message: str,
        source_name: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATASET_LOAD_FAILED,
            severity=AuditSeverity.ERROR,
            dataset=dataset,
            correlation_id=correlation_id,
            description=f"Could not read {dataset.value} file",
            error_message=error_message,
            details={
                "source_name": source_name,
            },
        )

    @staticmethod
    def series_derived(
        year: int,
        month_count: int,
        months_with_data: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SERIES_DERIVED,
            severity=AuditSeverity.DEBUG,
            description=f"Derived {month_count} months for {year}",
            details={
                "year": year,
                "month_count": month_count,
                "months_with_data": months_with_data,
            },
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
