"""
Audit Logger

DESIGN DECISION: Every dataset load is logged.
This provides:
1. Traceability of which file replaced which source
2. Debugging capability when a file parses to nothing
3. A short history the user can see in the dashboard

The audit logger:
- Is synchronous; the whole pipeline runs on one thread
- Never raises into the loading flow
- Keeps a bounded in-memory history, nothing is persisted
"""

import logging
from collections import deque
from typing import Optional
from uuid import UUID, uuid4

import structlog

from condo_finance.audit.events import AuditEvent, AuditEventBuilder, AuditSeverity
from condo_finance.models.records import DatasetKind


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """
    Configure structlog on top of the standard library logger.

    Call once at startup; the shell passes values from settings.
    """
    logging.basicConfig(format="%(message)s", level=getattr(logging, level.upper()))
    logging.getLogger().setLevel(getattr(logging, level.upper()))

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )
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
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An in-memory history (for the dashboard)
    """

    def __init__(self, history_size: int = 50):
        """
        Initialize audit logger.

        Args:
            history_size: How many recent events to keep in memory.
        """
        self._history: deque[AuditEvent] = deque(maxlen=history_size)
        self._logger = structlog.get_logger("condo_finance.audit")

    def log(self, event: AuditEvent) -> None:
        """Log an audit event locally and remember it."""
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        self._history.append(event)

    @property
    def recent_events(self) -> list[AuditEvent]:
        """Remembered events, newest first."""
        return list(reversed(self._history))

    def log_dataset_loaded(
        self,
        dataset: DatasetKind,
        record_count: int,
        source_name: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a successful load."""
        self.log(AuditEventBuilder.dataset_loaded(
            dataset=dataset,
            record_count=record_count,
            source_name=source_name,
            correlation_id=correlation_id,
        ))

    def log_dataset_empty(
        self,
        dataset: DatasetKind,
        line_count: int,
        source_name: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a load that produced no records from non-blank text."""
        self.log(AuditEventBuilder.dataset_empty(
            dataset=dataset,
            line_count=line_count,
            source_name=source_name,
            correlation_id=correlation_id,
        ))

    def log_dataset_load_failed(
        self,
        dataset: DatasetKind,
        error_message: str,
        source_name: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a file that could not be read."""
        self.log(AuditEventBuilder.dataset_load_failed(
            dataset=dataset,
            error_message=error_message,
            source_name=source_name,
            correlation_id=correlation_id,
        ))

    def log_series_derived(
        self,
        year: int,
        month_count: int,
        months_with_data: int,
    ) -> None:
        """Log a fresh derivation of the monthly series."""
        self.log(AuditEventBuilder.series_derived(
            year=year,
            month_count=month_count,
            months_with_data=months_with_data,
        ))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a user action (e.g., one file upload).
    """
    return uuid4()
