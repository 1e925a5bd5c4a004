"""
Main Orchestrator for Condo Finance

This module ties together parsing, derivation and view selection, and
defines the flow the presentation layer drives:
1. Load  (text or uploaded bytes → parsed collection → replaces one source)
2. Derive (year → monthly series)
3. View  (year + month selection → dashboard view model)

DESIGN DECISION: The presentation layer only ever talks to DashboardFlow.
It hands over plain text or bytes and primitive selectors, and gets plain
models back. Opening files and showing notices stay on its side.

The only hard failure in here is an upload that is not UTF-8 text.
Everything after decoding degrades gracefully. upload() wraps reading
and loading for the page, and turns every failure into an audited
error message.
"""

from datetime import date
from typing import BinaryIO, Optional
from uuid import UUID

from condo_finance.analytics import (
    available_years,
    build_dashboard_view,
    default_year,
    derive_monthly_financials,
)
from condo_finance.audit import AuditLogger, configure_logging, create_correlation_id
from condo_finance.config import DashboardSettings, get_settings
from condo_finance.models import (
    DashboardData,
    DashboardView,
    DatasetKind,
    MonthlyFinancial,
    MonthSelection,
)
from condo_finance.parsing import DEFAULT_DELIMITER, parse_dataset, split_lines


class DatasetError(Exception):
    """Base exception for dataset acquisition errors."""
    pass


class DatasetDecodeError(DatasetError):
    """Uploaded file is not UTF-8 text."""

    def __init__(self, dataset: DatasetKind, source_name: Optional[str], message: str):
        self.dataset = dataset
        self.source_name = source_name
        super().__init__(message)


class DashboardFlow:
    """
    Owns the loaded dataset and answers the dashboard's questions.

    Each load replaces exactly one source; the other two stay as they
    were. Derived series are cached per (year, reference date) and the
    cache is dropped whenever a source is replaced.
    """

    def __init__(
        self,
        data: Optional[DashboardData] = None,
        audit_logger: Optional[AuditLogger] = None,
        delimiter: str = DEFAULT_DELIMITER,
        header_keywords: Optional[dict[DatasetKind, str]] = None,
    ):
        self._data = data or DashboardData.empty()
        self._audit_logger = audit_logger or AuditLogger()
        self._delimiter = delimiter
        self._header_keywords = header_keywords or {}
        self._series_cache: dict[tuple[int, date], tuple[MonthlyFinancial, ...]] = {}

    @property
    def data(self) -> DashboardData:
        return self._data

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit_logger

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load_text(
        self,
        kind: DatasetKind,
        text: str,
        source_name: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> int:
        """
        Parse one source and replace it.

        Returns the number of records now held for that source.
        """
        correlation_id = correlation_id or create_correlation_id()

        records = parse_dataset(
            kind,
            text,
            delimiter=self._delimiter,
            header_keyword=self._header_keywords.get(kind),
        )

        if kind is DatasetKind.EXPENSES:
            self._data = self._data.replace_expenses(records)
        elif kind is DatasetKind.FUNDS:
            self._data = self._data.replace_funds(records)
        else:
            self._data = self._data.replace_balances(records)
        self._series_cache.clear()

        line_count = len(split_lines(text))
        if not records and line_count:
            self._audit_logger.log_dataset_empty(
                dataset=kind,
                line_count=line_count,
                source_name=source_name,
                correlation_id=correlation_id,
            )
        else:
            self._audit_logger.log_dataset_loaded(
                dataset=kind,
                record_count=len(records),
                source_name=source_name,
                correlation_id=correlation_id,
            )
        return len(records)

    def load_bytes(
        self,
        kind: DatasetKind,
        raw: bytes,
        source_name: Optional[str] = None,
    ) -> int:
        """
        Decode an uploaded file and load it.

        Raises:
            DatasetDecodeError: If the bytes are not UTF-8 text. The
                current collection is left untouched.
        """
        correlation_id = create_correlation_id()
        try:
            text = raw.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            self._audit_logger.log_dataset_load_failed(
                dataset=kind,
                error_message=str(e),
                source_name=source_name,
                correlation_id=correlation_id,
            )
            raise DatasetDecodeError(
                kind,
                source_name,
                f"{source_name or kind.value} is not a UTF-8 text file",
            ) from e
        return self.load_text(kind, text, source_name, correlation_id)

    def upload(
        self,
        kind: DatasetKind,
        stream: BinaryIO,
        source_name: Optional[str] = None,
    ) -> tuple[Optional[int], Optional[str]]:
        """
        Read an uploaded file object and load it.

        Never raises: any failure while reading or loading is audited and
        the current collection is kept.

        Returns:
            Tuple of (record count or None, error message or None)
        """
        try:
            raw = stream.read()
            return self.load_bytes(kind, raw, source_name), None
        except DatasetError as e:
            return None, str(e)
        except Exception as e:
            self._audit_logger.log_error(
                error_type=type(e).__name__,
                error_message=str(e),
                details={"dataset": kind.value, "source_name": source_name},
            )
            return None, str(e)

    # -------------------------------------------------------------------------
    # Derivation and views
    # -------------------------------------------------------------------------

    def available_years(self, reference_date: date) -> list[int]:
        return available_years(self._data, reference_date)

    def default_year(self, reference_date: date) -> int:
        """Year the page opens on: the current one when it has records."""
        return default_year(self.available_years(reference_date), reference_date)

    def monthly_financials(
        self,
        year: int,
        reference_date: date,
    ) -> tuple[MonthlyFinancial, ...]:
        """Monthly series of `year`, cached until the next load."""
        key = (year, reference_date)
        if key not in self._series_cache:
            monthly = derive_monthly_financials(self._data, year, reference_date)
            self._audit_logger.log_series_derived(
                year=year,
                month_count=len(monthly),
                months_with_data=sum(1 for m in monthly if m.has_data),
            )
            self._series_cache[key] = monthly
        return self._series_cache[key]

    def view(
        self,
        year: int,
        selection: MonthSelection,
        reference_date: date,
    ) -> DashboardView:
        """Everything the dashboard renders for (year, selection)."""
        monthly = self.monthly_financials(year, reference_date)
        return build_dashboard_view(monthly, self._data, year, selection)


def create_dashboard_flow(
    settings: Optional[DashboardSettings] = None,
) -> DashboardFlow:
    """
    Factory function to create the flow from settings.

    Configures logging, then preloads every source whose CSV path is
    configured. A missing or unreadable preload file is logged and
    skipped; the dashboard starts with that source empty.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.json_logs)

    flow = DashboardFlow(
        audit_logger=AuditLogger(history_size=settings.audit_history_size),
        delimiter=settings.field_delimiter,
        header_keywords={
            DatasetKind.EXPENSES: settings.expenses_header_keyword,
            DatasetKind.FUNDS: settings.funds_header_keyword,
            DatasetKind.BALANCES: settings.balances_header_keyword,
        },
    )

    for kind_value, path in settings.configured_sources.items():
        if path is None:
            continue
        kind = DatasetKind(kind_value)
        try:
            raw = path.read_bytes()
        except OSError as e:
            flow.audit_logger.log_dataset_load_failed(
                dataset=kind,
                error_message=str(e),
                source_name=str(path),
            )
            continue
        try:
            flow.load_bytes(kind, raw, source_name=path.name)
        except DatasetDecodeError:
            # Already in the audit trail
            continue

    return flow
