"""
Data Models Package

This package contains all Pydantic models used in the Condo Finance system.
Parsed records live in `records`, derived values and view models in `financials`.
"""

from condo_finance.models.records import (
    MONTHS_PER_YEAR,
    AccountBalanceRecord,
    DashboardData,
    DatasetKind,
    ExpenseRow,
    FundRecord,
)
from condo_finance.models.financials import (
    ACCUMULATED_LABEL,
    MONTH_NAMES,
    Accumulated,
    BalancePoint,
    CompositionSlice,
    DashboardView,
    EvolutionPoint,
    FundPosition,
    KpiSummary,
    MonthlyFinancial,
    MonthSelection,
    SpecificMonth,
)

__all__ = [
    # Parsed records
    "MONTHS_PER_YEAR",
    "AccountBalanceRecord",
    "DashboardData",
    "DatasetKind",
    "ExpenseRow",
    "FundRecord",
    # Derived models
    "ACCUMULATED_LABEL",
    "MONTH_NAMES",
    "Accumulated",
    "BalancePoint",
    "CompositionSlice",
    "DashboardView",
    "EvolutionPoint",
    "FundPosition",
    "KpiSummary",
    "MonthlyFinancial",
    "MonthSelection",
    "SpecificMonth",
]
