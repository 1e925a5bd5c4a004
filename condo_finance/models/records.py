"""
Parsed Source Records for Condo Finance

These models hold what the three CSV exports contain, after the
locale-formatted text has been converted to exact values.
They are designed to:
1. Be immutable once parsed (frozen models, tuple collections)
2. Normalize shape at construction time (twelve expense months)
3. Keep the three sources independent inside one aggregate

DESIGN DECISION: Amounts are Decimal, never float. Revenue is derived
by adding and subtracting these amounts, and Decimal keeps that exact.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


MONTHS_PER_YEAR = 12


class DatasetKind(str, Enum):
    """
    The three independently refreshable data sources.

    The value doubles as the key used in settings and log events.
    """
    EXPENSES = "expenses"
    FUNDS = "funds"
    BALANCES = "balances"

    @property
    def default_header_keyword(self) -> str:
        """Column-0 keyword that marks the header line of this source."""
        if self is DatasetKind.EXPENSES:
            return "categoria"
        return "data"


class ExpenseRow(BaseModel):
    """
    One expense category with its amount for each calendar month.

    values[0] is January, values[11] is December. Missing trailing
    months are zero-filled; columns past December are dropped.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    category: str = Field(
        ...,
        min_length=1,
        description="Expense category name"
    )
    values: tuple[Decimal, ...] = Field(
        default=(),
        validate_default=True,
        description="Amount per month, index = month 0-11"
    )

    @field_validator('values')
    @classmethod
    def normalize_to_twelve_months(cls, v: tuple[Decimal, ...]) -> tuple[Decimal, ...]:
        """Pad with zeros, or truncate, to exactly twelve months."""
        months = tuple(v[:MONTHS_PER_YEAR])
        padding = (Decimal("0"),) * (MONTHS_PER_YEAR - len(months))
        return months + padding

    def value_for(self, month_index: int) -> Decimal:
        """Amount recorded for a month index (0-11)."""
        return self.values[month_index]


class FundRecord(BaseModel):
    """
    A fund position on a given date.

    Many records may share a date or a fund name: each fund is a time series.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    date: dt.date
    fund_name: str
    # Ledger balance of the fund itself. Parsed and kept, but no
    # derivation reads it; current_value is what counts.
    balance: Decimal = Decimal("0")
    current_value: Decimal = Decimal("0")


class AccountBalanceRecord(BaseModel):
    """Point-in-time snapshot of the ordinary account."""
    model_config = ConfigDict(frozen=True)

    date: dt.date
    balance: Decimal = Decimal("0")


class DashboardData(BaseModel):
    """
    The currently loaded dataset.

    Three named collections, each replaced as a whole by a new upload.
    Replacing one never touches the other two, and the sources are not
    cross-checked against each other.
    """
    model_config = ConfigDict(frozen=True)

    expenses: tuple[ExpenseRow, ...] = ()
    funds: tuple[FundRecord, ...] = ()
    account_balances: tuple[AccountBalanceRecord, ...] = ()

    @classmethod
    def empty(cls) -> "DashboardData":
        return cls()

    def replace_expenses(self, expenses) -> "DashboardData":
        return self.model_copy(update={"expenses": tuple(expenses)})

    def replace_funds(self, funds) -> "DashboardData":
        return self.model_copy(update={"funds": tuple(funds)})

    def replace_balances(self, balances) -> "DashboardData":
        return self.model_copy(update={"account_balances": tuple(balances)})

    def record_count(self, kind: DatasetKind) -> int:
        """Number of records currently held for a source."""
        if kind is DatasetKind.EXPENSES:
            return len(self.expenses)
        if kind is DatasetKind.FUNDS:
            return len(self.funds)
        return len(self.account_balances)
