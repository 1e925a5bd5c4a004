"""
Derived Financial Models

Everything in this module is computed, never parsed:
- MonthlyFinancial: one record per month of the selected year
- MonthSelection: which month (or all of them) the view is about
- View models handed to the presentation layer

DESIGN DECISION: The month selection is an explicit two-variant union
discriminated on `kind`, not a magic -1 index. Code that aggregates
has to handle both variants by name.
"""

from decimal import Decimal
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


MONTH_NAMES = (
    "Jan", "Fev", "Mar", "Abr", "Mai", "Jun",
    "Jul", "Ago", "Set", "Out", "Nov", "Dez",
)

ACCUMULATED_LABEL = "Acumulado"


# =============================================================================
# MONTHLY SERIES
# =============================================================================

class MonthlyFinancial(BaseModel):
    """
    Financial picture of one month of the target year.

    CRITICAL: revenue and balance are only meaningful when has_data is
    True (a balance snapshot exists for the month). Expenses come from a
    different source and are meaningful either way.
    """
    model_config = ConfigDict(frozen=True)

    month_index: int = Field(..., ge=0, le=11)
    name: str
    revenue: Decimal = Decimal("0")
    expenses: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")
    previous_balance: Decimal = Decimal("0")
    total_funds: Decimal = Decimal("0")
    net_worth: Decimal = Decimal("0")
    has_data: bool = False


# =============================================================================
# MONTH SELECTION
# =============================================================================

class SpecificMonth(BaseModel):
    """A single month of the selected year."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["specific"] = "specific"
    month_index: int = Field(..., ge=0, le=11)

    @property
    def month_name(self) -> str:
        return MONTH_NAMES[self.month_index]


class Accumulated(BaseModel):
    """All valid months of the selected year."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["accumulated"] = "accumulated"


MonthSelection = Annotated[
    Union[SpecificMonth, Accumulated],
    Field(discriminator="kind"),
]


# =============================================================================
# VIEW MODELS
# =============================================================================

class KpiSummary(BaseModel):
    """Headline numbers for the selected period."""
    model_config = ConfigDict(frozen=True)

    label: str
    revenue: Decimal = Decimal("0")
    expenses: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")
    net_worth: Decimal = Decimal("0")


class EvolutionPoint(BaseModel):
    """Revenue against expenses for one month."""
    model_config = ConfigDict(frozen=True)

    name: str
    revenue: Decimal
    expenses: Decimal


class BalancePoint(BaseModel):
    """Ordinary account balance for one month."""
    model_config = ConfigDict(frozen=True)

    name: str
    balance: Decimal


class CompositionSlice(BaseModel):
    """One expense category's share of the period total."""
    model_config = ConfigDict(frozen=True)

    name: str
    value: Decimal
    share: Decimal = Field(
        default=Decimal("0"),
        description="Percentage of the composition total (0-100)"
    )


class FundPosition(BaseModel):
    """Current value of one fund in the displayed month."""
    model_config = ConfigDict(frozen=True)

    fund_name: str
    current_value: Decimal

    @property
    def is_negative(self) -> bool:
        return self.current_value < 0


class DashboardView(BaseModel):
    """Everything the presentation layer needs for one (year, selection)."""
    model_config = ConfigDict(frozen=True)

    year: int
    selection: MonthSelection
    kpis: KpiSummary
    revenue_expense_evolution: tuple[EvolutionPoint, ...] = ()
    balance_evolution: tuple[BalancePoint, ...] = ()
    expense_composition: tuple[CompositionSlice, ...] = ()
    fund_composition: tuple[FundPosition, ...] = ()

    @property
    def has_fund_data(self) -> bool:
        return len(self.fund_composition) > 0
