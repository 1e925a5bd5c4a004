"""Analytics package: monthly derivation and dashboard projections."""

from condo_finance.analytics.deriver import (
    available_years,
    default_year,
    derive_month,
    derive_monthly_financials,
    months_in_range,
)
from condo_finance.analytics.views import (
    balance_evolution,
    build_dashboard_view,
    compute_kpis,
    expense_composition,
    fund_composition,
    revenue_expense_evolution,
    selection_label,
    valid_months,
)

__all__ = [
    "available_years",
    "balance_evolution",
    "build_dashboard_view",
    "compute_kpis",
    "default_year",
    "derive_month",
    "derive_monthly_financials",
    "expense_composition",
    "fund_composition",
    "months_in_range",
    "revenue_expense_evolution",
    "selection_label",
    "valid_months",
]
