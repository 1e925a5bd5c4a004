"""
Aggregation / View Selection

Turns the monthly series into what the dashboard shows for one
selection of the year:
- KPIs (revenue, expenses, balance, net worth)
- Evolution series (revenue vs expenses, account balance)
- Compositions (expenses per category, funds ranking)

DESIGN DECISION: Revenue and expenses are flows, so the accumulated
view sums them. Balance, net worth and fund positions are snapshots, so
the accumulated view takes them from the last month that has data.
Months without a balance snapshot are left out of the evolution charts
rather than plotted as zero.
"""

from decimal import Decimal

from condo_finance.models.financials import (
    ACCUMULATED_LABEL,
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
from condo_finance.models.records import DashboardData


ZERO = Decimal("0")
HUNDRED = Decimal("100")
SHARE_PRECISION = Decimal("0.01")


def _unsupported(selection) -> TypeError:
    return TypeError(f"Unsupported month selection: {selection!r}")


def valid_months(monthly) -> list[MonthlyFinancial]:
    """Months that have a balance snapshot, in series order."""
    return [m for m in monthly if m.has_data]


def selection_label(selection: MonthSelection, year: int) -> str:
    """'Acumulado 2024' or 'Mar/2024'."""
    if isinstance(selection, Accumulated):
        return f"{ACCUMULATED_LABEL} {year}"
    if isinstance(selection, SpecificMonth):
        return f"{selection.month_name}/{year}"
    raise _unsupported(selection)


def compute_kpis(monthly, year: int, selection: MonthSelection) -> KpiSummary:
    """
    Headline numbers for the selection.

    Accumulated: revenue and expenses summed over months with data,
    balance and net worth from the last of them.
    Specific month: that month's record as is, zeros when it is absent.
    """
    label = selection_label(selection, year)

    if isinstance(selection, Accumulated):
        months = valid_months(monthly)
        last_month = months[-1] if months else None
        return KpiSummary(
            label=label,
            revenue=sum((m.revenue for m in months), ZERO),
            expenses=sum((m.expenses for m in months), ZERO),
            balance=last_month.balance if last_month else ZERO,
            net_worth=last_month.net_worth if last_month else ZERO,
        )

    month = next(
        (m for m in monthly if m.month_index == selection.month_index),
        None,
    )
    if month is None:
        return KpiSummary(label=label)
    return KpiSummary(
        label=label,
        revenue=month.revenue,
        expenses=month.expenses,
        balance=month.balance,
        net_worth=month.net_worth,
    )


def revenue_expense_evolution(monthly) -> tuple[EvolutionPoint, ...]:
    return tuple(
        EvolutionPoint(name=m.name, revenue=m.revenue, expenses=m.expenses)
        for m in valid_months(monthly)
    )


def balance_evolution(monthly) -> tuple[BalancePoint, ...]:
    return tuple(
        BalancePoint(name=m.name, balance=m.balance)
        for m in valid_months(monthly)
    )


def expense_composition(
    expenses,
    monthly,
    selection: MonthSelection,
) -> tuple[CompositionSlice, ...]:
    """
    Expense total per category, largest first.

    Accumulated: only months with data are summed, so the breakdown
    matches the months the charts display. Categories whose total is
    zero or negative are left out.
    """
    if isinstance(selection, Accumulated):
        month_indexes = {m.month_index for m in valid_months(monthly)}
        totals = [
            (row.category, sum((row.value_for(i) for i in sorted(month_indexes)), ZERO))
            for row in expenses
        ]
    elif isinstance(selection, SpecificMonth):
        totals = [
            (row.category, row.value_for(selection.month_index))
            for row in expenses
        ]
    else:
        raise _unsupported(selection)

    totals = [(name, value) for name, value in totals if value > 0]
    totals.sort(key=lambda item: item[1], reverse=True)

    grand_total = sum((value for _, value in totals), ZERO)
    slices = []
    for name, value in totals:
        share = ZERO
        if grand_total > 0:
            share = (value / grand_total * HUNDRED).quantize(SHARE_PRECISION)
        slices.append(CompositionSlice(name=name, value=value, share=share))
    return tuple(slices)


def fund_composition(
    funds,
    monthly,
    year: int,
    selection: MonthSelection,
) -> tuple[FundPosition, ...]:
    """
    Fund positions of one month, largest current value first.

    Accumulated: the last month with data (funds are a snapshot, not a
    sum). Empty when no month has data.
    """
    if isinstance(selection, Accumulated):
        months = valid_months(monthly)
        if not months:
            return ()
        target_month = months[-1].month_index
    elif isinstance(selection, SpecificMonth):
        target_month = selection.month_index
    else:
        raise _unsupported(selection)

    positions = [
        FundPosition(fund_name=f.fund_name, current_value=f.current_value)
        for f in funds
        if f.date.year == year and f.date.month == target_month + 1
    ]
    positions.sort(key=lambda p: p.current_value, reverse=True)
    return tuple(positions)


def build_dashboard_view(
    monthly,
    data: DashboardData,
    year: int,
    selection: MonthSelection,
) -> DashboardView:
    """Bundle every projection the dashboard renders for (year, selection)."""
    return DashboardView(
        year=year,
        selection=selection,
        kpis=compute_kpis(monthly, year, selection),
        revenue_expense_evolution=revenue_expense_evolution(monthly),
        balance_evolution=balance_evolution(monthly),
        expense_composition=expense_composition(data.expenses, monthly, selection),
        fund_composition=fund_composition(data.funds, monthly, year, selection),
    )
