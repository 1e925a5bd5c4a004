"""
Monthly Financial Deriver

DESIGN DECISION: Revenue is never read from a file. The exports only
give the ordinary account balance at irregular dates, and the expenses
per category per month. Since

    ending balance = starting balance + revenue - expenses

revenue is solved for:

    revenue = (current balance - previous balance) + expenses

The derivation is a pure function of (data, year, reference date).
"Now" is passed in by the caller, so the same inputs always give the
same output.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from condo_finance.models.financials import MONTH_NAMES, MonthlyFinancial
from condo_finance.models.records import (
    MONTHS_PER_YEAR,
    AccountBalanceRecord,
    DashboardData,
)


ZERO = Decimal("0")


def months_in_range(year: int, reference_date: date) -> range:
    """
    Month indexes of `year` that are not in the future of `reference_date`.

    Past years are complete, the reference year stops at the reference
    month, later years are empty.
    """
    if year > reference_date.year:
        return range(0)
    if year == reference_date.year:
        return range(reference_date.month)
    return range(MONTHS_PER_YEAR)


def _latest(records) -> Optional[AccountBalanceRecord]:
    # max() keeps the first of equal dates, i.e. source order breaks ties
    return max(records, key=lambda r: r.date, default=None)


def latest_balance_in_month(
    balances,
    year: int,
    month_index: int,
) -> Optional[AccountBalanceRecord]:
    """Latest snapshot dated within the given month."""
    return _latest(
        r for r in balances
        if r.date.year == year and r.date.month == month_index + 1
    )


def latest_balance_before_month(
    balances,
    year: int,
    month_index: int,
) -> Optional[AccountBalanceRecord]:
    """Latest snapshot dated on or before the last day of the preceding month."""
    month_key = (year, month_index + 1)
    return _latest(r for r in balances if (r.date.year, r.date.month) < month_key)


def total_expenses_for_month(expenses, month_index: int) -> Decimal:
    return sum((row.value_for(month_index) for row in expenses), ZERO)


def total_funds_for_month(funds, year: int, month_index: int) -> Decimal:
    return sum(
        (
            f.current_value for f in funds
            if f.date.year == year and f.date.month == month_index + 1
        ),
        ZERO,
    )


def derive_month(data: DashboardData, year: int, month_index: int) -> MonthlyFinancial:
    """Build the MonthlyFinancial record of one month, without the range gate."""
    current_record = latest_balance_in_month(data.account_balances, year, month_index)
    previous_record = latest_balance_before_month(data.account_balances, year, month_index)

    current_balance = current_record.balance if current_record else ZERO
    previous_balance = previous_record.balance if previous_record else ZERO
    expenses = total_expenses_for_month(data.expenses, month_index)

    # Without a snapshot for the month there is nothing to solve revenue from
    revenue = ZERO
    if current_record is not None:
        revenue = (current_balance - previous_balance) + expenses

    total_funds = total_funds_for_month(data.funds, year, month_index)

    return MonthlyFinancial(
        month_index=month_index,
        name=MONTH_NAMES[month_index],
        revenue=revenue,
        expenses=expenses,
        balance=current_balance,
        previous_balance=previous_balance,
        total_funds=total_funds,
        net_worth=current_balance + total_funds,
        has_data=current_record is not None,
    )


def derive_monthly_financials(
    data: DashboardData,
    year: int,
    reference_date: date,
) -> tuple[MonthlyFinancial, ...]:
    """
    Derive the monthly series of `year`, January first.

    Months after `reference_date` are not emitted. Months without a
    balance snapshot are emitted with has_data=False and zero revenue
    and balance; callers filter on has_data before trusting those.
    """
    return tuple(
        derive_month(data, year, month_index)
        for month_index in months_in_range(year, reference_date)
    )


def available_years(data: DashboardData, reference_date: date) -> list[int]:
    """
    Years present in the balance and fund records, newest first.

    Falls back to the reference year when nothing is loaded.
    """
    years = {r.date.year for r in data.account_balances}
    years.update(f.date.year for f in data.funds)
    if not years:
        years.add(reference_date.year)
    return sorted(years, reverse=True)


def default_year(years: list[int], reference_date: date) -> int:
    """The reference year when it is among `years`, else the newest one."""
    if reference_date.year in years:
        return reference_date.year
    return years[0] if years else reference_date.year
