"""
Tests for aggregation and view selection.

Uses the 2024 series of the shared fixture: months with data are
Jan, Feb and Apr; March and May have no balance snapshot.
"""

import pytest
from datetime import date
from decimal import Decimal

from condo_finance.analytics import (
    balance_evolution,
    build_dashboard_view,
    compute_kpis,
    derive_monthly_financials,
    expense_composition,
    fund_composition,
    revenue_expense_evolution,
)
from condo_finance.models import (
    Accumulated,
    AccountBalanceRecord,
    DashboardData,
    ExpenseRow,
    FundRecord,
    SpecificMonth,
)


@pytest.fixture
def monthly(dashboard_data, reference_date):
    return derive_monthly_financials(dashboard_data, 2024, reference_date)


class TestKpis:
    """Tests for compute_kpis."""

    def test_accumulated(self, monthly):
        """Test flows summed, snapshots taken from the last month with data."""
        kpis = compute_kpis(monthly, 2024, Accumulated())
        assert kpis.label == "Acumulado 2024"
        assert kpis.revenue == Decimal("1320")
        assert kpis.expenses == Decimal("620")
        assert kpis.balance == Decimal("1600")
        assert kpis.net_worth == Decimal("6400")

    def test_specific_month(self, monthly):
        kpis = compute_kpis(monthly, 2024, SpecificMonth(month_index=1))
        assert kpis.label == "Fev/2024"
        assert kpis.revenue == Decimal("800")
        assert kpis.expenses == Decimal("300")
        assert kpis.balance == Decimal("1500")

    def test_specific_month_without_snapshot(self, monthly):
        """Test that March reads its record verbatim."""
        kpis = compute_kpis(monthly, 2024, SpecificMonth(month_index=2))
        assert kpis.revenue == Decimal("0")
        assert kpis.expenses == Decimal("50")
        assert kpis.balance == Decimal("0")

    def test_specific_month_not_derived(self, monthly):
        """Test that a month after the reference date gives zeros."""
        kpis = compute_kpis(monthly, 2024, SpecificMonth(month_index=8))
        assert kpis.label == "Set/2024"
        assert kpis.revenue == kpis.expenses == kpis.balance == kpis.net_worth == Decimal("0")

    def test_accumulated_without_data(self):
        kpis = compute_kpis((), 2024, Accumulated())
        assert kpis.balance == Decimal("0")
        assert kpis.revenue == Decimal("0")

    def test_unsupported_selection(self, monthly):
        with pytest.raises(TypeError):
            compute_kpis(monthly, 2024, "all")


class TestEvolution:
    """Tests for the evolution series."""

    def test_months_without_data_omitted(self, monthly):
        """Test that March and May are left out rather than drawn as zero."""
        assert [p.name for p in balance_evolution(monthly)] == ["Jan", "Fev", "Abr"]
        assert [p.name for p in revenue_expense_evolution(monthly)] == ["Jan", "Fev", "Abr"]

    def test_values(self, monthly):
        points = revenue_expense_evolution(monthly)
        assert points[1].revenue == Decimal("800")
        assert points[1].expenses == Decimal("300")
        assert balance_evolution(monthly)[-1].balance == Decimal("1600")

    def test_raw_expenses_still_available(self, monthly):
        """Test that March expenses survive in the series despite missing data."""
        assert sum(m.expenses for m in monthly) == Decimal("670")


class TestExpenseComposition:
    """Tests for expense_composition."""

    def test_accumulated_sums_months_with_data(self, dashboard_data, monthly):
        """Test Água = 200 + 300 + 100 (March excluded), Limpeza = 20."""
        slices = expense_composition(dashboard_data.expenses, monthly, Accumulated())
        assert [(s.name, s.value) for s in slices] == [
            ("Água", Decimal("600")),
            ("Limpeza", Decimal("20")),
        ]
        assert slices[0].share == Decimal("96.77")
        assert slices[1].share == Decimal("3.23")

    def test_specific_month_uses_raw_value(self, dashboard_data, monthly):
        """Test that a month without data still shows its expenses; zeros are dropped."""
        slices = expense_composition(dashboard_data.expenses, monthly, SpecificMonth(month_index=2))
        assert [(s.name, s.value) for s in slices] == [("Água", Decimal("50"))]
        assert slices[0].share == Decimal("100.00")

    def test_non_positive_excluded_and_sorted(self):
        expenses = (
            ExpenseRow(category="Estorno", values=[Decimal("-10")]),
            ExpenseRow(category="Luz", values=[Decimal("30")]),
            ExpenseRow(category="Água", values=[Decimal("70")]),
        )
        slices = expense_composition(expenses, (), SpecificMonth(month_index=0))
        assert [s.name for s in slices] == ["Água", "Luz"]


class TestFundComposition:
    """Tests for fund_composition."""

    def test_accumulated_uses_last_month_with_data(self, dashboard_data, monthly):
        """Test that April (the last month with data) is shown, not May."""
        positions = fund_composition(dashboard_data.funds, monthly, 2024, Accumulated())
        assert [(p.fund_name, p.current_value) for p in positions] == [("Fundo A", Decimal("4800"))]

    def test_specific_month(self, dashboard_data, monthly):
        positions = fund_composition(dashboard_data.funds, monthly, 2024, SpecificMonth(month_index=4))
        assert [p.fund_name for p in positions] == ["Fundo A", "Fundo B"]
        assert positions[1].is_negative is True

    def test_accumulated_without_data_is_empty(self, dashboard_data, reference_date):
        monthly = derive_monthly_financials(
            dashboard_data.replace_balances([]), 2024, reference_date
        )
        assert fund_composition(dashboard_data.funds, monthly, 2024, Accumulated()) == ()

    def test_negative_fund_ranked_last(self):
        """Test May positions 5000 and -200 in accumulated mode."""
        data = DashboardData(
            funds=(
                FundRecord(date=date(2024, 5, 20), fund_name="fundB", current_value=Decimal("-200")),
                FundRecord(date=date(2024, 5, 20), fund_name="fundA", current_value=Decimal("5000")),
            ),
            account_balances=(
                AccountBalanceRecord(date=date(2024, 5, 31), balance=Decimal("100")),
            ),
        )
        monthly = derive_monthly_financials(data, 2024, date(2024, 5, 31))
        positions = fund_composition(data.funds, monthly, 2024, Accumulated())
        assert [(p.fund_name, p.current_value) for p in positions] == [
            ("fundA", Decimal("5000")),
            ("fundB", Decimal("-200")),
        ]
        assert [p.is_negative for p in positions] == [False, True]


class TestDashboardView:
    """Tests for build_dashboard_view."""

    def test_bundle(self, dashboard_data, monthly):
        view = build_dashboard_view(monthly, dashboard_data, 2024, Accumulated())
        assert view.year == 2024
        assert isinstance(view.selection, Accumulated)
        assert view.kpis.label == "Acumulado 2024"
        assert len(view.balance_evolution) == 3
        assert len(view.expense_composition) == 2
        assert view.has_fund_data is True

    def test_no_fund_data(self, dashboard_data, monthly):
        view = build_dashboard_view(monthly, dashboard_data, 2024, SpecificMonth(month_index=0))
        assert view.fund_composition == ()
        assert view.has_fund_data is False


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
