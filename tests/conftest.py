"""Shared fixtures: a small 2023/2024 dataset and matching CSV exports."""

from datetime import date
from decimal import Decimal

import pytest

from condo_finance.models import (
    AccountBalanceRecord,
    DashboardData,
    ExpenseRow,
    FundRecord,
)


def D(value: str) -> Decimal:
    return Decimal(value)


@pytest.fixture
def reference_date() -> date:
    """'Today' for every derivation in the tests: mid June 2024."""
    return date(2024, 6, 15)


@pytest.fixture
def dashboard_data() -> DashboardData:
    """
    Balances in Dec/23, Jan/24, Feb/24 and twice in Apr/24.
    No snapshot in March or May 2024.
    """
    return DashboardData(
        expenses=(
            ExpenseRow(category="Água", values=(D("200"), D("300"), D("50"), D("100"))),
            ExpenseRow(category="Limpeza", values=(D("0"), D("0"), D("0"), D("20"))),
        ),
        funds=(
            FundRecord(date=date(2024, 4, 30), fund_name="Fundo A", current_value=D("4800")),
            FundRecord(date=date(2024, 5, 31), fund_name="Fundo B", current_value=D("-200")),
            FundRecord(date=date(2024, 5, 31), fund_name="Fundo A", current_value=D("5000")),
        ),
        account_balances=(
            AccountBalanceRecord(date=date(2023, 12, 15), balance=D("900")),
            AccountBalanceRecord(date=date(2024, 1, 1), balance=D("1000")),
            AccountBalanceRecord(date=date(2024, 2, 1), balance=D("1500")),
            AccountBalanceRecord(date=date(2024, 4, 25), balance=D("1600")),
            AccountBalanceRecord(date=date(2024, 4, 10), balance=D("1400")),
        ),
    )


@pytest.fixture
def expenses_csv() -> str:
    return (
        "Categoria;Jan;Fev;Mar\n"
        "Manutenção;R$ 200,00;R$ 300,00;-\n"
        "Limpeza;R$ 1.050,50;0,00;R$ 80,00\n"
    )


@pytest.fixture
def funds_csv() -> str:
    return (
        "Data;Fundo;Saldo;Valor Atual\n"
        "31/01/2024;Fundo de Reserva;R$ 10.000,00;R$ 10.250,75\n"
        "31/01/2024;Fundo de Obras;R$ 2.000,00;-R$ 150,00\n"
    )


@pytest.fixture
def balances_csv() -> str:
    return (
        "Data;Saldo\n"
        "01/01/2024;R$ 1.000,00\n"
        "01/02/2024;R$ 1.500,00\n"
    )
