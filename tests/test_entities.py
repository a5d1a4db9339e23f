"""Tests for domain entities."""

from dataclasses import FrozenInstanceError
from datetime import date

import pytest

from budgetinsight.domain.entities import (
    Budget,
    Impact,
    IncomeProfile,
    Period,
    SpendingSummary,
    TaxBreakdown,
    Transaction,
    TransactionCategory,
)


def test_entities_are_immutable():
    income = IncomeProfile(annual_salary=50_000, pretax_contribution=0)
    with pytest.raises(FrozenInstanceError):
        income.annual_salary = 60_000


def test_tax_breakdown_total():
    assert TaxBreakdown(1, 2, 3, 4, 5).total == 15


def test_transaction_sign_convention():
    expense = Transaction("t1", "chk", 10.0, date(2025, 3, 1))
    income = Transaction("t2", "chk", -10.0, date(2025, 3, 1))
    zero = Transaction("t3", "chk", 0.0, date(2025, 3, 1))

    assert expense.is_expense and not expense.is_income
    assert income.is_income and not income.is_expense
    assert not zero.is_expense and not zero.is_income


def test_transaction_primary_category():
    assert Transaction("t1", "chk", 1.0, date(2025, 3, 1), category=("Travel", "Air")).primary_category == "Travel"
    assert Transaction("t2", "chk", 1.0, date(2025, 3, 1)).primary_category == "Other"


def test_budget_remaining_and_over():
    budget = Budget(
        id="b1",
        category=TransactionCategory.FOOD,
        monthly_limit=100,
        yearly_limit=1200,
        current_month_spent=105,
        current_year_spent=600,
    )
    assert budget.monthly_remaining == -5
    assert budget.yearly_remaining == 600
    assert budget.is_over_monthly_budget
    assert not budget.is_over_yearly_budget
    assert budget.yearly_percentage == pytest.approx(50)


def test_spending_summary_net_and_savings_rate():
    summary = SpendingSummary(total_income=4000, total_expenses=3000)
    assert summary.net_cash_flow == 1000
    assert summary.savings_rate == pytest.approx(25)


def test_savings_rate_without_income():
    assert SpendingSummary(total_income=0, total_expenses=50).savings_rate == 0


class TestPeriod:
    def test_contains(self):
        march = Period(2025, 3)
        assert march.contains(date(2025, 3, 1))
        assert march.contains(date(2025, 3, 31))
        assert not march.contains(date(2025, 4, 1))
        assert not march.contains(date(2024, 3, 15))
        assert Period(2025).contains(date(2025, 12, 31))

    def test_previous(self):
        assert Period(2025, 3).previous() == Period(2025, 2)
        assert Period(2025, 1).previous() == Period(2024, 12)
        assert Period(2025).previous() == Period(2024)

    def test_str(self):
        assert str(Period(2025, 3)) == "2025-03"
        assert str(Period(2025)) == "2025"

    def test_month_of_and_year_of(self):
        day = date(2025, 7, 4)
        assert Period.month_of(day) == Period(2025, 7)
        assert Period.year_of(day) == Period(2025)
        assert Period.month_of(day).is_monthly
        assert not Period.year_of(day).is_monthly


def test_impact_priority_order():
    assert Impact.HIGH.priority > Impact.MEDIUM.priority > Impact.LOW.priority
