"""Tests for insight generation."""

import pytest

from budgetinsight.domain.entities import (
    Budget,
    BudgetStatus,
    Impact,
    InsightType,
    SpendingSummary,
    TransactionCategory,
)
from budgetinsight.domain.insights import budget_insight, generate_insights


def _budget(spent, limit=100.0, category=TransactionCategory.FOOD):
    return Budget(
        id=f"budget-{category.name}",
        category=category,
        monthly_limit=limit,
        yearly_limit=limit * 12,
        current_month_spent=spent,
    )


def _summary(income=0.0, expenses=0.0, breakdown=None):
    breakdown = breakdown or {}
    top = max(breakdown, key=breakdown.get) if breakdown else None
    return SpendingSummary(
        total_income=income,
        total_expenses=expenses,
        category_breakdown=breakdown,
        top_spending_category=top,
    )


class TestBudgetStatus:
    @pytest.mark.parametrize(
        "spent,status",
        [
            (0, BudgetStatus.HEALTHY),
            (79.99, BudgetStatus.HEALTHY),
            (80, BudgetStatus.WARNING),
            (85, BudgetStatus.WARNING),
            (100, BudgetStatus.EXCEEDED),
            (105, BudgetStatus.EXCEEDED),
        ],
    )
    def test_status_thresholds(self, spent, status):
        assert _budget(spent).status == status

    def test_zero_limit_is_healthy(self):
        budget = _budget(50, limit=0)
        assert budget.monthly_percentage == 0
        assert budget.status == BudgetStatus.HEALTHY

    def test_status_colors(self):
        assert BudgetStatus.HEALTHY.color == "green"
        assert BudgetStatus.WARNING.color == "orange"
        assert BudgetStatus.EXCEEDED.color == "red"


class TestBudgetInsight:
    def test_exceeded_carries_overage(self):
        insight = budget_insight(_budget(105))

        assert insight.type == InsightType.WARNING
        assert insight.impact == Impact.HIGH
        assert insight.category == TransactionCategory.FOOD
        assert insight.amount == pytest.approx(5)
        assert "$5.00" in insight.message

    def test_approaching_limit(self):
        insight = budget_insight(_budget(85))

        assert insight.type == InsightType.RECOMMENDATION
        assert insight.impact == Impact.MEDIUM
        assert insight.amount == pytest.approx(85)
        assert "85%" in insight.message

    def test_spending_exactly_at_limit_is_approaching(self):
        insight = budget_insight(_budget(100))
        assert insight.type == InsightType.RECOMMENDATION

    def test_healthy_budget_has_no_insight(self):
        assert budget_insight(_budget(50)) is None


class TestGenerateInsights:
    def test_sorted_by_impact(self):
        budgets = [_budget(85), _budget(150, category=TransactionCategory.SHOPPING)]
        summary = _summary(
            income=5000,
            expenses=235,
            breakdown={TransactionCategory.FOOD: 85, TransactionCategory.SHOPPING: 150},
        )

        insights = generate_insights(budgets, [], summary)

        priorities = [insight.impact.priority for insight in insights]
        assert priorities == sorted(priorities, reverse=True)
        assert [i.title for i in insights] == [
            "Budget Exceeded",
            "Great Saving!",
            "Approaching Limit",
            "Top Spending Category",
        ]

    def test_savings_achievement(self):
        insights = generate_insights([], [], _summary(income=1000, expenses=700))

        assert len(insights) == 1
        assert insights[0].type == InsightType.ACHIEVEMENT
        assert insights[0].amount == pytest.approx(30)

    def test_low_savings_rate_is_not_an_achievement(self):
        assert generate_insights([], [], _summary(income=1000, expenses=900)) == []

    def test_top_category_insight(self):
        summary = _summary(expenses=80, breakdown={TransactionCategory.FOOD: 50, TransactionCategory.SHOPPING: 30})

        (insight,) = generate_insights([], [], summary)

        assert insight.title == "Top Spending Category"
        assert insight.category == TransactionCategory.FOOD
        assert insight.amount == 50
        assert insight.message == "Food & Dining is your highest expense at $50.00"

    def test_equal_impact_keeps_rule_order(self):
        budgets = [
            _budget(120, category=TransactionCategory.SHOPPING),
            _budget(130, category=TransactionCategory.TRAVEL),
        ]
        insights = generate_insights(budgets, [], _summary())
        assert [i.category for i in insights] == [
            TransactionCategory.SHOPPING,
            TransactionCategory.TRAVEL,
        ]

    def test_nothing_to_report(self):
        assert generate_insights([_budget(10)], [], _summary()) == []
