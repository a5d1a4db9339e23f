"""Insight generation from budgets and the spending summary."""

from typing import Optional, Sequence

from budgetinsight.domain.entities import (
    Budget,
    Impact,
    Insight,
    InsightType,
    SpendingSummary,
    Transaction,
    WARNING_THRESHOLD_PERCENT,
)

HIGH_SAVINGS_RATE = 20.0


def budget_insight(budget: Budget) -> Optional[Insight]:
    """Exceeded or approaching-limit insight for one budget, if any."""
    if budget.is_over_monthly_budget:
        overage = abs(budget.monthly_remaining)
        return Insight(
            type=InsightType.WARNING,
            title="Budget Exceeded",
            message=f"You've exceeded your {budget.category.value} budget by ${overage:.2f}",
            impact=Impact.HIGH,
            category=budget.category,
            amount=overage,
        )
    if budget.monthly_percentage >= WARNING_THRESHOLD_PERCENT:
        used = budget.monthly_percentage
        return Insight(
            type=InsightType.RECOMMENDATION,
            title="Approaching Limit",
            message=f"You've used {used:.0f}% of your {budget.category.value} budget",
            impact=Impact.MEDIUM,
            category=budget.category,
            amount=used,
        )
    return None


def generate_insights(
    budgets: Sequence[Budget],
    transactions: Sequence[Transaction],
    summary: SpendingSummary,
) -> list[Insight]:
    """Derive insights, highest impact first.

    Rules run in a fixed order (budgets, savings rate, top category) and the
    sort is stable, so insights of equal impact keep that order.
    """
    insights: list[Insight] = []

    for budget in budgets:
        insight = budget_insight(budget)
        if insight is not None:
            insights.append(insight)

    if summary.savings_rate > HIGH_SAVINGS_RATE:
        insights.append(
            Insight(
                type=InsightType.ACHIEVEMENT,
                title="Great Saving!",
                message=f"You're saving {summary.savings_rate:.0f}% of your income this month",
                impact=Impact.HIGH,
                amount=summary.savings_rate,
            )
        )

    top = summary.top_spending_category
    if top is not None:
        amount = summary.category_breakdown.get(top, 0.0)
        insights.append(
            Insight(
                type=InsightType.RECOMMENDATION,
                title="Top Spending Category",
                message=f"{top.value} is your highest expense at ${amount:.2f}",
                impact=Impact.MEDIUM,
                category=top,
                amount=amount,
            )
        )

    return sorted(insights, key=lambda insight: insight.impact.priority, reverse=True)
