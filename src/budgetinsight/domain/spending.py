"""Spending aggregation and budget-vs-actual tracking."""

import logging
import math
import uuid
from dataclasses import replace
from datetime import date
from typing import TYPE_CHECKING, Callable, Iterable, Optional, Sequence

from budgetinsight.domain.categorization import categorize
from budgetinsight.domain.entities import (
    Budget,
    BudgetAllocation,
    Period,
    SpendingSummary,
    Transaction,
    TransactionCategory,
)
from budgetinsight.domain.errors import (
    NotFoundError,
    ValidationError,
    budget_not_found,
    negative_amount,
    not_a_number,
)

if TYPE_CHECKING:
    from budgetinsight.database.base import Database

logger = logging.getLogger(__name__)

CategoryFn = Callable[[Sequence[str]], TransactionCategory]

DEFAULT_BUDGET_LIMITS = [
    (TransactionCategory.FOOD, 600.0, 7200.0),
    (TransactionCategory.SHOPPING, 400.0, 4800.0),
    (TransactionCategory.TRANSPORTATION, 300.0, 3600.0),
    (TransactionCategory.ENTERTAINMENT, 200.0, 2400.0),
    (TransactionCategory.UTILITIES, 250.0, 3000.0),
]


def filter_period(transactions: Iterable[Transaction], period: Period) -> list[Transaction]:
    """Transactions dated inside the calendar period."""
    return [txn for txn in transactions if period.contains(txn.date)]


def total_expenses(transactions: Iterable[Transaction]) -> float:
    return sum(txn.amount for txn in transactions if txn.is_expense)


def bucket_by_category(
    transactions: Iterable[Transaction],
    category_of: CategoryFn,
    period: Period,
) -> dict[TransactionCategory, float]:
    """Sum expenses inside a period per normalized category.

    Keys appear in the order their first expense was encountered.
    """
    totals: dict[TransactionCategory, float] = {}
    for txn in filter_period(transactions, period):
        if not txn.is_expense:
            continue
        category = category_of(txn.category)
        totals[category] = totals.get(category, 0.0) + txn.amount
    return totals


def top_category(breakdown: dict[TransactionCategory, float]) -> Optional[TransactionCategory]:
    """Category with the largest total; the first one encountered wins ties."""
    best: Optional[TransactionCategory] = None
    best_amount = 0.0
    for category, amount in breakdown.items():
        if best is None or amount > best_amount:
            best = category
            best_amount = amount
    return best


def summarize(
    transactions: Sequence[Transaction],
    reference_date: Optional[date] = None,
    category_of: CategoryFn = categorize,
) -> SpendingSummary:
    """Summarize the calendar month containing reference_date.

    Negative amounts count as income (absolute value), positive amounts as
    expenses. Month-over-month is the percentage change in expenses against
    the previous calendar month, and 0 when that month had no expenses.
    """
    reference_date = reference_date or date.today()
    period = Period.month_of(reference_date)
    current = filter_period(transactions, period)

    total_income = sum(abs(txn.amount) for txn in current if txn.is_income)
    breakdown = bucket_by_category(current, category_of, period)
    expenses = total_expenses(current)

    previous_expenses = total_expenses(filter_period(transactions, period.previous()))
    if previous_expenses > 0:
        month_over_month = ((expenses - previous_expenses) / previous_expenses) * 100
    else:
        month_over_month = 0.0

    return SpendingSummary(
        total_income=total_income,
        total_expenses=expenses,
        category_breakdown=breakdown,
        month_over_month=month_over_month,
        top_spending_category=top_category(breakdown),
    )


def _category_spend(
    transactions: Iterable[Transaction],
    period: Period,
    matches: Callable[[TransactionCategory], bool],
    category_of: CategoryFn,
) -> float:
    return sum(
        txn.amount
        for txn in transactions
        if txn.is_expense and period.contains(txn.date) and matches(category_of(txn.category))
    )


def update_budgets(
    budgets: Sequence[Budget],
    transactions: Sequence[Transaction],
    reference_date: Optional[date] = None,
    category_of: CategoryFn = categorize,
) -> list[Budget]:
    """Recompute month and year spend for every budget from scratch."""
    reference_date = reference_date or date.today()
    month = Period.month_of(reference_date)
    year = Period.year_of(reference_date)

    updated = []
    for budget in budgets:
        matches = lambda category, wanted=budget.category: category == wanted
        updated.append(
            replace(
                budget,
                current_month_spent=_category_spend(transactions, month, matches, category_of),
                current_year_spent=_category_spend(transactions, year, matches, category_of),
            )
        )
    return updated


def update_allocation_spending(
    allocation: BudgetAllocation,
    transactions: Sequence[Transaction],
    reference_date: Optional[date] = None,
    category_of: CategoryFn = categorize,
) -> BudgetAllocation:
    """Recompute current_month_spent for every allocation category.

    A transaction counts toward a category when its normalized category name
    equals the allocation category's name, ignoring case.
    """
    month = Period.month_of(reference_date or date.today())
    categories = []
    for category in allocation.categories:
        wanted = category.name.strip().lower()
        matches = lambda normalized, wanted=wanted: normalized.value.lower() == wanted
        categories.append(
            replace(
                category,
                current_month_spent=_category_spend(transactions, month, matches, category_of),
            )
        )
    return replace(allocation, categories=tuple(categories))


def default_budgets() -> list[Budget]:
    return [
        Budget(
            id=str(uuid.uuid4()),
            category=category,
            monthly_limit=monthly,
            yearly_limit=yearly,
        )
        for category, monthly, yearly in DEFAULT_BUDGET_LIMITS
    ]


class BudgetService:
    """Service for category budgets and the monthly spending summary."""

    def __init__(self, db: "Database"):
        """Initialize budget service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_budgets(self) -> list[Budget]:
        """Get saved budgets, creating the defaults on first use."""
        budgets = self.db.load_budgets()
        if budgets is None:
            budgets = self.create_default_budgets()
        return budgets

    def create_default_budgets(self) -> list[Budget]:
        """Replace all budgets with the default set."""
        budgets = default_budgets()
        self.db.save_budgets(budgets)
        return budgets

    def update_budget_limit(
        self, category: TransactionCategory, monthly_limit: float, yearly_limit: float
    ) -> Budget:
        """Change one budget's limits.

        Raises:
            ValidationError: If a limit is negative or not a number
            NotFoundError: If no budget tracks the category
        """
        for field_name, limit in (("Monthly limit", monthly_limit), ("Yearly limit", yearly_limit)):
            if math.isnan(limit):
                raise ValidationError(not_a_number(field_name))
            if limit < 0:
                raise ValidationError(negative_amount(field_name, limit))

        budgets = self.get_budgets()
        for index, budget in enumerate(budgets):
            if budget.category == category:
                budgets[index] = replace(
                    budget, monthly_limit=monthly_limit, yearly_limit=yearly_limit
                )
                self.db.save_budgets(budgets)
                return budgets[index]
        raise NotFoundError(budget_not_found(category.value))

    def refresh(
        self, transactions: Sequence[Transaction], reference_date: Optional[date] = None
    ) -> SpendingSummary:
        """Recompute the summary, budget spend and allocation spend, and save them."""
        logger.info("Updating budgets with %d transactions", len(transactions))
        summary = summarize(transactions, reference_date)
        logger.info(
            "Income %.2f, expenses %.2f, net %.2f, savings rate %.1f%%",
            summary.total_income,
            summary.total_expenses,
            summary.net_cash_flow,
            summary.savings_rate,
        )
        for category, amount in sorted(
            summary.category_breakdown.items(), key=lambda item: item[1], reverse=True
        ):
            logger.debug("  %s: %.2f", category.value, amount)

        budgets = update_budgets(self.get_budgets(), transactions, reference_date)
        for budget in budgets:
            logger.debug(
                "  %s: %.2f / %.2f monthly",
                budget.category.value,
                budget.current_month_spent,
                budget.monthly_limit,
            )
        self.db.save_budgets(budgets)

        allocation = self.db.load_allocation()
        if allocation is not None:
            self.db.save_allocation(
                update_allocation_spending(allocation, transactions, reference_date)
            )
        return summary
