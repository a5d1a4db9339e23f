"""Domain layer for budgetinsight application."""

from budgetinsight.domain.tax import TaxCalculator, compute_progressive_tax
from budgetinsight.domain.income import IncomeService, derive_income
from budgetinsight.domain.allocation import AllocationService
from budgetinsight.domain.spending import BudgetService, summarize, bucket_by_category
from budgetinsight.domain.insights import generate_insights
from budgetinsight.domain.snapshots import SnapshotService
from budgetinsight.domain.transaction import TransactionService

__all__ = [
    "TaxCalculator",
    "compute_progressive_tax",
    "IncomeService",
    "derive_income",
    "AllocationService",
    "BudgetService",
    "summarize",
    "bucket_by_category",
    "generate_insights",
    "SnapshotService",
    "TransactionService",
]
