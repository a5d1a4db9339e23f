"""Domain model entities for budgetinsight.

These are pure data classes representing business concepts, independent of
how the host application stores them. Records are immutable: operations that
"update" an entity return a new instance built with ``dataclasses.replace``.
"""

import calendar
from dataclasses import dataclass, field
from datetime import datetime, date
from enum import Enum
from typing import Optional

from dateutil.relativedelta import relativedelta


@dataclass(frozen=True)
class TaxBracket:
    """One step of a progressive schedule: income above threshold is taxed at rate."""

    threshold: float
    rate: float


@dataclass(frozen=True)
class TaxSchedule:
    """Bracket tables and flat rates for one jurisdiction and year."""

    name: str
    year: int
    federal_brackets: tuple[TaxBracket, ...]
    standard_deduction: float
    state_brackets: tuple[TaxBracket, ...]
    city_brackets: tuple[TaxBracket, ...]
    social_security_rate: float
    social_security_wage_base: float
    medicare_rate: float


@dataclass(frozen=True)
class TaxBreakdown:
    """Tax amounts computed for one salary."""

    federal: float
    social_security: float
    medicare: float
    state: float
    city: float

    @property
    def total(self) -> float:
        return self.federal + self.social_security + self.medicare + self.state + self.city


@dataclass(frozen=True)
class IncomeProfile:
    """Salary, pre-tax contribution and the taxes computed from them.

    Profiles are replaced wholesale whenever salary or contribution change.
    """

    annual_salary: float
    pretax_contribution: float
    federal_tax: float = 0.0
    social_security_tax: float = 0.0
    medicare_tax: float = 0.0
    state_tax: float = 0.0
    city_tax: float = 0.0

    @property
    def taxable_income(self) -> float:
        return self.annual_salary - self.pretax_contribution

    @property
    def total_tax(self) -> float:
        return (
            self.federal_tax
            + self.social_security_tax
            + self.medicare_tax
            + self.state_tax
            + self.city_tax
        )

    @property
    def annual_take_home(self) -> float:
        return self.annual_salary - self.pretax_contribution - self.total_tax

    @property
    def monthly_take_home(self) -> float:
        return self.annual_take_home / 12.0


@dataclass(frozen=True)
class BudgetCategory:
    """A named share of monthly take-home pay."""

    id: str
    name: str
    percentage: float
    icon: str = ""
    color: str = "blue"
    current_month_spent: float = 0.0

    def dollar_amount(self, monthly_take_home: float) -> float:
        """Monthly dollar budget for this category."""
        return monthly_take_home * (self.percentage / 100.0)

    def spending_ratio(self, monthly_take_home: float) -> float:
        """Spent / budgeted, 0 when nothing is budgeted."""
        budget = self.dollar_amount(monthly_take_home)
        if budget <= 0:
            return 0.0
        return self.current_month_spent / budget

    def monthly_remaining(self, monthly_take_home: float) -> float:
        return max(0.0, self.dollar_amount(monthly_take_home) - self.current_month_spent)


ALLOCATION_TOLERANCE = 0.01


@dataclass(frozen=True)
class BudgetAllocation:
    """Ordered categories plus the implicit emergency buffer.

    The buffer is never stored as a category; it is whatever share of
    take-home pay the categories leave unassigned.
    """

    categories: tuple[BudgetCategory, ...] = ()
    emergency_buffer_id: str = ""

    def total_percentage(self) -> float:
        return sum(category.percentage for category in self.categories)

    def emergency_buffer_percentage(self) -> float:
        return max(0.0, 100.0 - self.total_percentage())

    def emergency_buffer_amount(self, monthly_take_home: float) -> float:
        return monthly_take_home * (self.emergency_buffer_percentage() / 100.0)

    def is_valid(self) -> bool:
        """True only when the categories cover essentially all of take-home pay."""
        return abs(self.total_percentage() - 100.0) < ALLOCATION_TOLERANCE

    def is_over_allocated(self) -> bool:
        return self.total_percentage() > 100.0 + ALLOCATION_TOLERANCE

    def find_category(self, category_id: str) -> Optional[BudgetCategory]:
        for category in self.categories:
            if category.id == category_id:
                return category
        return None


class TransactionCategory(Enum):
    """Closed set of spending categories transactions are normalized into."""

    FOOD = "Food & Dining"
    SHOPPING = "Shopping"
    TRANSPORTATION = "Transportation"
    ENTERTAINMENT = "Entertainment"
    UTILITIES = "Utilities"
    HEALTHCARE = "Healthcare"
    TRAVEL = "Travel"
    PERSONAL = "Personal"
    INCOME = "Income"
    OTHER = "Other"


@dataclass(frozen=True)
class Transaction:
    """A bank transaction.

    Sign convention: negative amounts are income or credits, positive amounts
    are expenses.
    """

    id: str
    account_id: str
    amount: float
    date: date
    merchant_name: Optional[str] = None
    category: tuple[str, ...] = ()
    pending: bool = False

    @property
    def primary_category(self) -> str:
        return self.category[0] if self.category else "Other"

    @property
    def is_expense(self) -> bool:
        return self.amount > 0

    @property
    def is_income(self) -> bool:
        return self.amount < 0


@dataclass(frozen=True)
class TransactionAlert:
    """A purchase alert parsed from email, waiting to be matched to a transaction."""

    id: str
    email_id: str
    merchant: str
    date: date
    amount: float
    raw_email_body: str
    received_at: datetime
    is_linked: bool = False


class BudgetStatus(Enum):
    HEALTHY = "healthy"
    WARNING = "warning"
    EXCEEDED = "exceeded"

    @property
    def color(self) -> str:
        return {
            BudgetStatus.HEALTHY: "green",
            BudgetStatus.WARNING: "orange",
            BudgetStatus.EXCEEDED: "red",
        }[self]


WARNING_THRESHOLD_PERCENT = 80.0


@dataclass(frozen=True)
class Budget:
    """Absolute monthly and yearly spending limits for one category."""

    id: str
    category: TransactionCategory
    monthly_limit: float
    yearly_limit: float
    current_month_spent: float = 0.0
    current_year_spent: float = 0.0

    @property
    def monthly_percentage(self) -> float:
        if self.monthly_limit <= 0:
            return 0.0
        return (self.current_month_spent / self.monthly_limit) * 100

    @property
    def yearly_percentage(self) -> float:
        if self.yearly_limit <= 0:
            return 0.0
        return (self.current_year_spent / self.yearly_limit) * 100

    @property
    def monthly_remaining(self) -> float:
        return self.monthly_limit - self.current_month_spent

    @property
    def yearly_remaining(self) -> float:
        return self.yearly_limit - self.current_year_spent

    @property
    def is_over_monthly_budget(self) -> bool:
        return self.current_month_spent > self.monthly_limit

    @property
    def is_over_yearly_budget(self) -> bool:
        return self.current_year_spent > self.yearly_limit

    @property
    def status(self) -> BudgetStatus:
        if self.monthly_percentage >= 100:
            return BudgetStatus.EXCEEDED
        if self.monthly_percentage >= WARNING_THRESHOLD_PERCENT:
            return BudgetStatus.WARNING
        return BudgetStatus.HEALTHY


@dataclass(frozen=True)
class SpendingSummary:
    """Income and expense totals for one calendar month."""

    total_income: float
    total_expenses: float
    category_breakdown: dict[TransactionCategory, float] = field(default_factory=dict)
    month_over_month: float = 0.0
    top_spending_category: Optional[TransactionCategory] = None

    @property
    def net_cash_flow(self) -> float:
        return self.total_income - self.total_expenses

    @property
    def savings_rate(self) -> float:
        if self.total_income <= 0:
            return 0.0
        return (self.net_cash_flow / self.total_income) * 100


@dataclass(frozen=True)
class Period:
    """A calendar month, or a whole year when month is None."""

    year: int
    month: Optional[int] = None

    @classmethod
    def month_of(cls, day: date) -> "Period":
        return cls(year=day.year, month=day.month)

    @classmethod
    def year_of(cls, day: date) -> "Period":
        return cls(year=day.year)

    @property
    def is_monthly(self) -> bool:
        return self.month is not None

    def contains(self, day: date) -> bool:
        if day.year != self.year:
            return False
        return self.month is None or day.month == self.month

    def previous(self) -> "Period":
        if self.month is None:
            return Period(year=self.year - 1)
        first = date(self.year, self.month, 1) - relativedelta(months=1)
        return Period(year=first.year, month=first.month)

    def __str__(self) -> str:
        if self.month is None:
            return f"{self.year:04d}"
        return f"{self.year:04d}-{self.month:02d}"


class PeriodType(Enum):
    MONTHLY = "monthly"
    YEARLY = "yearly"


class SnapshotColorStatus(Enum):
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


@dataclass(frozen=True)
class PeriodSnapshot:
    """Recorded income, spending and savings for one month or year."""

    id: str
    year: int
    month: Optional[int]
    take_home: float
    total_spending: float
    savings: float
    transaction_count: int
    created_at: datetime

    @property
    def period(self) -> Period:
        return Period(year=self.year, month=self.month)

    @property
    def period_type(self) -> PeriodType:
        return PeriodType.MONTHLY if self.month is not None else PeriodType.YEARLY

    @property
    def display_name(self) -> str:
        if self.month is not None:
            return f"{calendar.month_name[self.month]} {self.year}"
        return str(self.year)

    def color_status(self, take_home: Optional[float] = None) -> SnapshotColorStatus:
        """Traffic-light status of spending against take-home pay."""
        basis = self.take_home if take_home is None else take_home
        ratio = self.total_spending / basis if basis > 0 else 0.0
        if ratio > 1.0:
            return SnapshotColorStatus.RED
        if ratio >= 0.9:
            return SnapshotColorStatus.YELLOW
        return SnapshotColorStatus.GREEN


class InsightType(Enum):
    WARNING = "warning"
    RECOMMENDATION = "recommendation"
    ACHIEVEMENT = "achievement"


class Impact(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def priority(self) -> int:
        return {Impact.HIGH: 3, Impact.MEDIUM: 2, Impact.LOW: 1}[self]


@dataclass(frozen=True)
class Insight:
    """A ranked, human-readable observation about budgets or spending."""

    type: InsightType
    title: str
    message: str
    impact: Impact
    category: Optional[TransactionCategory] = None
    amount: Optional[float] = None
