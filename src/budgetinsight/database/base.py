"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from budgetinsight.domain.entities import (
    Budget,
    BudgetAllocation,
    IncomeProfile,
    PeriodSnapshot,
    PeriodType,
    Transaction,
    TransactionAlert,
)


class Database(ABC):
    """Abstract storage interface for budgetinsight.

    Each collection is read and written wholesale; implementations decide
    where and how the serialized records live.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Income
    @abstractmethod
    def load_income(self) -> Optional[IncomeProfile]:
        """Load the saved income profile, or None if never saved."""
        pass

    @abstractmethod
    def save_income(self, income: IncomeProfile) -> None:
        """Replace the saved income profile."""
        pass

    # Allocation
    @abstractmethod
    def load_allocation(self) -> Optional[BudgetAllocation]:
        """Load the saved budget allocation, or None if never saved."""
        pass

    @abstractmethod
    def save_allocation(self, allocation: BudgetAllocation) -> None:
        """Replace the saved budget allocation."""
        pass

    # Budgets
    @abstractmethod
    def load_budgets(self) -> Optional[list[Budget]]:
        """Load saved budgets, or None if never saved."""
        pass

    @abstractmethod
    def save_budgets(self, budgets: list[Budget]) -> None:
        """Replace the saved budgets."""
        pass

    # Transactions
    @abstractmethod
    def load_transactions(self) -> list[Transaction]:
        """Load all stored transactions."""
        pass

    @abstractmethod
    def save_transactions(self, transactions: list[Transaction]) -> None:
        """Replace all stored transactions."""
        pass

    # Transaction alerts
    @abstractmethod
    def load_alerts(self) -> list[TransactionAlert]:
        """Load all stored transaction alerts."""
        pass

    @abstractmethod
    def save_alerts(self, alerts: list[TransactionAlert]) -> None:
        """Replace all stored transaction alerts."""
        pass

    # Snapshots
    @abstractmethod
    def load_snapshots(self, period_type: PeriodType) -> list[PeriodSnapshot]:
        """Load monthly or yearly snapshots."""
        pass

    @abstractmethod
    def save_snapshots(self, period_type: PeriodType, snapshots: list[PeriodSnapshot]) -> None:
        """Replace monthly or yearly snapshots."""
        pass
