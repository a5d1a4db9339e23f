"""Period snapshot domain service."""

import logging
import uuid
from datetime import date, datetime, UTC
from typing import TYPE_CHECKING, Optional, Sequence

from budgetinsight.domain.entities import Period, PeriodSnapshot, PeriodType, Transaction
from budgetinsight.domain.errors import ValidationError, invalid_month
from budgetinsight.domain.spending import filter_period

if TYPE_CHECKING:
    from budgetinsight.database.base import Database

logger = logging.getLogger(__name__)


def build_snapshot(
    period: Period,
    take_home: float,
    transactions: Sequence[Transaction],
    created_at: Optional[datetime] = None,
) -> PeriodSnapshot:
    """Record spending against take-home pay for one period.

    Only expenses are counted, both in the total and in transaction_count.

    Raises:
        ValidationError: If the period's month is outside 1..12
    """
    if period.month is not None and not 1 <= period.month <= 12:
        raise ValidationError(invalid_month(period.month))

    expenses = [txn for txn in filter_period(transactions, period) if txn.is_expense]
    total_spending = sum(txn.amount for txn in expenses)
    return PeriodSnapshot(
        id=str(uuid.uuid4()),
        year=period.year,
        month=period.month,
        take_home=take_home,
        total_spending=total_spending,
        savings=take_home - total_spending,
        transaction_count=len(expenses),
        created_at=created_at or datetime.now(UTC),
    )


def build_monthly_snapshot(
    year: int,
    month: int,
    monthly_take_home: float,
    transactions: Sequence[Transaction],
    created_at: Optional[datetime] = None,
) -> PeriodSnapshot:
    return build_snapshot(Period(year, month), monthly_take_home, transactions, created_at)


def build_yearly_snapshot(
    year: int,
    monthly_take_home: float,
    transactions: Sequence[Transaction],
    created_at: Optional[datetime] = None,
) -> PeriodSnapshot:
    """Yearly snapshot; take-home is twelve times the monthly figure."""
    return build_snapshot(Period(year), monthly_take_home * 12.0, transactions, created_at)


def upsert_snapshot(
    snapshots: Sequence[PeriodSnapshot], snapshot: PeriodSnapshot
) -> list[PeriodSnapshot]:
    """Replace the snapshot for the same period in place, or append it."""
    result = list(snapshots)
    for index, existing in enumerate(result):
        if existing.period == snapshot.period:
            result[index] = snapshot
            return result
    result.append(snapshot)
    return result


def sort_snapshots(snapshots: Sequence[PeriodSnapshot]) -> list[PeriodSnapshot]:
    """Newest period first."""
    return sorted(snapshots, key=lambda s: (s.year, s.month or 0), reverse=True)


class SnapshotService:
    """Service for recording and listing monthly and yearly snapshots."""

    def __init__(self, db: "Database"):
        """Initialize snapshot service.

        Args:
            db: Database instance
        """
        self.db = db

    def _store(self, period_type: PeriodType, snapshot: PeriodSnapshot) -> PeriodSnapshot:
        snapshots = upsert_snapshot(self.db.load_snapshots(period_type), snapshot)
        self.db.save_snapshots(period_type, snapshots)
        logger.info(
            "Snapshot %s: spending %.2f of %.2f (%d transactions)",
            snapshot.period,
            snapshot.total_spending,
            snapshot.take_home,
            snapshot.transaction_count,
        )
        return snapshot

    def create_monthly_snapshot(
        self, year: int, month: int, monthly_take_home: float, transactions: Sequence[Transaction]
    ) -> PeriodSnapshot:
        snapshot = build_monthly_snapshot(year, month, monthly_take_home, transactions)
        return self._store(PeriodType.MONTHLY, snapshot)

    def create_yearly_snapshot(
        self, year: int, monthly_take_home: float, transactions: Sequence[Transaction]
    ) -> PeriodSnapshot:
        snapshot = build_yearly_snapshot(year, monthly_take_home, transactions)
        return self._store(PeriodType.YEARLY, snapshot)

    def update_snapshots_if_needed(
        self,
        monthly_take_home: float,
        transactions: Sequence[Transaction],
        reference_date: Optional[date] = None,
    ) -> tuple[PeriodSnapshot, PeriodSnapshot]:
        """Refresh the monthly and yearly snapshots containing reference_date."""
        reference_date = reference_date or date.today()
        monthly = self.create_monthly_snapshot(
            reference_date.year, reference_date.month, monthly_take_home, transactions
        )
        yearly = self.create_yearly_snapshot(reference_date.year, monthly_take_home, transactions)
        return monthly, yearly

    def get_monthly_snapshots(self, sorted_by_date: bool = True) -> list[PeriodSnapshot]:
        snapshots = self.db.load_snapshots(PeriodType.MONTHLY)
        return sort_snapshots(snapshots) if sorted_by_date else snapshots

    def get_yearly_snapshots(self, sorted_by_date: bool = True) -> list[PeriodSnapshot]:
        snapshots = self.db.load_snapshots(PeriodType.YEARLY)
        return sort_snapshots(snapshots) if sorted_by_date else snapshots
