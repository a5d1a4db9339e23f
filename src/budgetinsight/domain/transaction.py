"""Transaction domain service."""

import logging
import uuid
from dataclasses import replace
from datetime import date, datetime, UTC
from typing import TYPE_CHECKING, Any, Iterable, Optional

from budgetinsight.domain.entities import Period, Transaction, TransactionAlert
from budgetinsight.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    alert_not_found,
    duplicate_transaction_id,
    transaction_not_found,
)

if TYPE_CHECKING:
    from budgetinsight.database.base import Database

logger = logging.getLogger(__name__)

# Alert and transaction amounts match when they differ by less than a cent.
AMOUNT_MATCH_TOLERANCE = 0.01


class TransactionService:
    """Service for stored transactions and the email alerts matched to them."""

    def __init__(self, db: "Database"):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transaction(
        self,
        amount: float,
        date: date,
        account_id: str = "manual",
        merchant_name: Optional[str] = None,
        category: Iterable[str] = (),
        pending: bool = False,
        transaction_id: Optional[str] = None,
    ) -> Transaction:
        """Create and store a transaction.

        Args:
            amount: Signed amount; negative for income, positive for expenses
            date: Transaction date
            account_id: Account reference
            merchant_name: Optional merchant
            category: Raw category labels
            pending: Whether the transaction has not posted yet
            transaction_id: Unique ID (generated if not provided)

        Returns:
            The stored transaction

        Raises:
            ConflictError: If a transaction with the same ID exists
        """
        transaction = Transaction(
            id=transaction_id or str(uuid.uuid4()),
            account_id=account_id,
            amount=amount,
            date=date,
            merchant_name=merchant_name,
            category=tuple(category),
            pending=pending,
        )
        self.add_transactions([transaction])
        return transaction

    def add_transactions(self, transactions: Iterable[Transaction]) -> int:
        """Store several transactions at once.

        Returns:
            Number of transactions added

        Raises:
            ConflictError: If any ID is already stored or repeated; nothing is saved
        """
        stored = self.db.load_transactions()
        seen = {txn.id for txn in stored}
        new = []
        for txn in transactions:
            if txn.id in seen:
                raise ConflictError(duplicate_transaction_id(txn.id))
            seen.add(txn.id)
            new.append(txn)

        self.db.save_transactions(stored + new)
        logger.info("Stored %d new transactions (%d total)", len(new), len(stored) + len(new))
        return len(new)

    def import_transactions(self, records: list[dict[str, Any]]) -> int:
        """Import transaction records in their JSON shape.

        Raises:
            ValidationError: If a record is missing fields or has bad values
            ConflictError: If an ID is already stored
        """
        from budgetinsight.database.mappers import transaction_from_json

        transactions = []
        for index, record in enumerate(records):
            try:
                transactions.append(transaction_from_json(record))
            except (KeyError, TypeError, ValueError) as e:
                raise ValidationError(f"Invalid transaction record #{index + 1}: {e}")
        return self.add_transactions(transactions)

    def get_all_transactions(self) -> list[Transaction]:
        """All stored transactions in the order they were added."""
        return self.db.load_transactions()

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        for txn in self.db.load_transactions():
            if txn.id == transaction_id:
                return txn
        return None

    def list_transactions(self, period: Optional[Period] = None) -> list[Transaction]:
        """List transactions, newest first, optionally limited to a period."""
        transactions = self.db.load_transactions()
        if period is not None:
            transactions = [txn for txn in transactions if period.contains(txn.date)]
        return sorted(transactions, key=lambda txn: txn.date, reverse=True)

    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If the transaction does not exist
        """
        stored = self.db.load_transactions()
        remaining = [txn for txn in stored if txn.id != transaction_id]
        if len(remaining) == len(stored):
            raise NotFoundError(transaction_not_found(transaction_id))
        self.db.save_transactions(remaining)

    # Alerts
    def create_alert(
        self,
        email_id: str,
        merchant: str,
        date: date,
        amount: float,
        raw_email_body: str = "",
        received_at: Optional[datetime] = None,
    ) -> TransactionAlert:
        """Store an alert produced by the email collaborator."""
        alert = TransactionAlert(
            id=str(uuid.uuid4()),
            email_id=email_id,
            merchant=merchant,
            date=date,
            amount=amount,
            raw_email_body=raw_email_body,
            received_at=received_at or datetime.now(UTC),
        )
        self.db.save_alerts(self.db.load_alerts() + [alert])
        return alert

    def get_unlinked_alerts(self) -> list[TransactionAlert]:
        """Alerts still waiting for a matching transaction."""
        return [alert for alert in self.db.load_alerts() if not alert.is_linked]

    def find_matching_alerts(self, amount: float, date: date) -> list[TransactionAlert]:
        """Unlinked alerts for the same amount (within a cent) on the same day."""
        return [
            alert
            for alert in self.get_unlinked_alerts()
            if abs(alert.amount - amount) < AMOUNT_MATCH_TOLERANCE and alert.date == date
        ]

    def link_alert(self, alert_id: str, transaction_id: str) -> TransactionAlert:
        """Mark an alert as matched to a transaction.

        Raises:
            NotFoundError: If the alert or transaction does not exist
        """
        if self.get_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        alerts = self.db.load_alerts()
        for index, alert in enumerate(alerts):
            if alert.id == alert_id:
                alerts[index] = replace(alert, is_linked=True)
                self.db.save_alerts(alerts)
                logger.info("Linked alert %s to transaction %s", alert_id, transaction_id)
                return alerts[index]
        raise NotFoundError(alert_not_found(alert_id))

    def delete_alert(self, alert_id: str) -> None:
        """Delete an alert.

        Raises:
            NotFoundError: If the alert does not exist
        """
        alerts = self.db.load_alerts()
        remaining = [alert for alert in alerts if alert.id != alert_id]
        if len(remaining) == len(alerts):
            raise NotFoundError(alert_not_found(alert_id))
        self.db.save_alerts(remaining)
