"""Shared pytest fixtures for budgetinsight tests."""

import tempfile
import os
from datetime import date
from itertools import count
from pathlib import Path
import pytest

from budgetinsight.database.factories import create_sqlite_database
from budgetinsight.domain.allocation import AllocationService
from budgetinsight.domain.entities import Transaction
from budgetinsight.domain.income import IncomeService
from budgetinsight.domain.snapshots import SnapshotService
from budgetinsight.domain.spending import BudgetService
from budgetinsight.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def income_service(temp_db):
    """Create an IncomeService with a temporary database."""
    return IncomeService(temp_db)


@pytest.fixture
def allocation_service(temp_db):
    """Create an AllocationService with a temporary database."""
    return AllocationService(temp_db)


@pytest.fixture
def budget_service(temp_db):
    """Create a BudgetService with a temporary database."""
    return BudgetService(temp_db)


@pytest.fixture
def snapshot_service(temp_db):
    """Create a SnapshotService with a temporary database."""
    return SnapshotService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def make_transaction():
    """Factory for Transaction entities with sequential IDs."""
    ids = count(1)

    def _make(amount, on=date(2025, 3, 10), labels=("Other",), merchant=None, pending=False):
        return Transaction(
            id=f"TXN{next(ids):03d}",
            account_id="checking",
            amount=amount,
            date=on,
            merchant_name=merchant,
            category=tuple(labels),
            pending=pending,
        )

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
