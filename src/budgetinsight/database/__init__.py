"""Database layer for budgetinsight application."""

from budgetinsight.database.base import Database
from budgetinsight.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
