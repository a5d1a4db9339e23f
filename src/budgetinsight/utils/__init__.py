"""Utility functions for budgetinsight."""

from budgetinsight.utils.date_parser import parse_date, parse_period
from budgetinsight.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_period", "parse_amount"]
