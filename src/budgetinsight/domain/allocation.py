"""Percentage-based budget allocation.

Operations never mutate an allocation; each returns a new BudgetAllocation.
Percentages are shares of monthly take-home pay, so allocations survive
salary changes without re-entry. Whatever the categories leave unassigned is
the emergency buffer.
"""

import logging
import math
import uuid
from dataclasses import replace
from typing import TYPE_CHECKING, Optional

from budgetinsight.domain.entities import BudgetAllocation, BudgetCategory
from budgetinsight.domain.errors import (
    NotFoundError,
    ValidationError,
    category_not_found,
    empty_category_name,
    percentage_out_of_range,
)

if TYPE_CHECKING:
    from budgetinsight.database.base import Database

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    ("Food & Dining", 15.0, "fork.knife"),
    ("Shopping", 10.0, "bag.fill"),
    ("Transportation", 10.0, "car.fill"),
    ("Entertainment", 5.0, "tv.fill"),
    ("Utilities", 10.0, "house.fill"),
    ("Healthcare", 5.0, "cross.case.fill"),
    ("Savings", 20.0, "dollarsign.circle.fill"),
]


def new_allocation() -> BudgetAllocation:
    """Create an empty allocation with a fresh emergency buffer id."""
    return BudgetAllocation(categories=(), emergency_buffer_id=str(uuid.uuid4()))


def validate_percentage(percentage: float) -> None:
    """Raise ValidationError unless percentage is a number in [0, 100]."""
    if math.isnan(percentage) or not 0 <= percentage <= 100:
        raise ValidationError(percentage_out_of_range(percentage))


def add_category(
    allocation: BudgetAllocation,
    name: str,
    percentage: float,
    icon: str = "",
    color: str = "blue",
    category_id: Optional[str] = None,
) -> BudgetAllocation:
    """Append a category.

    Raises:
        ValidationError: If name is blank or percentage outside [0, 100]
    """
    if not name or not name.strip():
        raise ValidationError(empty_category_name())
    validate_percentage(percentage)

    category = BudgetCategory(
        id=category_id or str(uuid.uuid4()),
        name=name.strip(),
        percentage=percentage,
        icon=icon,
        color=color,
    )
    return replace(allocation, categories=allocation.categories + (category,))


def update_category_percentage(
    allocation: BudgetAllocation, category_id: str, new_percentage: float
) -> BudgetAllocation:
    """Replace one category's share; other categories are left as they are.

    Raises:
        ValidationError: If new_percentage is outside [0, 100]
        NotFoundError: If no category has category_id
    """
    validate_percentage(new_percentage)
    if allocation.find_category(category_id) is None:
        raise NotFoundError(category_not_found(category_id))

    categories = tuple(
        replace(c, percentage=new_percentage) if c.id == category_id else c
        for c in allocation.categories
    )
    return replace(allocation, categories=categories)


def remove_category(allocation: BudgetAllocation, category_id: str) -> BudgetAllocation:
    """Remove a category.

    Raises:
        NotFoundError: If no category has category_id
    """
    if allocation.find_category(category_id) is None:
        raise NotFoundError(category_not_found(category_id))
    categories = tuple(c for c in allocation.categories if c.id != category_id)
    return replace(allocation, categories=categories)


def dollar_amount(category: BudgetCategory, monthly_take_home: float) -> float:
    return category.dollar_amount(monthly_take_home)


def allocation_warning(allocation: BudgetAllocation) -> Optional[str]:
    """Message to show when categories claim more than all of take-home pay."""
    if allocation.is_over_allocated():
        excess = allocation.total_percentage() - 100
        return f"Total exceeds 100% by {excess:.1f}%"
    return None


class AllocationService:
    """Service for editing the saved budget allocation."""

    def __init__(self, db: "Database"):
        """Initialize allocation service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_allocation(self) -> BudgetAllocation:
        """Get the saved allocation, or a new empty one."""
        allocation = self.db.load_allocation()
        if allocation is None:
            allocation = new_allocation()
        return allocation

    def _save(self, allocation: BudgetAllocation) -> BudgetAllocation:
        self.db.save_allocation(allocation)
        warning = allocation_warning(allocation)
        if warning:
            logger.warning(warning)
        return allocation

    def add_category(
        self, name: str, percentage: float, icon: str = "", color: str = "blue"
    ) -> BudgetCategory:
        """Add a category and return it."""
        allocation = add_category(self.get_allocation(), name, percentage, icon, color)
        self._save(allocation)
        return allocation.categories[-1]

    def update_category_percentage(self, category_id: str, new_percentage: float) -> BudgetAllocation:
        return self._save(
            update_category_percentage(self.get_allocation(), category_id, new_percentage)
        )

    def remove_category(self, category_id: str) -> BudgetAllocation:
        return self._save(remove_category(self.get_allocation(), category_id))

    def create_default_categories(self) -> BudgetAllocation:
        """Append the default category set to the current allocation."""
        allocation = self.get_allocation()
        for name, percentage, icon in DEFAULT_CATEGORIES:
            allocation = add_category(allocation, name, percentage, icon=icon)
        return self._save(allocation)

    def save_allocation(self, allocation: BudgetAllocation) -> BudgetAllocation:
        return self._save(allocation)
