"""Income domain service."""

import logging
import math
from typing import TYPE_CHECKING, Optional

from budgetinsight.domain.entities import IncomeProfile, TaxBreakdown
from budgetinsight.domain.errors import (
    ValidationError,
    contribution_exceeds_salary,
    negative_amount,
    not_a_number,
)
from budgetinsight.domain.tax import TaxCalculator

if TYPE_CHECKING:
    from budgetinsight.database.base import Database

logger = logging.getLogger(__name__)


def validate_income_inputs(annual_salary: float, pretax_contribution: float) -> None:
    """Check salary and contribution before any tax is computed.

    Raises:
        ValidationError: If either amount is negative or the contribution
            exceeds the salary
    """
    if math.isnan(annual_salary) or math.isnan(pretax_contribution):
        raise ValidationError(not_a_number("Salary and contribution"))
    if annual_salary < 0:
        raise ValidationError(negative_amount("Annual salary", annual_salary))
    if pretax_contribution < 0:
        raise ValidationError(negative_amount("Pre-tax contribution", pretax_contribution))
    if pretax_contribution > annual_salary:
        raise ValidationError(contribution_exceeds_salary(pretax_contribution, annual_salary))


def derive_income(
    annual_salary: float, pretax_contribution: float, taxes: TaxBreakdown
) -> IncomeProfile:
    """Assemble an IncomeProfile from inputs and already computed taxes.

    No clamping or rounding happens here; validation is the caller's job.
    """
    return IncomeProfile(
        annual_salary=annual_salary,
        pretax_contribution=pretax_contribution,
        federal_tax=taxes.federal,
        social_security_tax=taxes.social_security,
        medicare_tax=taxes.medicare,
        state_tax=taxes.state,
        city_tax=taxes.city,
    )


def calculate_income_profile(
    calculator: TaxCalculator, annual_salary: float, pretax_contribution: float
) -> IncomeProfile:
    """Validate inputs, compute taxes and derive take-home pay."""
    validate_income_inputs(annual_salary, pretax_contribution)
    taxes = calculator.calculate_all_taxes(annual_salary, pretax_contribution)
    return derive_income(annual_salary, pretax_contribution, taxes)


class IncomeService:
    """Service for managing the user's income profile."""

    def __init__(self, db: "Database", calculator: Optional[TaxCalculator] = None):
        """Initialize income service.

        Args:
            db: Database instance
            calculator: Tax calculator; defaults to the built-in tax tables
        """
        self.db = db
        self.calculator = calculator if calculator is not None else TaxCalculator()

    def update_income(self, annual_salary: float, pretax_contribution: float) -> IncomeProfile:
        """Recalculate and replace the saved income profile.

        Raises:
            ValidationError: If the inputs are invalid; nothing is saved
        """
        income = calculate_income_profile(self.calculator, annual_salary, pretax_contribution)
        self.db.save_income(income)
        logger.info(
            "Income updated: salary %.2f, total tax %.2f, monthly take-home %.2f",
            income.annual_salary,
            income.total_tax,
            income.monthly_take_home,
        )
        return income

    def get_income(self) -> Optional[IncomeProfile]:
        """Get the saved income profile, or None if none has been entered."""
        return self.db.load_income()

    def monthly_take_home(self) -> float:
        """Monthly take-home pay, 0 when no income has been entered."""
        income = self.get_income()
        return income.monthly_take_home if income is not None else 0.0
