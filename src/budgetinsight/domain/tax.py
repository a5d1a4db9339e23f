"""Progressive tax calculation."""

import math
from typing import Optional, Sequence

from budgetinsight.domain.entities import TaxBracket, TaxBreakdown, TaxSchedule
from budgetinsight.domain.errors import ValidationError, negative_amount, not_a_number
from budgetinsight.domain.tax_tables import DEFAULT_TAX_SCHEDULE


def _require_non_negative(field_name: str, value: float) -> None:
    if math.isnan(value):
        raise ValidationError(not_a_number(field_name))
    if value < 0:
        raise ValidationError(negative_amount(field_name, value))


def compute_progressive_tax(income: float, brackets: Sequence[TaxBracket]) -> float:
    """Compute marginal tax on income over an ascending bracket table.

    Only the slice of income between a bracket's threshold and the next
    bracket's threshold is taxed at that bracket's rate. Income at or below
    the first threshold owes nothing.

    Args:
        income: Income to tax, must be >= 0
        brackets: Brackets sorted by ascending threshold

    Returns:
        Total tax owed

    Raises:
        ValidationError: If income is negative
    """
    _require_non_negative("Income", income)

    tax = 0.0
    for index, bracket in enumerate(brackets):
        if income <= bracket.threshold:
            break
        if index + 1 < len(brackets):
            upper_bound = min(income, brackets[index + 1].threshold)
        else:
            upper_bound = income
        taxable_in_bracket = upper_bound - bracket.threshold
        if taxable_in_bracket > 0:
            tax += taxable_in_bracket * bracket.rate
    return tax


class TaxCalculator:
    """Calculator for federal, payroll, state and city taxes.

    Pass the TaxSchedule for the jurisdiction and year being modelled; the
    calculator itself holds no year-specific numbers.
    """

    def __init__(self, schedule: Optional[TaxSchedule] = None):
        self.schedule = schedule if schedule is not None else DEFAULT_TAX_SCHEDULE

    def federal_tax(self, taxable_income: float) -> float:
        """Federal tax after subtracting the standard deduction (floored at zero)."""
        _require_non_negative("Taxable income", taxable_income)
        deducted_income = max(0.0, taxable_income - self.schedule.standard_deduction)
        return compute_progressive_tax(deducted_income, self.schedule.federal_brackets)

    def social_security_tax(self, gross_income: float) -> float:
        """Flat-rate tax on gross income up to the wage base."""
        _require_non_negative("Gross income", gross_income)
        capped_income = min(gross_income, self.schedule.social_security_wage_base)
        return capped_income * self.schedule.social_security_rate

    def medicare_tax(self, gross_income: float) -> float:
        _require_non_negative("Gross income", gross_income)
        return gross_income * self.schedule.medicare_rate

    def state_tax(self, taxable_income: float) -> float:
        return compute_progressive_tax(taxable_income, self.schedule.state_brackets)

    def city_tax(self, taxable_income: float) -> float:
        return compute_progressive_tax(taxable_income, self.schedule.city_brackets)

    def marginal_rate(self, taxable_income: float) -> float:
        """Federal rate applied to the last dollar of taxable income."""
        _require_non_negative("Taxable income", taxable_income)
        deducted_income = max(0.0, taxable_income - self.schedule.standard_deduction)
        rate = 0.0
        for bracket in self.schedule.federal_brackets:
            if deducted_income <= bracket.threshold:
                break
            rate = bracket.rate
        return rate

    def calculate_all_taxes(self, annual_salary: float, pretax_contribution: float) -> TaxBreakdown:
        """Compute every tax category for a salary.

        Federal, state and city taxes apply to salary minus the pre-tax
        contribution; Social Security and Medicare apply to gross salary.
        """
        _require_non_negative("Annual salary", annual_salary)
        _require_non_negative("Pre-tax contribution", pretax_contribution)

        taxable_income = max(0.0, annual_salary - pretax_contribution)
        return TaxBreakdown(
            federal=self.federal_tax(taxable_income),
            social_security=self.social_security_tax(annual_salary),
            medicare=self.medicare_tax(annual_salary),
            state=self.state_tax(taxable_income),
            city=self.city_tax(taxable_income),
        )
