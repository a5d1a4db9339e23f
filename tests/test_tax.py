"""Tests for progressive tax calculation and tax tables."""

import json

import pytest

from budgetinsight.domain.entities import TaxBracket
from budgetinsight.domain.errors import ValidationError
from budgetinsight.domain.tax import TaxCalculator, compute_progressive_tax
from budgetinsight.domain.tax_tables import (
    DEFAULT_TAX_SCHEDULE,
    build_brackets,
    load_tax_schedule,
    schedule_from_dict,
)

TWO_BRACKETS = (TaxBracket(0, 0.10), TaxBracket(50_000, 0.20))


def _flat_schedule(**overrides):
    data = {
        "name": "test",
        "year": 2030,
        "federal": {
            "standardDeduction": 0,
            "brackets": [{"threshold": 0, "rate": 0.10}, {"threshold": 50000, "rate": 0.20}],
        },
        "socialSecurity": {"rate": 0.062, "wageBase": 176100},
        "medicare": {"rate": 0.0145},
    }
    data.update(overrides)
    return schedule_from_dict(data)


class TestComputeProgressiveTax:
    def test_two_bracket_example(self):
        assert compute_progressive_tax(100_000, TWO_BRACKETS) == pytest.approx(15_000.0)

    def test_income_inside_first_bracket(self):
        assert compute_progressive_tax(30_000, TWO_BRACKETS) == pytest.approx(3_000.0)

    def test_zero_income(self):
        assert compute_progressive_tax(0, TWO_BRACKETS) == 0.0

    def test_single_flat_bracket(self):
        """One bracket starting at zero is a flat tax."""
        assert compute_progressive_tax(80_000, (TaxBracket(0, 0.05),)) == pytest.approx(4_000.0)

    def test_income_below_first_threshold_owes_nothing(self):
        brackets = (TaxBracket(10_000, 0.10), TaxBracket(20_000, 0.20))
        assert compute_progressive_tax(9_999, brackets) == 0.0
        assert compute_progressive_tax(10_000, brackets) == 0.0
        assert compute_progressive_tax(15_000, brackets) == pytest.approx(500.0)

    def test_exactly_at_bracket_boundary(self):
        assert compute_progressive_tax(50_000, TWO_BRACKETS) == pytest.approx(5_000.0)

    def test_empty_brackets(self):
        assert compute_progressive_tax(50_000, ()) == 0.0

    def test_monotonic_in_income(self):
        brackets = DEFAULT_TAX_SCHEDULE.federal_brackets
        previous = -1.0
        for income in range(0, 800_001, 12_500):
            tax = compute_progressive_tax(income, brackets)
            assert tax >= previous
            previous = tax

    def test_never_exceeds_top_rate(self):
        brackets = DEFAULT_TAX_SCHEDULE.federal_brackets
        top_rate = brackets[-1].rate
        for income in (1, 5_000, 100_000, 1_000_000):
            assert compute_progressive_tax(income, brackets) <= income * top_rate

    def test_negative_income_rejected(self):
        with pytest.raises(ValidationError):
            compute_progressive_tax(-1, TWO_BRACKETS)


class TestTaxCalculator:
    def test_federal_with_zero_deduction(self):
        calculator = TaxCalculator(_flat_schedule())
        assert calculator.federal_tax(100_000) == pytest.approx(15_000.0)

    def test_federal_subtracts_standard_deduction(self):
        calculator = TaxCalculator()
        # 100000 - 15000 = 85000 across the 10%, 12% and 22% brackets
        assert calculator.federal_tax(100_000) == pytest.approx(13_614.0)

    def test_federal_deduction_floors_at_zero(self):
        assert TaxCalculator().federal_tax(10_000) == 0.0

    def test_social_security_capped_at_wage_base(self):
        calculator = TaxCalculator()
        assert calculator.social_security_tax(200_000) == pytest.approx(10_918.20)
        assert calculator.social_security_tax(100_000) == pytest.approx(6_200.00)

    def test_medicare_is_uncapped(self):
        calculator = TaxCalculator()
        assert calculator.medicare_tax(100_000) == pytest.approx(1_450.0)
        assert calculator.medicare_tax(1_000_000) == pytest.approx(14_500.0)

    def test_state_and_city(self):
        calculator = TaxCalculator()
        assert calculator.state_tax(100_000) == pytest.approx(5_713.75)
        assert calculator.city_tax(100_000) == pytest.approx(3_751.17)

    def test_calculate_all_taxes(self):
        taxes = TaxCalculator().calculate_all_taxes(100_000, 0)
        assert taxes.federal == pytest.approx(13_614.0)
        assert taxes.social_security == pytest.approx(6_200.0)
        assert taxes.medicare == pytest.approx(1_450.0)
        assert taxes.state == pytest.approx(5_713.75)
        assert taxes.city == pytest.approx(3_751.17)
        assert taxes.total == pytest.approx(30_728.92)

    def test_contribution_reduces_income_taxes_but_not_payroll(self):
        calculator = TaxCalculator()
        without = calculator.calculate_all_taxes(100_000, 0)
        with_contribution = calculator.calculate_all_taxes(100_000, 20_000)

        assert with_contribution.federal < without.federal
        assert with_contribution.state < without.state
        assert with_contribution.city < without.city
        assert with_contribution.social_security == without.social_security
        assert with_contribution.medicare == without.medicare

    def test_zero_salary(self):
        taxes = TaxCalculator().calculate_all_taxes(0, 0)
        assert taxes.total == 0.0

    def test_negative_salary_rejected(self):
        with pytest.raises(ValidationError):
            TaxCalculator().calculate_all_taxes(-1, 0)

    def test_marginal_rate(self):
        calculator = TaxCalculator()
        assert calculator.marginal_rate(10_000) == 0.0
        assert calculator.marginal_rate(100_000) == pytest.approx(0.22)
        assert calculator.marginal_rate(1_000_000) == pytest.approx(0.37)

    def test_schedule_without_state_or_city(self):
        calculator = TaxCalculator(_flat_schedule())
        assert calculator.state_tax(100_000) == 0.0
        assert calculator.city_tax(100_000) == 0.0


class TestTaxTables:
    def test_default_schedule(self):
        assert DEFAULT_TAX_SCHEDULE.year == 2025
        assert DEFAULT_TAX_SCHEDULE.standard_deduction == 15_000
        assert DEFAULT_TAX_SCHEDULE.federal_brackets[0] == TaxBracket(0, 0.10)

    def test_build_brackets_rejects_unsorted_thresholds(self):
        with pytest.raises(ValidationError, match="strictly increasing"):
            build_brackets([(0, 0.1), (50_000, 0.2), (40_000, 0.3)])

    def test_build_brackets_rejects_bad_rate(self):
        with pytest.raises(ValidationError):
            build_brackets([(0, 1.5)])

    def test_build_brackets_rejects_negative_threshold(self):
        with pytest.raises(ValidationError):
            build_brackets([(-1, 0.1)])

    def test_percent_rates_are_converted(self):
        schedule = _flat_schedule(medicare={"rate": 1.45})
        assert schedule.medicare_rate == pytest.approx(0.0145)

    def test_missing_federal_section_rejected(self):
        with pytest.raises(ValidationError, match="federal"):
            schedule_from_dict({"name": "broken"})

    def test_load_tax_schedule_from_file(self, fixtures_dir):
        schedule = load_tax_schedule(fixtures_dir / "flat_tax_table.json")

        assert schedule.name == "Flat test table"
        assert schedule.year == 2030
        assert schedule.federal_brackets == (TaxBracket(0, 0.10), TaxBracket(50_000, 0.20))
        assert schedule.state_brackets == ()
        assert TaxCalculator(schedule).federal_tax(100_000) == pytest.approx(15_000.0)

    def test_load_tax_schedule_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(ValidationError, match="Could not parse"):
            load_tax_schedule(path)

    def test_load_tax_schedule_round_trips_through_json(self, tmp_path):
        path = tmp_path / "table.json"
        path.write_text(
            json.dumps(
                {
                    "federal": {"brackets": [{"threshold": 0, "rate": 0.1}]},
                    "state": {"brackets": [{"threshold": 0, "rate": 0.05}]},
                }
            )
        )
        schedule = load_tax_schedule(path)
        assert schedule.name == "custom"
        assert TaxCalculator(schedule).state_tax(1_000) == pytest.approx(50.0)


class TestMalformedTaxTables:
    @pytest.mark.parametrize(
        "data",
        [
            {"federal": {"brackets": [{"threshold": 0, "rate": "ten"}]}},
            {"federal": {"brackets": [{"threshold": "zero", "rate": 0.1}]}},
            {"federal": {"brackets": [{"rate": 0.1}]}},
            {"federal": {"brackets": ["0.1"]}},
            {"federal": {"brackets": [{"threshold": 0, "rate": 0.1}], "standardDeduction": "lots"}},
            {
                "federal": {"brackets": [{"threshold": 0, "rate": 0.1}]},
                "socialSecurity": {"rate": "six"},
            },
        ],
    )
    def test_bad_values_raise_validation_error(self, data):
        with pytest.raises(ValidationError):
            schedule_from_dict(data)

    @pytest.mark.parametrize("key", ["federal", "state", "city", "socialSecurity", "medicare"])
    def test_section_must_be_an_object(self, key):
        data = {"federal": {"brackets": [{"threshold": 0, "rate": 0.1}]}, key: []}
        with pytest.raises(ValidationError):
            schedule_from_dict(data)

    def test_top_level_must_be_an_object(self, tmp_path):
        path = tmp_path / "table.json"
        path.write_text('[{"threshold": 0, "rate": 0.1}]')
        with pytest.raises(ValidationError, match="JSON object"):
            load_tax_schedule(path)

    def test_nan_and_negative_flat_values_rejected(self):
        brackets = [{"threshold": 0, "rate": 0.1}]
        with pytest.raises(ValidationError):
            schedule_from_dict({"federal": {"brackets": brackets, "standardDeduction": float("nan")}})
        with pytest.raises(ValidationError):
            schedule_from_dict({"federal": {"brackets": brackets}, "medicare": {"rate": -0.01}})


class TestNotANumber:
    def test_progressive_tax_rejects_nan(self):
        with pytest.raises(ValidationError, match="must be a number"):
            compute_progressive_tax(float("nan"), TWO_BRACKETS)

    @pytest.mark.parametrize(
        "method", ["federal_tax", "social_security_tax", "medicare_tax", "state_tax", "city_tax"]
    )
    def test_calculator_methods_reject_nan(self, method):
        with pytest.raises(ValidationError):
            getattr(TaxCalculator(), method)(float("nan"))

    def test_calculate_all_taxes_rejects_nan(self):
        with pytest.raises(ValidationError):
            TaxCalculator().calculate_all_taxes(100_000, float("nan"))
