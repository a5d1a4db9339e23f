"""Tax tables.

The 2025 single-filer tables (federal, New York State, New York City) are the
built-in default. Other jurisdictions or years are supplied as JSON files with
the layout::

    {
      "name": "NY single 2025",
      "year": 2025,
      "federal": {"standardDeduction": 15000,
                  "brackets": [{"threshold": 0, "rate": 0.10}, ...]},
      "state": {"brackets": [...]},
      "city": {"brackets": [...]},
      "socialSecurity": {"rate": 0.062, "wageBase": 176100},
      "medicare": {"rate": 0.0145}
    }

Rates above 1 are read as percentages. A missing state or city section means
that level levies no income tax.
"""

import json
from pathlib import Path
from typing import Any, Iterable, Union

from budgetinsight.domain.entities import TaxBracket, TaxSchedule
from budgetinsight.domain.errors import ValidationError


# =============================================================================
# 2025, SINGLE FILER
# =============================================================================

FEDERAL_BRACKETS_2025 = (
    (0, 0.10),
    (11_925, 0.12),
    (48_475, 0.22),
    (103_350, 0.24),
    (197_300, 0.32),
    (250_525, 0.35),
    (626_350, 0.37),
)

STANDARD_DEDUCTION_2025 = 15_000

NY_STATE_BRACKETS_2025 = (
    (0, 0.04),
    (8_500, 0.045),
    (11_700, 0.0525),
    (13_900, 0.0585),
    (80_650, 0.0625),
    (215_400, 0.0685),
    (1_077_550, 0.0965),
    (5_000_000, 0.103),
    (25_000_000, 0.109),
)

NYC_BRACKETS_2025 = (
    (0, 0.03078),
    (12_000, 0.03762),
    (25_000, 0.03819),
    (50_000, 0.03876),
)

SOCIAL_SECURITY_RATE = 0.062
SOCIAL_SECURITY_WAGE_BASE_2025 = 176_100
MEDICARE_RATE = 0.0145


def build_brackets(pairs: Iterable[tuple[float, float]]) -> tuple[TaxBracket, ...]:
    """Build a validated bracket table from (threshold, rate) pairs.

    Raises:
        ValidationError: If thresholds are negative or not strictly increasing,
            or a rate falls outside [0, 1)
    """
    brackets = tuple(TaxBracket(threshold=float(t), rate=float(r)) for t, r in pairs)
    previous = None
    for bracket in brackets:
        if bracket.threshold < 0:
            raise ValidationError(f"Bracket threshold cannot be negative (got {bracket.threshold})")
        if not 0 <= bracket.rate < 1:
            raise ValidationError(f"Bracket rate must be in [0, 1) (got {bracket.rate})")
        if previous is not None and bracket.threshold <= previous.threshold:
            raise ValidationError(
                f"Bracket thresholds must be strictly increasing "
                f"({previous.threshold} then {bracket.threshold})"
            )
        previous = bracket
    return brackets


DEFAULT_TAX_SCHEDULE = TaxSchedule(
    name="New York City, single filer",
    year=2025,
    federal_brackets=build_brackets(FEDERAL_BRACKETS_2025),
    standard_deduction=STANDARD_DEDUCTION_2025,
    state_brackets=build_brackets(NY_STATE_BRACKETS_2025),
    city_brackets=build_brackets(NYC_BRACKETS_2025),
    social_security_rate=SOCIAL_SECURITY_RATE,
    social_security_wage_base=SOCIAL_SECURITY_WAGE_BASE_2025,
    medicare_rate=MEDICARE_RATE,
)


def _rate(value: Any) -> float:
    rate = float(value)
    if rate > 1:
        rate = rate / 100.0
    return rate


def _section(data: dict, key: str) -> dict:
    """Return a named section, {} when absent."""
    section = data.get(key, {})
    if not isinstance(section, dict):
        raise ValidationError(f"Tax table section '{key}' must be an object")
    return section


def _brackets_from_section(section: dict) -> tuple[TaxBracket, ...]:
    pairs = [(b["threshold"], _rate(b["rate"])) for b in section.get("brackets", [])]
    return build_brackets(pairs)


def schedule_from_dict(data: dict) -> TaxSchedule:
    """Build a TaxSchedule from its JSON representation.

    Raises:
        ValidationError: If required sections are missing or values are invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("Tax table must be a JSON object")

    federal = _section(data, "federal")
    if not federal.get("brackets"):
        raise ValidationError("Tax table must contain a 'federal' section with at least one bracket")
    social_security = _section(data, "socialSecurity")
    medicare = _section(data, "medicare")

    try:
        schedule = TaxSchedule(
            name=str(data.get("name", "custom")),
            year=int(data.get("year", 0)),
            federal_brackets=_brackets_from_section(federal),
            standard_deduction=float(federal.get("standardDeduction", 0)),
            state_brackets=_brackets_from_section(_section(data, "state")),
            city_brackets=_brackets_from_section(_section(data, "city")),
            social_security_rate=_rate(social_security.get("rate", 0)),
            social_security_wage_base=float(social_security.get("wageBase", 0)),
            medicare_rate=_rate(medicare.get("rate", 0)),
        )
    except ValidationError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Malformed tax table: {e}")

    # NaN fails both comparisons
    if not schedule.standard_deduction >= 0 or not schedule.social_security_wage_base >= 0:
        raise ValidationError("Standard deduction and wage base must be non-negative numbers")
    for rate in (schedule.social_security_rate, schedule.medicare_rate):
        if not 0 <= rate < 1:
            raise ValidationError(f"Flat tax rate must be in [0, 1) (got {rate})")
    return schedule


def load_tax_schedule(path: Union[str, Path]) -> TaxSchedule:
    """Load a TaxSchedule from a JSON file.

    Raises:
        ValidationError: If the file is not valid JSON or not a valid table
    """
    with open(path, "r") as f:
        try:
            data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ValidationError(f"Could not parse tax table '{path}': {e}")
    return schedule_from_dict(data)
