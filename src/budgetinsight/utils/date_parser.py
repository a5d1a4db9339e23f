"""Date and period parsing utilities."""

import re
from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from budgetinsight.domain.entities import Period


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2025-01-15", "January 15, 2025") and the
    relative words "today", "yesterday" and "tomorrow".

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_period(period_str: str) -> Period:
    """Parse a calendar period.

    Supports "YYYY-MM", "YYYY", and "this month", "last month",
    "this year", "last year".

    Raises:
        ValueError: If period string is not recognized
    """
    period_str = period_str.strip().lower()
    words = period_str.replace("-", " ")
    today = date.today()

    if words == "this month":
        return Period.month_of(today)
    if words == "last month":
        return Period.month_of(today - relativedelta(months=1))
    if words == "this year":
        return Period.year_of(today)
    if words == "last year":
        return Period.year_of(today - relativedelta(years=1))

    match = re.fullmatch(r"(\d{4})(?:-(\d{1,2}))?", period_str)
    if match is None:
        raise ValueError(
            f"Unknown period: '{period_str}'. Use YYYY-MM, YYYY, this-month, "
            "last-month, this-year or last-year"
        )
    year = int(match.group(1))
    if match.group(2) is None:
        return Period(year=year)
    month = int(match.group(2))
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12 (got {month})")
    return Period(year=year, month=month)
