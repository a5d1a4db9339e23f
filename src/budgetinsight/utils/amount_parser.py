"""Amount parsing utilities."""

import math
import re


def parse_amount(amount_str: str) -> float:
    """Parse an amount string into a float.

    Handles "123.45", "$123.45", "-$123.45", "1,234.56" and "(123.45)"
    (negative in parentheses).

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    cleaned = re.sub(r"[$€£¥,\s]", "", amount_str)
    try:
        amount = float(cleaned)
    except ValueError:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if math.isnan(amount) or math.isinf(amount):
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if is_negative else amount
