"""Map free-text transaction category labels to TransactionCategory."""

from typing import Sequence

from budgetinsight.domain.entities import TransactionCategory
from budgetinsight.domain.errors import ValidationError

# Checked in order against the lower-cased first label; first match wins.
CATEGORY_RULES: tuple[tuple[tuple[str, ...], TransactionCategory], ...] = (
    (("food", "restaurant"), TransactionCategory.FOOD),
    (("shop", "retail"), TransactionCategory.SHOPPING),
    (("transport", "gas"), TransactionCategory.TRANSPORTATION),
    (("entertainment", "recreation"), TransactionCategory.ENTERTAINMENT),
    (("utilities", "telecom"), TransactionCategory.UTILITIES),
    (("healthcare", "medical"), TransactionCategory.HEALTHCARE),
    (("travel",), TransactionCategory.TRAVEL),
    (("income", "payment"), TransactionCategory.INCOME),
)


def categorize(labels: Sequence[str]) -> TransactionCategory:
    """Normalize a transaction's category labels.

    Only the first label is considered. Labels matching no rule, and
    transactions without labels, fall into OTHER.
    """
    if not labels:
        return TransactionCategory.OTHER

    primary = labels[0].lower()
    for keywords, category in CATEGORY_RULES:
        if any(keyword in primary for keyword in keywords):
            return category
    return TransactionCategory.OTHER


def category_from_name(name: str) -> TransactionCategory:
    """Resolve a category by its display name or enum name, case-insensitively.

    Raises:
        ValidationError: If name matches no category
    """
    wanted = name.strip().lower()
    for category in TransactionCategory:
        if wanted in (category.value.lower(), category.name.lower()):
            return category
    raise ValidationError(f"Unknown category '{name}'")
