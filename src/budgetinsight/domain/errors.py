"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


def negative_amount(field_name: str, value: float) -> str:
    """Return message for a negative monetary input."""
    return f"{field_name} cannot be negative (got {value})"


def contribution_exceeds_salary(contribution: float, salary: float) -> str:
    """Return message when pre-tax contribution is larger than salary."""
    return f"Pre-tax contribution ({contribution:,.2f}) cannot exceed salary ({salary:,.2f})"


def percentage_out_of_range(percentage: float) -> str:
    """Return message for a percentage outside [0, 100]."""
    return f"Percentage must be between 0 and 100 (got {percentage})"


def empty_category_name() -> str:
    """Return message for a blank category name."""
    return "Category name cannot be empty"


def category_not_found(category_id: str) -> str:
    """Return message for missing allocation category."""
    return f"Category {category_id} not found"


def budget_not_found(category: str) -> str:
    """Return message for missing budget."""
    return f"No budget found for category '{category}'"


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def duplicate_transaction_id(transaction_id: str) -> str:
    """Return message for duplicate transaction ID."""
    return f"Transaction with id '{transaction_id}' already exists"


def alert_not_found(alert_id: str) -> str:
    """Return message for missing transaction alert."""
    return f"Transaction alert {alert_id} not found"


def invalid_month(month: int) -> str:
    """Return message for a month outside 1..12."""
    return f"Month must be between 1 and 12 (got {month})"


def not_a_number(field_name: str) -> str:
    """Return message for a NaN numeric input."""
    return f"{field_name} must be a number"
