"""Mapper functions to convert between domain entities and JSON documents.

This layer isolates the stored shape (camelCase keys, ISO dates, the layout
the host application already persists) from the domain entities, so either
side can change without touching the other. Every mapper pair is lossless.
"""

from datetime import date, datetime
from typing import Any, Optional

from budgetinsight.domain import entities as domain


def _date_to_json(value: date) -> str:
    return value.isoformat()


def _date_from_json(value: str) -> date:
    if "T" in value:
        return datetime.fromisoformat(value).date()
    return date.fromisoformat(value)


def _labels_from_json(value: Any) -> tuple[str, ...]:
    """Category labels; a single string is one label.

    Raises:
        ValueError: If the value is neither a string nor a list of strings
    """
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,) if value.strip() else ()
    if isinstance(value, (list, tuple)) and all(isinstance(label, str) for label in value):
        return tuple(value)
    raise ValueError(f"category must be a label or a list of labels (got {value!r})")


def income_to_json(income: domain.IncomeProfile) -> dict[str, Any]:
    """Convert IncomeProfile to its JSON document."""
    return {
        "annualSalary": income.annual_salary,
        "pretaxContribution": income.pretax_contribution,
        "federalTax": income.federal_tax,
        "socialSecurityTax": income.social_security_tax,
        "medicareTax": income.medicare_tax,
        "stateTax": income.state_tax,
        "cityTax": income.city_tax,
    }


def income_from_json(data: dict[str, Any]) -> domain.IncomeProfile:
    """Convert a JSON document to IncomeProfile."""
    return domain.IncomeProfile(
        annual_salary=float(data["annualSalary"]),
        pretax_contribution=float(data["pretaxContribution"]),
        federal_tax=float(data.get("federalTax", 0)),
        social_security_tax=float(data.get("socialSecurityTax", 0)),
        medicare_tax=float(data.get("medicareTax", 0)),
        state_tax=float(data.get("stateTax", 0)),
        city_tax=float(data.get("cityTax", 0)),
    )


def budget_category_to_json(category: domain.BudgetCategory) -> dict[str, Any]:
    """Convert BudgetCategory to its JSON document."""
    return {
        "id": category.id,
        "name": category.name,
        "percentage": category.percentage,
        "icon": category.icon,
        "color": category.color,
        "currentMonthSpent": category.current_month_spent,
    }


def budget_category_from_json(data: dict[str, Any]) -> domain.BudgetCategory:
    """Convert a JSON document to BudgetCategory."""
    return domain.BudgetCategory(
        id=data["id"],
        name=data["name"],
        percentage=float(data["percentage"]),
        icon=data.get("icon", ""),
        color=data.get("color", "blue"),
        current_month_spent=float(data.get("currentMonthSpent", 0)),
    )


def allocation_to_json(allocation: domain.BudgetAllocation) -> dict[str, Any]:
    """Convert BudgetAllocation to its JSON document."""
    return {
        "categories": [budget_category_to_json(c) for c in allocation.categories],
        "emergencyBufferId": allocation.emergency_buffer_id,
    }


def allocation_from_json(data: dict[str, Any]) -> domain.BudgetAllocation:
    """Convert a JSON document to BudgetAllocation."""
    return domain.BudgetAllocation(
        categories=tuple(budget_category_from_json(c) for c in data.get("categories", [])),
        emergency_buffer_id=data["emergencyBufferId"],
    )


def budget_to_json(budget: domain.Budget) -> dict[str, Any]:
    """Convert Budget to its JSON document."""
    return {
        "id": budget.id,
        "category": budget.category.value,
        "monthlyLimit": budget.monthly_limit,
        "yearlyLimit": budget.yearly_limit,
        "currentMonthSpent": budget.current_month_spent,
        "currentYearSpent": budget.current_year_spent,
    }


def budget_from_json(data: dict[str, Any]) -> domain.Budget:
    """Convert a JSON document to Budget."""
    return domain.Budget(
        id=data["id"],
        category=domain.TransactionCategory(data["category"]),
        monthly_limit=float(data["monthlyLimit"]),
        yearly_limit=float(data["yearlyLimit"]),
        current_month_spent=float(data.get("currentMonthSpent", 0)),
        current_year_spent=float(data.get("currentYearSpent", 0)),
    )


def transaction_to_json(transaction: domain.Transaction) -> dict[str, Any]:
    """Convert Transaction to its JSON document."""
    return {
        "id": transaction.id,
        "accountId": transaction.account_id,
        "amount": transaction.amount,
        "date": _date_to_json(transaction.date),
        "merchantName": transaction.merchant_name,
        "category": list(transaction.category),
        "pending": transaction.pending,
    }


def transaction_from_json(data: dict[str, Any]) -> domain.Transaction:
    """Convert a JSON document to Transaction.

    Raises:
        KeyError: If a required field is missing
        ValueError: If the date, amount or category cannot be parsed
    """
    return domain.Transaction(
        id=str(data["id"]),
        account_id=str(data.get("accountId", "")),
        amount=float(data["amount"]),
        date=_date_from_json(data["date"]),
        merchant_name=data.get("merchantName"),
        category=_labels_from_json(data.get("category")),
        pending=bool(data.get("pending", False)),
    )


def alert_to_json(alert: domain.TransactionAlert) -> dict[str, Any]:
    """Convert TransactionAlert to its JSON document."""
    return {
        "id": alert.id,
        "emailId": alert.email_id,
        "merchant": alert.merchant,
        "date": _date_to_json(alert.date),
        "amount": alert.amount,
        "rawEmailBody": alert.raw_email_body,
        "receivedAt": alert.received_at.isoformat(),
        "isLinked": alert.is_linked,
    }


def alert_from_json(data: dict[str, Any]) -> domain.TransactionAlert:
    """Convert a JSON document to TransactionAlert."""
    return domain.TransactionAlert(
        id=data["id"],
        email_id=data["emailId"],
        merchant=data["merchant"],
        date=_date_from_json(data["date"]),
        amount=float(data["amount"]),
        raw_email_body=data.get("rawEmailBody", ""),
        received_at=datetime.fromisoformat(data["receivedAt"]),
        is_linked=bool(data.get("isLinked", False)),
    )


def snapshot_to_json(snapshot: domain.PeriodSnapshot) -> dict[str, Any]:
    """Convert PeriodSnapshot to its JSON document."""
    return {
        "id": snapshot.id,
        "year": snapshot.year,
        "month": snapshot.month,
        "takeHome": snapshot.take_home,
        "totalSpending": snapshot.total_spending,
        "savings": snapshot.savings,
        "transactionCount": snapshot.transaction_count,
        "createdAt": snapshot.created_at.isoformat(),
    }


def snapshot_from_json(data: dict[str, Any]) -> domain.PeriodSnapshot:
    """Convert a JSON document to PeriodSnapshot."""
    month: Optional[int] = data.get("month")
    return domain.PeriodSnapshot(
        id=data["id"],
        year=int(data["year"]),
        month=int(month) if month is not None else None,
        take_home=float(data["takeHome"]),
        total_spending=float(data["totalSpending"]),
        savings=float(data["savings"]),
        transaction_count=int(data["transactionCount"]),
        created_at=datetime.fromisoformat(data["createdAt"]),
    )
