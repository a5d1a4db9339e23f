"""CLI helpers for resolving allocation categories."""

from __future__ import annotations

import click

from budgetinsight.domain.entities import BudgetAllocation


def resolve_category_or_exit(
    ctx: click.Context, allocation: BudgetAllocation, reference: str
) -> str:
    """Resolve an allocation category by ID, ID prefix or name, or exit with a CLI error."""
    if allocation.find_category(reference) is not None:
        return reference

    wanted = reference.strip().lower()
    by_name = [c for c in allocation.categories if c.name.lower() == wanted]
    if len(by_name) == 1:
        return by_name[0].id

    by_prefix = [c for c in allocation.categories if c.id.startswith(reference)]
    if len(by_prefix) == 1:
        return by_prefix[0].id

    if len(by_name) > 1 or len(by_prefix) > 1:
        click.echo(f"Error: '{reference}' matches more than one category; use its ID", err=True)
    else:
        click.echo(f"Error: Category '{reference}' not found", err=True)
    ctx.exit(1)
