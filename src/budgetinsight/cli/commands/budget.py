"""Category budget commands."""

import click
from budgetinsight.domain.categorization import category_from_name
from budgetinsight.domain.spending import BudgetService
from budgetinsight.cli.error_handling import handle_domain_error
from budgetinsight.utils.amount_parser import parse_amount


@click.group()
def budget_group():
    """Manage monthly and yearly category limits."""
    pass


@budget_group.command("list")
@click.pass_context
def list_budgets(ctx):
    """List budgets with spend as of the last summary."""
    budgets = BudgetService(ctx.obj["db"]).get_budgets()
    if not budgets:
        click.echo("No budgets found.")
        return

    click.echo("\nBudgets:")
    click.echo("-" * 78)
    for budget in budgets:
        click.echo(
            f"{budget.category.value:<16s} | month ${budget.current_month_spent:>9,.2f} / "
            f"${budget.monthly_limit:>9,.2f} ({budget.monthly_percentage:5.1f}%) | "
            f"year ${budget.current_year_spent:>10,.2f} / ${budget.yearly_limit:>10,.2f} | "
            f"{budget.status.value}"
        )


@budget_group.command("set-limit")
@click.argument("category")
@click.option("--monthly", required=True, help="Monthly limit")
@click.option("--yearly", help="Yearly limit (defaults to 12 x monthly)")
@click.pass_context
def set_limit(ctx, category: str, monthly: str, yearly: str | None):
    """Set the limits of the budget for CATEGORY.

    Examples:
        budgetinsight budget set-limit "Food & Dining" --monthly 650
        budgetinsight budget set-limit shopping --monthly 300 --yearly 4000
    """
    service = BudgetService(ctx.obj["db"])
    try:
        txn_category = category_from_name(category)
        monthly_limit = parse_amount(monthly)
        yearly_limit = parse_amount(yearly) if yearly else monthly_limit * 12
        budget = service.update_budget_limit(txn_category, monthly_limit, yearly_limit)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"{budget.category.value}: ${budget.monthly_limit:,.2f}/month, "
        f"${budget.yearly_limit:,.2f}/year"
    )


@budget_group.command("init-defaults")
@click.pass_context
def init_defaults(ctx):
    """Replace all budgets with the default limits."""
    budgets = BudgetService(ctx.obj["db"]).create_default_budgets()
    click.echo(f"Created {len(budgets)} default budgets")


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget_group, name="budget")
