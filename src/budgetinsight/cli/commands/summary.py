"""Spending summary command."""

import click
from budgetinsight.domain.insights import generate_insights
from budgetinsight.domain.spending import BudgetService
from budgetinsight.domain.transaction import TransactionService
from budgetinsight.cli.error_handling import handle_domain_error
from budgetinsight.utils.date_parser import parse_date


@click.command("summary")
@click.option(
    "--date",
    "reference",
    default="today",
    help="Any date inside the month to summarize (YYYY-MM-DD or 'today')",
)
@click.pass_context
def summary(ctx, reference: str):
    """Summarize a month: income, expenses, budgets and insights.

    Budget spend is recomputed from all stored transactions and saved.
    """
    db = ctx.obj["db"]
    try:
        reference_date = parse_date(reference)
    except ValueError as e:
        handle_domain_error(ctx, e)

    transactions = TransactionService(db).get_all_transactions()
    budget_service = BudgetService(db)
    result = budget_service.refresh(transactions, reference_date)
    budgets = budget_service.get_budgets()

    click.echo(f"\nSummary for {reference_date:%B %Y}")
    click.echo("-" * 50)
    click.echo(f"{'Income':<30} ${result.total_income:>15,.2f}")
    click.echo(f"{'Expenses':<30} ${result.total_expenses:>15,.2f}")
    click.echo(f"{'Net cash flow':<30} ${result.net_cash_flow:>15,.2f}")
    click.echo(f"{'Savings rate':<30} {result.savings_rate:>15.1f}%")
    click.echo(f"{'vs. previous month':<30} {result.month_over_month:>+15.1f}%")

    if result.category_breakdown:
        click.echo("\nBy category:")
        for category, amount in sorted(
            result.category_breakdown.items(), key=lambda item: (-item[1], item[0].value)
        ):
            click.echo(f"  {category.value:<28} ${amount:>15,.2f}")

    insights = generate_insights(budgets, transactions, result)
    if insights:
        click.echo("\nInsights:")
        for insight in insights:
            click.echo(f"  [{insight.impact.value}] {insight.title}: {insight.message}")


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)
