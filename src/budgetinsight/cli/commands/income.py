"""Income and tax commands."""

import click
from budgetinsight.domain.income import IncomeService
from budgetinsight.domain.tax import TaxCalculator
from budgetinsight.cli.error_handling import handle_domain_error
from budgetinsight.utils.amount_parser import parse_amount


def _income_service(ctx) -> IncomeService:
    return IncomeService(ctx.obj["db"], TaxCalculator(ctx.obj["tax_schedule"]))


def _echo_income(income) -> None:
    rows = [
        ("Annual salary", income.annual_salary),
        ("Pre-tax contribution", income.pretax_contribution),
        ("Taxable income", income.taxable_income),
        ("Federal tax", income.federal_tax),
        ("Social Security", income.social_security_tax),
        ("Medicare", income.medicare_tax),
        ("State tax", income.state_tax),
        ("City tax", income.city_tax),
        ("Total tax", income.total_tax),
        ("Annual take-home", income.annual_take_home),
        ("Monthly take-home", income.monthly_take_home),
    ]
    for label, value in rows:
        click.echo(f"  {label:<24} ${value:>14,.2f}")


@click.group()
def income_group():
    """Manage salary and view taxes."""
    pass


@income_group.command("set")
@click.option("--salary", required=True, help="Annual gross salary (e.g., 95000)")
@click.option("--contribution", default="0", help="Annual pre-tax contribution such as 401(k)")
@click.pass_context
def set_income(ctx, salary: str, contribution: str):
    """Set salary and pre-tax contribution and recompute taxes.

    Examples:
        budgetinsight income set --salary 95000
        budgetinsight income set --salary 150000 --contribution 23000
    """
    service = _income_service(ctx)
    try:
        income = service.update_income(parse_amount(salary), parse_amount(contribution))
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo("Income updated:")
    _echo_income(income)


@income_group.command("show")
@click.pass_context
def show_income(ctx):
    """Show the saved income profile and tax breakdown."""
    service = _income_service(ctx)
    income = service.get_income()
    if income is None:
        click.echo("No income set. Use 'budgetinsight income set --salary AMOUNT'.")
        return

    click.echo(f"Income ({ctx.obj['tax_schedule'].name}, {ctx.obj['tax_schedule'].year}):")
    _echo_income(income)
    marginal = service.calculator.marginal_rate(income.taxable_income)
    click.echo(f"  {'Federal marginal rate':<24} {marginal * 100:>14.1f}%")


def register_commands(cli):
    """Register income commands with main CLI."""
    cli.add_command(income_group, name="income")
