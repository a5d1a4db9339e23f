"""Budget allocation commands."""

import click
from budgetinsight.domain.allocation import AllocationService, allocation_warning
from budgetinsight.domain.income import IncomeService
from budgetinsight.cli.category_resolution import resolve_category_or_exit
from budgetinsight.cli.error_handling import handle_domain_error


@click.group()
def allocation_group():
    """Split monthly take-home pay into percentage budgets."""
    pass


@allocation_group.command("add")
@click.argument("name")
@click.argument("percentage", type=float)
@click.option("--icon", default="", help="Icon name shown next to the category")
@click.option("--color", default="blue", help="Display color")
@click.pass_context
def add_category(ctx, name: str, percentage: float, icon: str, color: str):
    """Add a category receiving PERCENTAGE of take-home pay.

    Examples:
        budgetinsight allocation add Rent 35
        budgetinsight allocation add "Food & Dining" 15 --icon fork.knife
    """
    service = AllocationService(ctx.obj["db"])
    try:
        category = service.add_category(name, percentage, icon=icon, color=color)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Added category '{category.name}' ({category.percentage:g}%) (ID: {category.id})")
    _echo_warning(service.get_allocation())


@allocation_group.command("set")
@click.argument("category")
@click.argument("percentage", type=float)
@click.pass_context
def set_percentage(ctx, category: str, percentage: float):
    """Change the share of CATEGORY (ID or name)."""
    service = AllocationService(ctx.obj["db"])
    category_id = resolve_category_or_exit(ctx, service.get_allocation(), category)
    try:
        allocation = service.update_category_percentage(category_id, percentage)
    except ValueError as e:
        handle_domain_error(ctx, e)

    updated = allocation.find_category(category_id)
    click.echo(f"Set '{updated.name}' to {updated.percentage:g}%")
    _echo_warning(allocation)


@allocation_group.command("remove")
@click.argument("category")
@click.pass_context
def remove_category(ctx, category: str):
    """Remove CATEGORY (ID or name) from the allocation."""
    service = AllocationService(ctx.obj["db"])
    allocation = service.get_allocation()
    category_id = resolve_category_or_exit(ctx, allocation, category)
    name = allocation.find_category(category_id).name
    try:
        service.remove_category(category_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Removed category '{name}'")


@allocation_group.command("init-defaults")
@click.pass_context
def init_defaults(ctx):
    """Add the default category set."""
    service = AllocationService(ctx.obj["db"])
    allocation = service.create_default_categories()
    click.echo(f"Added default categories ({allocation.total_percentage():g}% allocated)")
    _echo_warning(allocation)


@allocation_group.command("show")
@click.pass_context
def show_allocation(ctx):
    """Show categories with their monthly dollar budgets."""
    db = ctx.obj["db"]
    allocation = AllocationService(db).get_allocation()
    monthly_take_home = IncomeService(db).monthly_take_home()

    if not allocation.categories:
        click.echo("No categories. Use 'budgetinsight allocation add NAME PERCENT'.")
        return

    click.echo(f"\nMonthly take-home: ${monthly_take_home:,.2f}")
    click.echo("-" * 78)
    for category in allocation.categories:
        budget = category.dollar_amount(monthly_take_home)
        click.echo(
            f"{category.id[:8]} | {category.name:<20s} | {category.percentage:6.2f}% | "
            f"${budget:>10,.2f} | spent ${category.current_month_spent:>10,.2f}"
        )
    click.echo("-" * 78)
    click.echo(
        f"{'':8} | {'Emergency buffer':<20s} | {allocation.emergency_buffer_percentage():6.2f}% | "
        f"${allocation.emergency_buffer_amount(monthly_take_home):>10,.2f}"
    )
    click.echo(f"Total allocated: {allocation.total_percentage():.2f}%")
    _echo_warning(allocation)


def _echo_warning(allocation) -> None:
    warning = allocation_warning(allocation)
    if warning:
        click.echo(f"Warning: {warning}", err=True)


def register_commands(cli):
    """Register allocation commands with main CLI."""
    cli.add_command(allocation_group, name="allocation")
