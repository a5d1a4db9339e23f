"""Period snapshot commands."""

import click
from budgetinsight.domain.income import IncomeService
from budgetinsight.domain.snapshots import SnapshotService
from budgetinsight.domain.transaction import TransactionService
from budgetinsight.cli.error_handling import handle_domain_error
from budgetinsight.utils.date_parser import parse_date


@click.group()
def snapshot_group():
    """Record and review monthly and yearly history."""
    pass


@snapshot_group.command("update")
@click.option("--date", "reference", default="today", help="Any date inside the month to record")
@click.pass_context
def update_snapshots(ctx, reference: str):
    """Record (or re-record) the month and year containing --date."""
    db = ctx.obj["db"]
    try:
        reference_date = parse_date(reference)
    except ValueError as e:
        handle_domain_error(ctx, e)

    monthly_take_home = IncomeService(db).monthly_take_home()
    transactions = TransactionService(db).get_all_transactions()
    try:
        monthly, yearly = SnapshotService(db).update_snapshots_if_needed(
            monthly_take_home, transactions, reference_date
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    for snapshot in (monthly, yearly):
        click.echo(
            f"{snapshot.display_name}: spent ${snapshot.total_spending:,.2f} of "
            f"${snapshot.take_home:,.2f}, saved ${snapshot.savings:,.2f}"
        )


@snapshot_group.command("list")
@click.option("--yearly", is_flag=True, help="Show yearly instead of monthly snapshots")
@click.pass_context
def list_snapshots(ctx, yearly: bool):
    """List snapshots, newest first."""
    service = SnapshotService(ctx.obj["db"])
    snapshots = service.get_yearly_snapshots() if yearly else service.get_monthly_snapshots()
    if not snapshots:
        click.echo("No snapshots found.")
        return

    for snapshot in snapshots:
        click.echo(
            f"{snapshot.display_name:<16s} | take-home ${snapshot.take_home:>11,.2f} | "
            f"spent ${snapshot.total_spending:>11,.2f} | saved ${snapshot.savings:>11,.2f} | "
            f"{snapshot.transaction_count:4d} txns | {snapshot.color_status().value}"
        )


def register_commands(cli):
    """Register snapshot commands with main CLI."""
    cli.add_command(snapshot_group, name="snapshot")
