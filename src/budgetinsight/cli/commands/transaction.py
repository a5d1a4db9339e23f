"""Transaction management commands."""

import json

import click
from budgetinsight.domain.transaction import TransactionService
from budgetinsight.cli.error_handling import handle_domain_error
from budgetinsight.utils.amount_parser import parse_amount
from budgetinsight.utils.date_parser import parse_date, parse_period


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("add")
@click.option(
    "--amount",
    required=True,
    help="Amount; positive for expenses, negative for income (e.g., 42.50 or -3000)",
)
@click.option(
    "--date",
    "txn_date",
    default="today",
    help="Transaction date (YYYY-MM-DD or 'today', 'yesterday')",
)
@click.option("--merchant", help="Merchant name")
@click.option(
    "--category",
    "categories",
    multiple=True,
    help="Category label (repeatable; the first one decides the budget category)",
)
@click.option("--account", default="manual", help="Account reference")
@click.option("--pending", is_flag=True, help="Mark the transaction as pending")
@click.option("--id", "transaction_id", help="Unique transaction ID (generated if not provided)")
@click.pass_context
def add_transaction(
    ctx,
    amount: str,
    txn_date: str,
    merchant: str | None,
    categories: tuple[str, ...],
    account: str,
    pending: bool,
    transaction_id: str | None,
):
    """Add a transaction manually.

    Examples:
        budgetinsight transaction add --amount 23.40 --merchant "Joe's" --category "Food and Drink"
        budgetinsight transaction add --amount -3000 --date 2025-03-01 --category Payroll
    """
    service = TransactionService(ctx.obj["db"])
    try:
        txn = service.create_transaction(
            amount=parse_amount(amount),
            date=parse_date(txn_date),
            account_id=account,
            merchant_name=merchant,
            category=categories,
            pending=pending,
            transaction_id=transaction_id,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {txn.id}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Amount: ${txn.amount:,.2f}")
    if merchant:
        click.echo(f"  Merchant: {merchant}")

    matches = service.find_matching_alerts(txn.amount, txn.date)
    if matches:
        click.echo(f"  {len(matches)} unlinked alert(s) match; link with 'budgetinsight alert link'")


@transaction_group.command("list")
@click.option("--period", help="Limit to a period (YYYY-MM, YYYY, this-month, last-month, ...)")
@click.pass_context
def list_transactions(ctx, period: str | None):
    """List transactions, newest first."""
    service = TransactionService(ctx.obj["db"])
    try:
        selected = parse_period(period) if period else None
    except ValueError as e:
        handle_domain_error(ctx, e)

    transactions = service.list_transactions(selected)
    if not transactions:
        click.echo("No transactions found.")
        return

    for txn in transactions:
        label = txn.primary_category
        flag = " (pending)" if txn.pending else ""
        click.echo(
            f"{txn.date} | {txn.amount:>10,.2f} | {(txn.merchant_name or ''):<24s} | "
            f"{label:<20s} | {txn.id}{flag}"
        )


@transaction_group.command("delete")
@click.argument("transaction_id")
@click.pass_context
def delete_transaction(ctx, transaction_id: str):
    """Delete a transaction."""
    service = TransactionService(ctx.obj["db"])
    try:
        service.delete_transaction(transaction_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {transaction_id}")


@transaction_group.command("import")
@click.argument("json_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def import_transactions(ctx, json_file: str):
    """Import a JSON array of transactions.

    Each record has id, accountId, amount, date, and optionally merchantName,
    category (list of labels) and pending.
    """
    service = TransactionService(ctx.obj["db"])
    try:
        with open(json_file, "r") as f:
            records = json.load(f)
    except json.JSONDecodeError as e:
        click.echo(f"Error: Could not parse {json_file}: {e}", err=True)
        ctx.exit(1)

    if not isinstance(records, list):
        click.echo("Error: Expected a JSON array of transactions", err=True)
        ctx.exit(1)

    try:
        count = service.import_transactions(records)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Imported {count} transactions")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
