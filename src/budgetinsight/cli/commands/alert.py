"""Email alert commands."""

import click
from budgetinsight.domain.transaction import TransactionService
from budgetinsight.cli.error_handling import handle_domain_error
from budgetinsight.utils.amount_parser import parse_amount
from budgetinsight.utils.date_parser import parse_date


@click.group()
def alert_group():
    """Match purchase alerts with entered transactions."""
    pass


@alert_group.command("add")
@click.option("--email-id", required=True, help="Message ID of the alert email")
@click.option("--merchant", required=True, help="Merchant named in the alert")
@click.option("--date", "alert_date", required=True, help="Purchase date")
@click.option("--amount", required=True, help="Purchase amount")
@click.option("--body", default="", help="Raw email body")
@click.pass_context
def add_alert(ctx, email_id: str, merchant: str, alert_date: str, amount: str, body: str):
    """Record a purchase alert."""
    service = TransactionService(ctx.obj["db"])
    try:
        alert = service.create_alert(
            email_id=email_id,
            merchant=merchant,
            date=parse_date(alert_date),
            amount=parse_amount(amount),
            raw_email_body=body,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created alert {alert.id}")


@alert_group.command("list")
@click.pass_context
def list_alerts(ctx):
    """List alerts not yet linked to a transaction."""
    alerts = TransactionService(ctx.obj["db"]).get_unlinked_alerts()
    if not alerts:
        click.echo("No unlinked alerts.")
        return
    for alert in alerts:
        click.echo(f"{alert.date} | {alert.amount:>10,.2f} | {alert.merchant:<24s} | {alert.id}")


@alert_group.command("match")
@click.option("--amount", required=True, help="Transaction amount")
@click.option("--date", "match_date", required=True, help="Transaction date")
@click.pass_context
def match_alerts(ctx, amount: str, match_date: str):
    """Show unlinked alerts for the same amount on the same day."""
    service = TransactionService(ctx.obj["db"])
    try:
        matches = service.find_matching_alerts(parse_amount(amount), parse_date(match_date))
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not matches:
        click.echo("No matching alerts.")
        return
    for alert in matches:
        click.echo(f"{alert.date} | {alert.amount:>10,.2f} | {alert.merchant:<24s} | {alert.id}")


@alert_group.command("link")
@click.argument("alert_id")
@click.argument("transaction_id")
@click.pass_context
def link_alert(ctx, alert_id: str, transaction_id: str):
    """Link ALERT_ID to TRANSACTION_ID."""
    service = TransactionService(ctx.obj["db"])
    try:
        service.link_alert(alert_id, transaction_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Linked alert {alert_id} to transaction {transaction_id}")


def register_commands(cli):
    """Register alert commands with main CLI."""
    cli.add_command(alert_group, name="alert")
