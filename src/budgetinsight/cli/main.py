"""Main CLI entry point."""

import logging

import click
from budgetinsight.database.factories import create_sqlite_database
from budgetinsight.domain.tax_tables import DEFAULT_TAX_SCHEDULE, load_tax_schedule
from budgetinsight.domain.errors import DomainError
from budgetinsight.cli.error_handling import handle_domain_error

# Import and register all commands at module level
from budgetinsight.cli.commands import (
    income,
    allocation,
    budget,
    transaction,
    alert,
    summary,
    snapshot,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides BUDGETINSIGHT_DB_PATH environment variable)",
    envvar="BUDGETINSIGHT_DB_PATH",
)
@click.option(
    "--tax-table",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON tax table to use instead of the built-in 2025 tables",
    envvar="BUDGETINSIGHT_TAX_TABLE",
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, tax_table: str | None, verbose: bool):
    """BudgetInsight - take-home pay, budgets and spending insights.

    Computes taxes and take-home pay from your salary, splits take-home pay
    into percentage budgets and tracks spending against them.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            ctx.obj["tax_schedule"] = (
                load_tax_schedule(tax_table) if tax_table else DEFAULT_TAX_SCHEDULE
            )
        except DomainError as e:
            handle_domain_error(ctx, e)

        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
income.register_commands(cli)
allocation.register_commands(cli)
budget.register_commands(cli)
transaction.register_commands(cli)
alert.register_commands(cli)
summary.register_commands(cli)
snapshot.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
