"""Main CLI entry point."""

import logging

import click
from cashflow.database.factories import create_sqlite_database

# Import and register all commands at module level
from cashflow.cli.commands import (
    client,
    entry,
    schedule,
    expense,
    reports,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides CASHFLOW_DB_PATH environment variable)",
    envvar="CASHFLOW_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Cashflow - Small-business cash-flow tracker.

    Record income entries, installments and expenses, and see what is paid,
    what is due, what is overdue and how money will flow in the coming months.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
client.register_commands(cli)
entry.register_commands(cli)
schedule.register_commands(cli)
expense.register_commands(cli)
reports.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
