"""Expense commands."""

from datetime import date

import click

from cashflow.cli.date_options import format_money, resolve_cli_amount, resolve_cli_date
from cashflow.cli.error_handling import handle_domain_error
from cashflow.domain.entities import ExpenseType
from cashflow.domain.errors import DomainError
from cashflow.domain.ledger import LedgerService


@click.group("expense")
def expense_group():
    """Manage expenses."""
    pass


@expense_group.command("add")
@click.argument("value")
@click.option("--date", "expense_date", help="Expense date (default today)")
@click.option("--category", default="other", show_default=True, help="Expense category")
@click.option(
    "--type",
    "expense_type",
    type=click.Choice([t.value for t in ExpenseType]),
    default=ExpenseType.VARIABLE.value,
    show_default=True,
    help="Fixed or variable expense",
)
@click.option("--notes", help="Notes")
@click.pass_context
def add_expense(ctx, value: str, expense_date: str | None, category: str, expense_type: str, notes: str | None):
    """Record an expense.

    Examples:
        cashflow expense add 1200 --category rent --type fixed
    """
    service = LedgerService(ctx.obj["db"])
    amount = resolve_cli_amount(ctx, value)
    when = resolve_cli_date(ctx, expense_date, "date", default=date.today())
    try:
        expense_id = service.create_expense(
            value=amount,
            expense_date=when,
            category=category,
            expense_type=ExpenseType(expense_type),
            notes=notes,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created expense {expense_id} of {format_money(amount)}")


@expense_group.command("list")
@click.option("--start-date", help="Start date")
@click.option("--end-date", help="End date")
@click.pass_context
def list_expenses(ctx, start_date: str | None, end_date: str | None):
    """List expenses."""
    service = LedgerService(ctx.obj["db"])
    start = resolve_cli_date(ctx, start_date, "start date")
    end = resolve_cli_date(ctx, end_date, "end date")
    expenses = service.list_expenses(start_date=start, end_date=end)
    if not expenses:
        click.echo("No expenses found.")
        return

    click.echo("\nExpenses:")
    click.echo("-" * 70)
    for item in expenses:
        click.echo(
            f"ID: {item.id:4d} | {str(item.date):<10} | {format_money(item.value):>12} | "
            f"{item.category:<15} | {item.expense_type.value}"
        )


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(expense_group)
