"""CLI helpers for date and amount arguments."""

from datetime import date
from decimal import Decimal

import click

from cashflow.utils.amount_parser import parse_amount
from cashflow.utils.date_parser import parse_date, parse_year_month


def resolve_cli_date(ctx, value: str | None, label: str, default: date | None = None) -> date | None:
    """Parse an optional CLI date, exiting with an error if it is invalid."""
    if not value:
        return default
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def resolve_cli_month(ctx, value: str | None, default: date) -> date:
    """Parse an optional YYYY-MM CLI value into the first day of that month."""
    if not value:
        return default.replace(day=1)
    try:
        return parse_year_month(value)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


def resolve_cli_amount(ctx, value: str) -> Decimal:
    """Parse a CLI amount, exiting with an error if it is invalid or negative."""
    try:
        amount = parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid amount: {e}", err=True)
        ctx.exit(1)
    if amount < 0:
        click.echo("Error: Amount must not be negative", err=True)
        ctx.exit(1)
    return amount


def format_money(amount: Decimal) -> str:
    return f"${amount:,.2f}"
