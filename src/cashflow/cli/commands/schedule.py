"""Installment schedule commands."""

from datetime import date, datetime, time

import click

from cashflow.cli.date_options import format_money, resolve_cli_date
from cashflow.cli.error_handling import handle_domain_error
from cashflow.domain.errors import DomainError
from cashflow.domain.ledger import LedgerService, schedule_summary
from cashflow.domain.status import classify_status


@click.group("schedule")
def schedule_group():
    """Manage installment schedules."""
    pass


@schedule_group.command("list")
@click.argument("entry_id", type=int)
@click.option("--today", help="Reference day for due labels (default today)")
@click.pass_context
def list_schedule(ctx, entry_id: int, today: str | None):
    """List the installments of an entry."""
    service = LedgerService(ctx.obj["db"])
    reference = resolve_cli_date(ctx, today, "today", default=date.today())
    try:
        service.get_entry(entry_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    schedules = service.list_schedules(entry_id)
    summary = schedule_summary(schedules)
    if summary is None:
        click.echo(f"Entry {entry_id} has no installments.")
        return

    click.echo(f"\nEntry {entry_id}: {summary.summary}")
    click.echo("-" * 70)
    for row in schedules:
        info = classify_status(row.status, row.due_date, row.paid_at, reference)
        click.echo(
            f"ID: {row.id:4d} | {row.installment_number}/{row.installments_total} | "
            f"{str(row.due_date):<10} | {format_money(row.amount):>12} | {info.label}"
        )


@schedule_group.command("pay")
@click.argument("schedule_id", type=int)
@click.option("--date", "paid_on", help="Payment date (default now)")
@click.pass_context
def pay_schedule(ctx, schedule_id: int, paid_on: str | None):
    """Mark an installment as paid."""
    service = LedgerService(ctx.obj["db"])
    day = resolve_cli_date(ctx, paid_on, "payment date")
    paid_at = datetime.combine(day, time(12, 0)) if day is not None else None
    try:
        service.mark_schedule_paid(schedule_id, paid_at)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Installment {schedule_id} marked as paid")


def register_commands(cli):
    """Register schedule commands with main CLI."""
    cli.add_command(schedule_group)
