"""Income entry commands."""

from datetime import date

import click

from cashflow.cli.date_options import format_money, resolve_cli_amount, resolve_cli_date
from cashflow.cli.error_handling import handle_domain_error
from cashflow.domain.entities import EntryStatus, ScheduleType, VisualStatus
from cashflow.domain.errors import DomainError
from cashflow.domain.ledger import DEFAULT_INTERVAL_DAYS, LedgerService, default_due_date
from cashflow.domain.status import ALL, classify_status, filter_by_visual_status

STATUS_FILTERS = [ALL, VisualStatus.PAID.value, VisualStatus.UPCOMING.value, VisualStatus.OVERDUE.value]


@click.group("entry")
def entry_group():
    """Manage income entries."""
    pass


@entry_group.command("add")
@click.argument("amount")
@click.option("--date", "entry_date", help="Entry date (YYYY-MM-DD or relative, default today)")
@click.option("--due-date", help="Due date (default: entry date + 30 days)")
@click.option("--client-id", type=int, help="Client ID")
@click.option("--item-id", type=int, help="Service/product ID")
@click.option("--description", help="Description")
@click.option("--notes", help="Notes")
@click.option("--paid", is_flag=True, help="Record the entry as already paid")
@click.option("--installments", type=int, help="Split into N installments")
@click.option("--first-due-date", help="First installment due date (default: due date)")
@click.option(
    "--interval-days",
    type=int,
    default=DEFAULT_INTERVAL_DAYS,
    show_default=True,
    help="Days between installments",
)
@click.option("--monthly", is_flag=True, help="Installments form a monthly package")
@click.pass_context
def add_entry(
    ctx,
    amount: str,
    entry_date: str | None,
    due_date: str | None,
    client_id: int | None,
    item_id: int | None,
    description: str | None,
    notes: str | None,
    paid: bool,
    installments: int | None,
    first_due_date: str | None,
    interval_days: int,
    monthly: bool,
):
    """Record an income entry, optionally split into installments.

    Examples:
        cashflow entry add 300 --client-id 1 --description "Consulting"
        cashflow entry add 900 --installments 3 --first-due-date 2025-02-10
    """
    service = LedgerService(ctx.obj["db"])
    value = resolve_cli_amount(ctx, amount)
    when = resolve_cli_date(ctx, entry_date, "date", default=date.today())
    due = resolve_cli_date(ctx, due_date, "due date", default=default_due_date(when))

    if installments is not None and paid:
        click.echo("Error: --paid cannot be combined with --installments", err=True)
        ctx.exit(1)

    if installments is None:
        try:
            entry_id = service.create_entry(
                amount=value,
                entry_date=when,
                due_date=due,
                status=EntryStatus.PAID if paid else EntryStatus.PENDING,
                client_id=client_id,
                item_id=item_id,
                description=description,
                notes=notes,
            )
        except DomainError as e:
            handle_domain_error(ctx, e)
        click.echo(f"Created entry {entry_id} of {format_money(value)}")
        return

    first_due = resolve_cli_date(ctx, first_due_date, "first due date", default=due)
    try:
        entry_id, ids = service.create_entry_with_schedules(
            amount=value,
            entry_date=when,
            installments_total=installments,
            first_due_date=first_due,
            interval_days=interval_days,
            schedule_type=ScheduleType.MONTHLY_PACKAGE if monthly else ScheduleType.INSTALLMENT,
            due_date=due,
            client_id=client_id,
            item_id=item_id,
            description=description,
            notes=notes,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created entry {entry_id} of {format_money(value)}")
    click.echo(f"Created {len(ids)} installment(s) starting {first_due}")


@entry_group.command("list")
@click.option(
    "--status",
    "status_filter",
    type=click.Choice(STATUS_FILTERS),
    default=ALL,
    show_default=True,
    help="Filter by visual status",
)
@click.option("--today", help="Reference day for due labels (default today)")
@click.pass_context
def list_entries(ctx, status_filter: str, today: str | None):
    """List entries with their payment status."""
    service = LedgerService(ctx.obj["db"])
    reference = resolve_cli_date(ctx, today, "today", default=date.today())

    entries = filter_by_visual_status(service.list_entries(), status_filter, reference)
    if not entries:
        click.echo("No entries found.")
        return

    click.echo(f"\nFound {len(entries)} entr{'ies' if len(entries) != 1 else 'y'}:")
    click.echo("-" * 90)
    click.echo(f"{'ID':<6} {'Date':<12} {'Amount':<14} {'Due':<12} {'Status':<24} {'Description':<20}")
    click.echo("-" * 90)
    for entry in entries:
        info = classify_status(entry.status, entry.due_date, entry.payment_date, reference)
        click.echo(
            f"{entry.id:<6} {str(entry.date):<12} {format_money(entry.amount):<14} "
            f"{str(entry.due_date or ''):<12} {info.label:<24} {(entry.description or '')[:20]:<20}"
        )


@entry_group.command("pay")
@click.argument("entry_id", type=int)
@click.option("--date", "payment_date", help="Payment date (default today)")
@click.pass_context
def pay_entry(ctx, entry_id: int, payment_date: str | None):
    """Mark an entry as paid."""
    service = LedgerService(ctx.obj["db"])
    paid_on = resolve_cli_date(ctx, payment_date, "payment date", default=date.today())
    try:
        service.mark_entry_paid(entry_id, paid_on)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Entry {entry_id} marked as paid on {paid_on}")


@entry_group.command("unpay")
@click.argument("entry_id", type=int)
@click.pass_context
def unpay_entry(ctx, entry_id: int):
    """Revert an entry to pending."""
    service = LedgerService(ctx.obj["db"])
    try:
        service.mark_entry_pending(entry_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Entry {entry_id} marked as pending")


def register_commands(cli):
    """Register entry commands with main CLI."""
    cli.add_command(entry_group)
