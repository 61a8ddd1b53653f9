"""Receivables and projection report commands."""

from datetime import date

import click

from cashflow.cli.date_options import format_money, resolve_cli_date, resolve_cli_month
from cashflow.cli.error_handling import handle_domain_error
from cashflow.domain.entities import ReceivableStatus
from cashflow.domain.errors import DomainError
from cashflow.domain.projection import DEFAULT_WINDOW_SIZE, ProjectionService
from cashflow.domain.receivables import ReceivablesService

STATUS_LABELS = {
    ReceivableStatus.CURRENT: "current",
    ReceivableStatus.OVERDUE: "OVERDUE",
    ReceivableStatus.PARTIAL: "partial",
}


@click.command("receivables")
@click.option("--today", help="Reference day for overdue checks (default today)")
@click.pass_context
def show_receivables(ctx, today: str | None):
    """Show money still owed, oldest due date first."""
    reference = resolve_cli_date(ctx, today, "today", default=date.today())
    try:
        receivables = ReceivablesService(ctx.obj["db"]).compute_receivables(reference)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not receivables:
        click.echo("Nothing to receive.")
        return

    click.echo(f"\nReceivables as of {reference}:")
    click.echo("-" * 100)
    click.echo(
        f"{'Due':<12} {'Client':<20} {'Item':<20} {'Inst.':<7} {'Total':>12} {'Paid':>12}  {'Status':<8}"
    )
    click.echo("-" * 100)
    for r in receivables:
        click.echo(
            f"{str(r.due_date):<12} {r.client_name[:20]:<20} {r.item_name[:20]:<20} "
            f"{f'{r.installment_current}/{r.installments_total}':<7} "
            f"{format_money(r.total_amount):>12} {format_money(r.paid_amount):>12}  {STATUS_LABELS[r.status]:<8}"
        )

    overdue = [r for r in receivables if r.status == ReceivableStatus.OVERDUE]
    click.echo("-" * 100)
    click.echo(f"{len(receivables)} receivable(s), {len(overdue)} overdue")


@click.command("projection")
@click.option("--anchor", help="First month of the window (YYYY-MM, default current month)")
@click.option(
    "--months",
    type=int,
    default=DEFAULT_WINDOW_SIZE,
    show_default=True,
    help="Number of months to project",
)
@click.pass_context
def show_projection(ctx, anchor: str | None, months: int):
    """Show revenue and expenses per month."""
    first_month = resolve_cli_month(ctx, anchor, default=date.today())
    try:
        projection = ProjectionService(ctx.obj["db"]).project_periods(first_month, months)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\n{'Month':<10} {'Revenue':>14} {'Expenses':>14} {'Balance':>14}")
    click.echo("-" * 56)
    for bucket in projection.buckets:
        click.echo(
            f"{bucket.period_label:<10} {format_money(bucket.revenue):>14} "
            f"{format_money(bucket.expense):>14} {format_money(bucket.revenue - bucket.expense):>14}"
        )
    click.echo("-" * 56)
    click.echo(
        f"{'Total':<10} {format_money(projection.total_revenue):>14} "
        f"{format_money(projection.total_expense):>14}"
    )
    for warning in projection.warnings:
        click.echo(f"Warning: {warning}", err=True)


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(show_receivables)
    cli.add_command(show_projection)
