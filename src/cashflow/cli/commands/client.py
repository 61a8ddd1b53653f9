"""Client and catalog item commands."""

import click

from cashflow.cli.error_handling import handle_domain_error
from cashflow.domain.entities import ItemKind
from cashflow.domain.errors import DomainError
from cashflow.domain.ledger import LedgerService


@click.group("client")
def client_group():
    """Manage clients."""
    pass


@client_group.command("add")
@click.argument("name")
@click.option("--phone", help="Contact phone number")
@click.pass_context
def add_client(ctx, name: str, phone: str | None):
    """Add a client.

    Examples:
        cashflow client add "Maria Souza" --phone "(11) 98765-4321"
    """
    service = LedgerService(ctx.obj["db"])
    try:
        client_id = service.create_client(name=name, phone=phone)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created client '{name.strip()}' (ID: {client_id})")


@client_group.command("list")
@click.pass_context
def list_clients(ctx):
    """List all clients."""
    service = LedgerService(ctx.obj["db"])
    clients = service.list_clients()
    if not clients:
        click.echo("No clients found.")
        return

    click.echo("\nClients:")
    click.echo("-" * 60)
    for client in clients:
        click.echo(f"ID: {client.id:3d} | {client.name:30s} | {client.phone or ''}")


@click.group("item")
def item_group():
    """Manage services and products."""
    pass


@item_group.command("add")
@click.argument("name")
@click.option(
    "--kind",
    type=click.Choice([k.value for k in ItemKind]),
    default=ItemKind.SERVICE.value,
    show_default=True,
    help="Item kind",
)
@click.pass_context
def add_item(ctx, name: str, kind: str):
    """Add a service or product."""
    service = LedgerService(ctx.obj["db"])
    try:
        item_id = service.create_catalog_item(name=name, kind=ItemKind(kind))
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created {kind} '{name.strip()}' (ID: {item_id})")


@item_group.command("list")
@click.pass_context
def list_items(ctx):
    """List services and products."""
    service = LedgerService(ctx.obj["db"])
    items = service.list_catalog_items()
    if not items:
        click.echo("No items found.")
        return

    click.echo("\nItems:")
    click.echo("-" * 60)
    for item in items:
        click.echo(f"ID: {item.id:3d} | {item.name:30s} | {item.kind.value}")


def register_commands(cli):
    """Register client and item commands with main CLI."""
    cli.add_command(client_group)
    cli.add_command(item_group)
