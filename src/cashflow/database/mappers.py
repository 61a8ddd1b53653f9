"""Mapper functions to convert SQLAlchemy models into domain entities.

Status and type columns are stored as plain strings and become enums here,
so an unknown value fails once, at the boundary.
"""

from decimal import Decimal
from typing import Optional

from cashflow.domain import entities as domain
from cashflow.database.models import (
    Client as ORMClient,
    CatalogItem as ORMCatalogItem,
    LedgerEntry as ORMLedgerEntry,
    InstallmentSchedule as ORMInstallmentSchedule,
    Expense as ORMExpense,
)


def _decimal(value) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def client_to_domain(orm_client: ORMClient) -> domain.Client:
    """Convert SQLAlchemy Client model to domain Client entity."""
    return domain.Client(
        id=orm_client.id,
        name=orm_client.name,
        phone=orm_client.phone,
        created_at=orm_client.created_at,
    )


def catalog_item_to_domain(orm_item: ORMCatalogItem) -> domain.CatalogItem:
    """Convert SQLAlchemy CatalogItem model to domain CatalogItem entity."""
    return domain.CatalogItem(
        id=orm_item.id,
        name=orm_item.name,
        kind=domain.ItemKind(orm_item.kind),
        created_at=orm_item.created_at,
    )


def entry_to_domain(orm_entry: ORMLedgerEntry) -> domain.LedgerEntry:
    """Convert SQLAlchemy LedgerEntry model to domain LedgerEntry entity."""
    return domain.LedgerEntry(
        id=orm_entry.id,
        amount=_decimal(orm_entry.amount),
        status=domain.EntryStatus(orm_entry.status),
        date=orm_entry.date,
        due_date=orm_entry.due_date,
        payment_date=orm_entry.payment_date,
        client_id=orm_entry.client_id,
        item_id=orm_entry.item_id,
        description=orm_entry.description,
        notes=orm_entry.notes,
        created_at=orm_entry.created_at,
    )


def schedule_to_domain(orm_schedule: ORMInstallmentSchedule) -> domain.InstallmentSchedule:
    """Convert SQLAlchemy InstallmentSchedule model to domain entity."""
    return domain.InstallmentSchedule(
        id=orm_schedule.id,
        entry_id=orm_schedule.entry_id,
        schedule_type=domain.ScheduleType(orm_schedule.schedule_type),
        installment_number=orm_schedule.installment_number,
        installments_total=orm_schedule.installments_total,
        due_date=orm_schedule.due_date,
        status=domain.EntryStatus(orm_schedule.status),
        amount=_decimal(orm_schedule.amount),
        paid_at=orm_schedule.paid_at,
    )


def expense_to_domain(orm_expense: ORMExpense) -> domain.Expense:
    """Convert SQLAlchemy Expense model to domain Expense entity."""
    return domain.Expense(
        id=orm_expense.id,
        value=_decimal(orm_expense.value),
        date=orm_expense.date,
        category=orm_expense.category,
        expense_type=domain.ExpenseType(orm_expense.expense_type),
        status=domain.EntryStatus(orm_expense.status),
        notes=orm_expense.notes,
    )


def unpaid_schedule_row_to_domain(
    orm_schedule: ORMInstallmentSchedule,
) -> domain.UnpaidScheduleRow:
    """Flatten a schedule row and its owning entry, client and item."""
    entry: Optional[ORMLedgerEntry] = orm_schedule.entry
    client = entry.client if entry is not None else None
    item = entry.item if entry is not None else None
    return domain.UnpaidScheduleRow(
        schedule=schedule_to_domain(orm_schedule),
        entry_amount=_decimal(entry.amount) if entry is not None else _decimal(orm_schedule.amount),
        entry_description=entry.description if entry is not None else None,
        client_name=client.name if client is not None else None,
        client_phone=client.phone if client is not None else None,
        item_name=item.name if item is not None else None,
    )


def unsettled_entry_row_to_domain(orm_entry: ORMLedgerEntry) -> domain.UnsettledEntryRow:
    """Flatten an entry and its client and item."""
    client = orm_entry.client
    item = orm_entry.item
    return domain.UnsettledEntryRow(
        entry=entry_to_domain(orm_entry),
        client_name=client.name if client is not None else None,
        client_phone=client.phone if client is not None else None,
        item_name=item.name if item is not None else None,
    )
