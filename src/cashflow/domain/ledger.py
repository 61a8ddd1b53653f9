"""Ledger domain service: entries, installment schedules and expenses."""

import logging
from datetime import date, datetime, timedelta
from decimal import Decimal, ROUND_DOWN
from typing import Optional, Sequence

from cashflow.database.base import Database
from cashflow.domain.entities import (
    CatalogItem,
    Client,
    EntryStatus,
    Expense,
    ExpenseType,
    InstallmentSchedule,
    ItemKind,
    LedgerEntry,
    ScheduleSummary,
    ScheduleType,
)
from cashflow.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    client_not_found,
    entry_already_scheduled,
    entry_settled_by_schedule,
    entry_not_found,
    item_not_found,
    schedule_not_found,
)

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
DEFAULT_DUE_DAYS = 30
DEFAULT_INTERVAL_DAYS = 30


def default_due_date(entry_date: date) -> date:
    """Default due date of a new entry: 30 days after its date."""
    return entry_date + timedelta(days=DEFAULT_DUE_DAYS)


def distribute_amount(total: Decimal, count: int) -> list[Decimal]:
    """Split ``total`` into ``count`` cent-exact shares.

    Every share is the total divided evenly and truncated to cents; the last
    share absorbs the remainder so the shares always sum to ``total``.

    Raises:
        ValidationError: If count is smaller than 1 or total is negative
    """
    if count < 1:
        raise ValidationError(f"Installment count must be at least 1, got {count}")
    if total < 0:
        raise ValidationError(f"Amount must not be negative, got {total}")

    total = Decimal(total).quantize(CENT)
    base = (total / count).quantize(CENT, rounding=ROUND_DOWN)
    shares = [base] * count
    shares[-1] = total - base * (count - 1)
    return shares


def _installment_plan(
    amount: Decimal, installments_total: int, first_due_date: date, interval_days: int
) -> list[tuple[date, Decimal]]:
    """(due_date, amount) per installment; installment i is due first + i * interval."""
    if first_due_date is None:
        raise ValidationError("First installment due date is required")
    if interval_days < 1:
        raise ValidationError(f"Interval must be at least 1 day, got {interval_days}")
    amounts = distribute_amount(amount, installments_total)
    return [
        (first_due_date + timedelta(days=index * interval_days), share)
        for index, share in enumerate(amounts)
    ]


def schedule_summary(schedules: Sequence[InstallmentSchedule]) -> Optional[ScheduleSummary]:
    """Summarize paid/pending counts of one entry's schedule rows."""
    if not schedules:
        return None

    total = len(schedules)
    paid = sum(1 for s in schedules if s.status == EntryStatus.PAID)
    pending = total - paid
    schedule_type = schedules[0].schedule_type

    if schedule_type == ScheduleType.INSTALLMENT:
        type_label = f"{total}x"
    elif schedule_type == ScheduleType.MONTHLY_PACKAGE:
        type_label = f"{total} month{'s' if total != 1 else ''}"
    else:
        type_label = ""

    counts = f"{paid} paid / {pending} pending"
    summary = f"{type_label} - {counts}" if type_label else counts
    return ScheduleSummary(
        total=total,
        paid=paid,
        pending=pending,
        schedule_type=schedule_type,
        type_label=type_label,
        summary=summary,
    )


class LedgerService:
    """Service for recording entries, schedules and expenses."""

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    # Clients and catalog
    def create_client(self, name: str, phone: Optional[str] = None) -> int:
        """Create a client.

        Raises:
            ValidationError: If name is empty
        """
        if not name or not name.strip():
            raise ValidationError("Client name must not be empty")
        return self.db.create_client(name.strip(), phone)

    def list_clients(self) -> list[Client]:
        return self.db.list_clients()

    def create_catalog_item(self, name: str, kind: ItemKind = ItemKind.SERVICE) -> int:
        """Create a service or product.

        Raises:
            ValidationError: If name is empty or kind is unknown
        """
        if not name or not name.strip():
            raise ValidationError("Item name must not be empty")
        try:
            kind = ItemKind(kind)
        except ValueError:
            raise ValidationError(f"Unknown item kind '{kind}'")
        return self.db.create_catalog_item(name.strip(), kind)

    def list_catalog_items(self) -> list[CatalogItem]:
        return self.db.list_catalog_items()

    # Entries
    def create_entry(
        self,
        amount: Decimal,
        entry_date: date,
        due_date: Optional[date] = None,
        status: EntryStatus = EntryStatus.PENDING,
        payment_date: Optional[date] = None,
        client_id: Optional[int] = None,
        item_id: Optional[int] = None,
        description: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Record an income entry.

        A paid entry without payment date is considered paid on its own date;
        a pending entry never keeps a payment date.

        Args:
            amount: Entry amount (non-negative)
            entry_date: Event date
            due_date: Optional due date
            status: Paid or pending
            payment_date: Payment date for paid entries
            client_id: Optional client ID
            item_id: Optional catalog item ID
            description: Optional description
            notes: Optional notes

        Returns:
            Entry ID

        Raises:
            ValidationError: If amount is negative or status is unknown
            NotFoundError: If client or item doesn't exist
        """
        self._check_entry(amount, client_id, item_id)
        try:
            status = EntryStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown entry status '{status}'")

        if status == EntryStatus.PAID:
            payment_date = payment_date or entry_date
        else:
            payment_date = None

        entry_id = self.db.create_entry(
            amount=amount,
            entry_date=entry_date,
            status=status,
            due_date=due_date,
            payment_date=payment_date,
            client_id=client_id,
            item_id=item_id,
            description=description,
            notes=notes,
        )
        logger.info("Created %s entry %d of %s", status.value, entry_id, amount)
        return entry_id

    def create_entry_with_schedules(
        self,
        amount: Decimal,
        entry_date: date,
        installments_total: int,
        first_due_date: date,
        interval_days: int = DEFAULT_INTERVAL_DAYS,
        schedule_type: ScheduleType = ScheduleType.INSTALLMENT,
        due_date: Optional[date] = None,
        client_id: Optional[int] = None,
        item_id: Optional[int] = None,
        description: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> tuple[int, list[int]]:
        """Record a pending entry already split into installments.

        Everything is validated before anything is written, and the entry and
        its schedule rows are stored together, so a rejected split never
        leaves a standalone entry behind.

        Returns:
            (entry ID, schedule IDs in installment order)

        Raises:
            ValidationError: If amount, installment count, interval or
                schedule type is invalid
            NotFoundError: If client or item doesn't exist
        """
        self._check_entry(amount, client_id, item_id)
        installments = _installment_plan(
            amount, installments_total, first_due_date, interval_days
        )
        try:
            schedule_type = ScheduleType(schedule_type)
        except ValueError:
            raise ValidationError(f"Unknown schedule type '{schedule_type}'")

        entry_id, schedule_ids = self.db.create_scheduled_entry(
            amount=amount,
            entry_date=entry_date,
            schedule_type=schedule_type,
            installments=installments,
            due_date=due_date,
            client_id=client_id,
            item_id=item_id,
            description=description,
            notes=notes,
        )
        logger.info(
            "Created entry %d of %s in %d installments", entry_id, amount, len(schedule_ids)
        )
        return entry_id, schedule_ids

    def _check_entry(
        self, amount: Decimal, client_id: Optional[int], item_id: Optional[int]
    ) -> None:
        if amount < 0:
            raise ValidationError(f"Amount must not be negative, got {amount}")
        if client_id is not None and self.db.get_client(client_id) is None:
            raise NotFoundError(client_not_found(client_id))
        if item_id is not None and self.db.get_catalog_item(item_id) is None:
            raise NotFoundError(item_not_found(item_id))

    def get_entry(self, entry_id: int) -> LedgerEntry:
        """Get entry by ID.

        Raises:
            NotFoundError: If entry doesn't exist
        """
        entry = self.db.get_entry(entry_id)
        if entry is None:
            raise NotFoundError(entry_not_found(entry_id))
        return entry

    def list_entries(
        self,
        status: Optional[EntryStatus] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[LedgerEntry]:
        return self.db.list_entries(status=status, start_date=start_date, end_date=end_date)

    def mark_entry_paid(self, entry_id: int, payment_date: Optional[date] = None) -> None:
        """Mark an entry paid on ``payment_date`` (defaults to today).

        Only for entries without installments; a scheduled entry is settled by
        paying its last installment.

        Raises:
            NotFoundError: If entry doesn't exist
            ConflictError: If the entry owns schedule rows
        """
        self._get_unscheduled_entry(entry_id)
        payment_date = payment_date or date.today()
        self.db.update_entry_payment(entry_id, EntryStatus.PAID, payment_date)
        logger.info("Marked entry %d paid on %s", entry_id, payment_date)

    def mark_entry_pending(self, entry_id: int) -> None:
        """Revert an entry to pending, clearing its payment date.

        Raises:
            NotFoundError: If entry doesn't exist
            ConflictError: If the entry owns schedule rows
        """
        self._get_unscheduled_entry(entry_id)
        self.db.update_entry_payment(entry_id, EntryStatus.PENDING, None)
        logger.info("Marked entry %d pending", entry_id)

    def _get_unscheduled_entry(self, entry_id: int) -> LedgerEntry:
        entry = self.get_entry(entry_id)
        if self.db.list_schedules(entry_id):
            raise ConflictError(entry_settled_by_schedule(entry_id))
        return entry

    # Schedules
    def create_schedules(
        self,
        entry_id: int,
        installments_total: int,
        first_due_date: date,
        interval_days: int = DEFAULT_INTERVAL_DAYS,
        schedule_type: ScheduleType = ScheduleType.INSTALLMENT,
    ) -> list[int]:
        """Split an entry into pending installments.

        Installment i (0-based) is due ``first_due_date + i * interval_days``;
        amounts come from distribute_amount over the entry amount.

        Returns:
            Created schedule IDs in installment order

        Raises:
            NotFoundError: If entry doesn't exist
            ValidationError: If installments_total or interval_days is below 1
            ConflictError: If the entry already has schedule rows
        """
        entry = self.get_entry(entry_id)
        installments = _installment_plan(
            entry.amount, installments_total, first_due_date, interval_days
        )

        existing = self.db.list_schedules(entry_id)
        if existing:
            raise ConflictError(entry_already_scheduled(entry_id, len(existing)))

        ids = self.db.create_schedules(entry_id, ScheduleType(schedule_type), installments)
        logger.info("Created %d installments for entry %d", len(ids), entry_id)
        return ids

    def list_schedules(self, entry_id: Optional[int] = None) -> list[InstallmentSchedule]:
        return self.db.list_schedules(entry_id)

    def mark_schedule_paid(self, schedule_id: int, paid_at: Optional[datetime] = None) -> None:
        """Mark one installment paid.

        When this settles the last pending installment, the owning entry is
        marked paid on the same day.

        Raises:
            NotFoundError: If schedule row doesn't exist
        """
        schedule = self.db.get_schedule(schedule_id)
        if schedule is None:
            raise NotFoundError(schedule_not_found(schedule_id))

        paid_at = paid_at or datetime.now()
        self.db.update_schedule_payment(schedule_id, EntryStatus.PAID, paid_at)
        logger.info("Marked schedule %d paid at %s", schedule_id, paid_at)

        siblings = self.db.list_schedules(schedule.entry_id)
        if all(s.status == EntryStatus.PAID for s in siblings):
            self.db.update_entry_payment(schedule.entry_id, EntryStatus.PAID, paid_at.date())
            logger.info("Entry %d fully settled", schedule.entry_id)

    # Expenses
    def create_expense(
        self,
        value: Decimal,
        expense_date: date,
        category: str = "other",
        expense_type: ExpenseType = ExpenseType.VARIABLE,
        status: EntryStatus = EntryStatus.PAID,
        notes: Optional[str] = None,
    ) -> int:
        """Record an expense.

        Raises:
            ValidationError: If value is negative or expense type is unknown
        """
        if value < 0:
            raise ValidationError(f"Expense value must not be negative, got {value}")
        try:
            expense_type = ExpenseType(expense_type)
        except ValueError:
            raise ValidationError(f"Unknown expense type '{expense_type}'")
        expense_id = self.db.create_expense(
            value=value,
            expense_date=expense_date,
            category=category,
            expense_type=expense_type,
            status=EntryStatus(status),
            notes=notes,
        )
        logger.info("Created expense %d of %s", expense_id, value)
        return expense_id

    def list_expenses(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[Expense]:
        return self.db.list_expenses(start_date=start_date, end_date=end_date)
