"""Receivables domain service."""

import logging
import re
from datetime import date
from decimal import Decimal
from typing import Optional

from cashflow.database.base import Database
from cashflow.domain.entities import (
    Receivable,
    ReceivableSource,
    ReceivableStatus,
    UnpaidScheduleRow,
    UnsettledEntryRow,
)
from cashflow.domain.errors import StoreReadError
from cashflow.utils.date_parser import is_past_due

logger = logging.getLogger(__name__)

DEFAULT_CLIENT_NAME = "Client"
DEFAULT_ITEM_NAME = "Item"


def _digits(phone: Optional[str]) -> str:
    return re.sub(r"\D", "", phone or "")


def classify_installment(
    due_date: date, today: date, paid_siblings: int, installments_total: int
) -> ReceivableStatus:
    """Classify one unpaid schedule row.

    Overdue wins over partial; partial needs more than one installment and
    at least one sibling already paid.
    """
    if is_past_due(due_date, today):
        return ReceivableStatus.OVERDUE
    if paid_siblings > 0 and installments_total > 1:
        return ReceivableStatus.PARTIAL
    return ReceivableStatus.CURRENT


class ReceivablesService:
    """Service for building the deduplicated receivables list."""

    def __init__(self, db: Database):
        """Initialize receivables service.

        Args:
            db: Database instance
        """
        self.db = db

    def compute_receivables(self, today: Optional[date] = None) -> list[Receivable]:
        """Build the classified list of money still owed.

        Unpaid schedule rows are listed per installment. Unsettled entries
        are listed only when they own no schedule row at all, so every entry
        appears through exactly one representation. The result is sorted by
        due date; on ties schedule rows come before standalone entries.

        Args:
            today: Reference day for overdue checks (defaults to date.today())

        Returns:
            List of Receivable

        Raises:
            StoreReadError: If any store read fails
        """
        today = today or date.today()
        try:
            from_schedules = self._schedule_receivables(today)
            standalone = self._standalone_receivables(today)
        except StoreReadError:
            logger.error("Receivables computation aborted by a store read failure")
            raise

        receivables = from_schedules + standalone
        receivables.sort(key=lambda r: r.due_date)
        logger.debug(
            "Computed %d receivables (%d from schedules, %d standalone)",
            len(receivables),
            len(from_schedules),
            len(standalone),
        )
        return receivables

    def _schedule_receivables(self, today: date) -> list[Receivable]:
        rows = self.db.list_unpaid_schedules()
        if not rows:
            return []

        entry_ids = {row.schedule.entry_id for row in rows}
        paid_count_by_entry = self.db.count_paid_schedules_by_entry(entry_ids)
        return [
            self._from_schedule_row(row, paid_count_by_entry.get(row.schedule.entry_id, 0), today)
            for row in rows
        ]

    def _from_schedule_row(
        self, row: UnpaidScheduleRow, paid_count: int, today: date
    ) -> Receivable:
        schedule = row.schedule
        status = classify_installment(
            schedule.due_date, today, paid_count, schedule.installments_total
        )
        paid_amount = paid_count * schedule.amount if paid_count > 0 else Decimal("0")
        return Receivable(
            id=schedule.id,
            entry_id=schedule.entry_id,
            source=ReceivableSource.SCHEDULE,
            client_name=row.client_name or DEFAULT_CLIENT_NAME,
            client_phone=_digits(row.client_phone),
            item_name=row.item_name or row.entry_description or DEFAULT_ITEM_NAME,
            installment_current=schedule.installment_number,
            installments_total=schedule.installments_total,
            total_amount=row.entry_amount,
            paid_amount=paid_amount,
            due_date=schedule.due_date,
            status=status,
        )

    def _standalone_receivables(self, today: date) -> list[Receivable]:
        rows = self.db.list_unsettled_entries()
        if not rows:
            return []

        scheduled = self.db.schedule_existence_by_entry({row.entry.id for row in rows})
        return [
            self._from_entry_row(row, today)
            for row in rows
            if row.entry.id not in scheduled
        ]

    def _from_entry_row(self, row: UnsettledEntryRow, today: date) -> Receivable:
        entry = row.entry
        due_date = entry.reference_due_date
        status = (
            ReceivableStatus.OVERDUE
            if is_past_due(due_date, today)
            else ReceivableStatus.CURRENT
        )
        return Receivable(
            id=entry.id,
            entry_id=entry.id,
            source=ReceivableSource.ENTRY,
            client_name=row.client_name or DEFAULT_CLIENT_NAME,
            client_phone=_digits(row.client_phone),
            item_name=row.item_name or entry.description or DEFAULT_ITEM_NAME,
            installment_current=1,
            installments_total=1,
            total_amount=entry.amount,
            paid_amount=Decimal("0"),
            due_date=due_date,
            status=status,
        )
