"""Monthly revenue/expense projection service."""

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Optional

from dateutil.relativedelta import relativedelta

from cashflow.database.base import Database
from cashflow.domain.entities import (
    EntryStatus,
    InstallmentSchedule,
    LedgerEntry,
    PeriodBucket,
    PeriodProjection,
)
from cashflow.domain.errors import StoreReadError, ValidationError
from cashflow.utils.date_parser import month_end, month_key, month_start, to_day

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SIZE = 6


def build_month_buckets(anchor: date, window_size: int = DEFAULT_WINDOW_SIZE) -> list[PeriodBucket]:
    """Build ``window_size`` empty consecutive month buckets from ``anchor``'s month.

    Raises:
        ValidationError: If window_size is smaller than 1
    """
    if window_size < 1:
        raise ValidationError(f"Window size must be at least 1, got {window_size}")

    first = month_start(anchor)
    buckets = []
    for offset in range(window_size):
        start = first + relativedelta(months=offset)
        buckets.append(
            PeriodBucket(
                period_key=month_key(start),
                period_label=f"{start:%b}/{start:%y}",
                start=start,
                end=month_end(start),
            )
        )
    return buckets


def schedule_reference_date(schedule: InstallmentSchedule) -> Optional[date]:
    """Paid rows count when paid, pending rows when due."""
    if schedule.status == EntryStatus.PAID:
        return to_day(schedule.paid_at)
    return schedule.due_date


def entry_reference_date(entry: LedgerEntry) -> date:
    """Paid entries count when paid, pending ones when due; both fall back to date."""
    if entry.status == EntryStatus.PAID:
        return entry.payment_date or entry.date
    return entry.due_date or entry.date


class ProjectionService:
    """Service for bucketing ledger rows into calendar months."""

    def __init__(self, db: Database):
        """Initialize projection service.

        Args:
            db: Database instance
        """
        self.db = db

    def project_periods(
        self, anchor: date, window_size: int = DEFAULT_WINDOW_SIZE
    ) -> PeriodProjection:
        """Project revenue and expenses over consecutive months.

        Every schedule row, standalone entry and expense is assigned to the
        single month of its reference date. Entries that own schedule rows are
        carried by those rows only. Rows whose reference date is missing or
        outside the window are left out and reported in ``warnings``.

        Args:
            anchor: Any day in the first month of the window
            window_size: Number of months (default 6)

        Returns:
            PeriodProjection with buckets in chronological order

        Raises:
            ValidationError: If window_size is smaller than 1
            StoreReadError: If any store read fails
        """
        buckets = build_month_buckets(anchor, window_size)
        start, end = buckets[0].start, buckets[-1].end

        try:
            rows = self.db.list_projection_rows(start, end)
            scheduled = self.db.schedule_existence_by_entry({e.id for e in rows.entries})
        except StoreReadError:
            logger.error("Projection %s..%s aborted by a store read failure", start, end)
            raise

        revenue = {b.period_key: Decimal("0") for b in buckets}
        expense = {b.period_key: Decimal("0") for b in buckets}
        warnings: list[str] = []

        def add(totals: dict[str, Decimal], kind: str, row_id: int, ref: Optional[date], amount: Decimal):
            if ref is None:
                warnings.append(f"{kind} {row_id} skipped: no reference date")
                return
            key = month_key(ref)
            if key not in totals:
                warnings.append(f"{kind} {row_id} skipped: {ref.isoformat()} is outside {start}..{end}")
                return
            totals[key] += amount

        for schedule in rows.schedules:
            add(revenue, "Schedule", schedule.id, schedule_reference_date(schedule), schedule.amount)

        for entry in rows.entries:
            if entry.id in scheduled:
                continue
            add(revenue, "Entry", entry.id, entry_reference_date(entry), entry.amount)

        for item in rows.expenses:
            add(expense, "Expense", item.id, item.date, item.value)

        for message in warnings:
            logger.warning(message)

        return PeriodProjection(
            buckets=tuple(
                replace(b, revenue=revenue[b.period_key], expense=expense[b.period_key])
                for b in buckets
            ),
            warnings=tuple(warnings),
        )
