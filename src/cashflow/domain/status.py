"""Visual status classification for entries and schedule rows."""

from datetime import date
from typing import Iterable, Optional, Union

from cashflow.domain.entities import (
    EntryStatus,
    LedgerEntry,
    Severity,
    StatusInfo,
    VisualStatus,
)
from cashflow.domain.errors import ValidationError
from cashflow.utils.date_parser import DateLike, days_until, to_day

ALL = "all"


def _days_label(days: int) -> str:
    return f"{days} day(s)"


def _coerce_status(status: Union[EntryStatus, str]) -> EntryStatus:
    try:
        return EntryStatus(status)
    except ValueError:
        raise ValidationError(f"Unknown entry status '{status}'")


def classify_status(
    status: Union[EntryStatus, str],
    due_date: DateLike,
    payment_date: DateLike,
    today: Optional[date] = None,
) -> StatusInfo:
    """Derive the visual status, label and severity of one record.

    Dates may be dates, datetimes or ISO strings; the time of day is ignored.
    A missing or unparseable due date never counts as overdue.

    Args:
        status: Persisted status (paid or pending)
        due_date: Due date, if any
        payment_date: Payment date, only meaningful when paid
        today: Reference day (defaults to date.today())

    Returns:
        StatusInfo for display

    Raises:
        ValidationError: If status is not a known entry status
    """
    status = _coerce_status(status)
    today = today or date.today()

    if status == EntryStatus.PAID:
        paid_on = to_day(payment_date)
        label = f"Paid on {paid_on:%d/%m}" if paid_on is not None else "Paid"
        return StatusInfo(VisualStatus.PAID, label, Severity.SUCCESS)

    due = to_day(due_date)
    if due is None:
        return StatusInfo(VisualStatus.UPCOMING, "Pending", Severity.WARNING)

    diff_days = days_until(due, today)
    if diff_days > 0:
        return StatusInfo(
            VisualStatus.UPCOMING, f"Due in {_days_label(diff_days)}", Severity.WARNING
        )
    if diff_days == 0:
        return StatusInfo(VisualStatus.UPCOMING, "Due today", Severity.WARNING)
    return StatusInfo(
        VisualStatus.OVERDUE,
        f"Overdue by {_days_label(abs(diff_days))}",
        Severity.DESTRUCTIVE,
    )


def filter_by_visual_status(
    entries: Iterable[LedgerEntry],
    visual_filter: Union[VisualStatus, str],
    today: Optional[date] = None,
) -> list[LedgerEntry]:
    """Keep entries whose derived visual status matches ``visual_filter``.

    Statuses are re-derived without payment dates, so "paid today" and
    "paid earlier" are indistinguishable here. Passing "all" returns the
    entries unchanged.
    """
    if visual_filter == ALL:
        return list(entries)
    try:
        wanted = VisualStatus(visual_filter)
    except ValueError:
        raise ValidationError(f"Unknown status filter '{visual_filter}'")

    today = today or date.today()
    return [
        entry
        for entry in entries
        if classify_status(entry.status, entry.due_date, None, today).visual_status == wanted
    ]
