"""Domain model entities for cashflow.

These are pure data classes representing business concepts, independent of
database schema. Store rows are converted into these once, at the boundary,
so the status, receivables and projection logic never deal with loosely
shaped query results.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional

from cashflow.domain.errors import ValidationError


class EntryStatus(str, Enum):
    """Persisted payment status of entries, schedule rows and expenses."""

    PAID = "paid"
    PENDING = "pending"


class ScheduleType(str, Enum):
    """How an entry was split into schedule rows."""

    SINGLE = "single"
    INSTALLMENT = "installment"
    MONTHLY_PACKAGE = "monthly_package"


class ItemKind(str, Enum):
    """Catalog item kind."""

    SERVICE = "service"
    PRODUCT = "product"


class ExpenseType(str, Enum):
    """Expense recurrence type."""

    FIXED = "fixed"
    VARIABLE = "variable"


class VisualStatus(str, Enum):
    """Human-facing status derived at read time, never persisted."""

    PAID = "paid"
    UPCOMING = "upcoming"
    DUE_TODAY = "due_today"
    OVERDUE = "overdue"


class Severity(str, Enum):
    """Display severity attached to a visual status."""

    SUCCESS = "success"
    WARNING = "warning"
    DESTRUCTIVE = "destructive"


class ReceivableStatus(str, Enum):
    """Classification of an outstanding receivable."""

    CURRENT = "current"
    OVERDUE = "overdue"
    PARTIAL = "partial"


class ReceivableSource(str, Enum):
    """Which representation produced a receivable."""

    SCHEDULE = "schedule"
    ENTRY = "entry"


def _require_non_negative(name: str, value: Decimal) -> None:
    if value < 0:
        raise ValidationError(f"{name} must not be negative, got {value}")


@dataclass(frozen=True)
class Client:
    """Client domain entity."""

    id: int
    name: str
    phone: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class CatalogItem:
    """Service or product sold to clients."""

    id: int
    name: str
    kind: ItemKind
    created_at: datetime


@dataclass(frozen=True)
class LedgerEntry:
    """Income movement recorded by the user."""

    id: int
    amount: Decimal
    status: EntryStatus
    date: date
    due_date: Optional[date]
    payment_date: Optional[date]
    client_id: Optional[int]
    item_id: Optional[int]
    description: Optional[str]
    notes: Optional[str]
    created_at: datetime

    def __post_init__(self):
        _require_non_negative("Entry amount", self.amount)

    @property
    def reference_due_date(self) -> date:
        """Due date, falling back to the event date."""
        return self.due_date if self.due_date is not None else self.date


@dataclass(frozen=True)
class InstallmentSchedule:
    """One due/paid slice of a multi-installment entry."""

    id: int
    entry_id: int
    schedule_type: ScheduleType
    installment_number: int
    installments_total: int
    due_date: date
    status: EntryStatus
    amount: Decimal
    paid_at: Optional[datetime]

    def __post_init__(self):
        _require_non_negative("Installment amount", self.amount)
        if self.installments_total < 1:
            raise ValidationError(
                f"installments_total must be at least 1, got {self.installments_total}"
            )
        if not 1 <= self.installment_number <= self.installments_total:
            raise ValidationError(
                f"installment_number {self.installment_number} is outside "
                f"1..{self.installments_total}"
            )


@dataclass(frozen=True)
class Expense:
    """Expense domain entity. Expenses are never installment-tracked."""

    id: int
    value: Decimal
    date: date
    category: str
    expense_type: ExpenseType
    status: EntryStatus
    notes: Optional[str]

    def __post_init__(self):
        _require_non_negative("Expense value", self.value)


@dataclass(frozen=True)
class UnpaidScheduleRow:
    """Unpaid schedule row joined to its owning entry, client and item."""

    schedule: InstallmentSchedule
    entry_amount: Decimal
    entry_description: Optional[str]
    client_name: Optional[str]
    client_phone: Optional[str]
    item_name: Optional[str]


@dataclass(frozen=True)
class UnsettledEntryRow:
    """Unsettled entry joined to its client and item."""

    entry: LedgerEntry
    client_name: Optional[str]
    client_phone: Optional[str]
    item_name: Optional[str]


@dataclass(frozen=True)
class ProjectionRows:
    """Rows touching a projection date range."""

    schedules: tuple[InstallmentSchedule, ...] = ()
    entries: tuple[LedgerEntry, ...] = ()
    expenses: tuple[Expense, ...] = ()


@dataclass(frozen=True)
class StatusInfo:
    """Derived visual status of a single record."""

    visual_status: VisualStatus
    label: str
    severity: Severity


@dataclass(frozen=True)
class Receivable:
    """Classified, deduplicated view of money still owed."""

    id: int
    entry_id: int
    source: ReceivableSource
    client_name: str
    client_phone: str
    item_name: str
    installment_current: int
    installments_total: int
    total_amount: Decimal
    paid_amount: Decimal
    due_date: date
    status: ReceivableStatus


@dataclass(frozen=True)
class PeriodBucket:
    """One calendar month of the projection window."""

    period_key: str
    period_label: str
    start: date
    end: date
    revenue: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")


@dataclass(frozen=True)
class PeriodProjection:
    """Projection result: chronological buckets plus dropped-row warnings."""

    buckets: tuple[PeriodBucket, ...]
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def total_revenue(self) -> Decimal:
        return sum((b.revenue for b in self.buckets), Decimal("0"))

    @property
    def total_expense(self) -> Decimal:
        return sum((b.expense for b in self.buckets), Decimal("0"))


@dataclass(frozen=True)
class ScheduleSummary:
    """Paid/pending overview of an entry's schedule rows."""

    total: int
    paid: int
    pending: int
    schedule_type: ScheduleType
    type_label: str
    summary: str
