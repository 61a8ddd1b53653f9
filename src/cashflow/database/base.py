"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Iterable, Optional, Sequence
from datetime import date, datetime
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from cashflow.domain.entities import (
    CatalogItem,
    Client,
    EntryStatus,
    Expense,
    ExpenseType,
    InstallmentSchedule,
    ItemKind,
    LedgerEntry,
    ProjectionRows,
    ScheduleType,
    UnpaidScheduleRow,
    UnsettledEntryRow,
)


class Database(ABC):
    """Abstract database interface for cashflow.

    Read methods raise StoreReadError when the underlying store fails.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Client operations
    @abstractmethod
    def create_client(self, name: str, phone: Optional[str] = None) -> int:
        """Create a client. Returns client ID."""
        pass

    @abstractmethod
    def get_client(self, client_id: int) -> Optional[Client]:
        """Get client by ID."""
        pass

    @abstractmethod
    def list_clients(self) -> list[Client]:
        """List all clients ordered by name."""
        pass

    # Catalog operations
    @abstractmethod
    def create_catalog_item(self, name: str, kind: ItemKind) -> int:
        """Create a catalog item. Returns item ID."""
        pass

    @abstractmethod
    def get_catalog_item(self, item_id: int) -> Optional[CatalogItem]:
        """Get catalog item by ID."""
        pass

    @abstractmethod
    def list_catalog_items(self) -> list[CatalogItem]:
        """List all catalog items ordered by name."""
        pass

    # Entry operations
    @abstractmethod
    def create_entry(
        self,
        amount: Decimal,
        entry_date: date,
        status: EntryStatus,
        due_date: Optional[date] = None,
        payment_date: Optional[date] = None,
        client_id: Optional[int] = None,
        item_id: Optional[int] = None,
        description: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a ledger entry. Returns entry ID."""
        pass

    @abstractmethod
    def get_entry(self, entry_id: int) -> Optional[LedgerEntry]:
        """Get ledger entry by ID."""
        pass

    @abstractmethod
    def list_entries(
        self,
        status: Optional[EntryStatus] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[LedgerEntry]:
        """List entries with optional status and event-date filters."""
        pass

    @abstractmethod
    def update_entry_payment(
        self, entry_id: int, status: EntryStatus, payment_date: Optional[date]
    ) -> None:
        """Set an entry's status and payment date together."""
        pass

    @abstractmethod
    def create_scheduled_entry(
        self,
        amount: Decimal,
        entry_date: date,
        schedule_type: ScheduleType,
        installments: Sequence[tuple[date, Decimal]],
        due_date: Optional[date] = None,
        client_id: Optional[int] = None,
        item_id: Optional[int] = None,
        description: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> tuple[int, list[int]]:
        """Create a pending entry and its schedule rows in one transaction.

        Either both the entry and every schedule row are stored, or nothing is.

        Returns:
            (entry ID, schedule IDs in installment order)
        """
        pass

    # Schedule operations
    @abstractmethod
    def create_schedules(
        self,
        entry_id: int,
        schedule_type: ScheduleType,
        installments: Sequence[tuple[date, Decimal]],
    ) -> list[int]:
        """Create pending schedule rows numbered 1..len(installments).

        Args:
            entry_id: Owning entry ID
            schedule_type: How the entry was split
            installments: (due_date, amount) per installment, in order

        Returns:
            Created schedule IDs in installment order
        """
        pass

    @abstractmethod
    def get_schedule(self, schedule_id: int) -> Optional[InstallmentSchedule]:
        """Get schedule row by ID."""
        pass

    @abstractmethod
    def list_schedules(self, entry_id: Optional[int] = None) -> list[InstallmentSchedule]:
        """List schedule rows, optionally for one entry, by installment number."""
        pass

    @abstractmethod
    def update_schedule_payment(
        self, schedule_id: int, status: EntryStatus, paid_at: Optional[datetime]
    ) -> None:
        """Set a schedule row's status and paid-at timestamp together."""
        pass

    # Expense operations
    @abstractmethod
    def create_expense(
        self,
        value: Decimal,
        expense_date: date,
        category: str,
        expense_type: ExpenseType,
        status: EntryStatus,
        notes: Optional[str] = None,
    ) -> int:
        """Create an expense. Returns expense ID."""
        pass

    @abstractmethod
    def list_expenses(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[Expense]:
        """List expenses with optional date filters."""
        pass

    # Reconciliation reads
    @abstractmethod
    def list_unpaid_schedules(self) -> list[UnpaidScheduleRow]:
        """List schedule rows not yet paid, joined to their entry, by due date."""
        pass

    @abstractmethod
    def count_paid_schedules_by_entry(self, entry_ids: Iterable[int]) -> dict[int, int]:
        """Count paid schedule rows per entry. Entries without any are omitted."""
        pass

    @abstractmethod
    def list_unsettled_entries(self) -> list[UnsettledEntryRow]:
        """List entries not yet paid, ordered by due date falling back to date."""
        pass

    @abstractmethod
    def schedule_existence_by_entry(self, entry_ids: Iterable[int]) -> set[int]:
        """Return the subset of entry_ids owning at least one schedule row."""
        pass

    @abstractmethod
    def list_projection_rows(self, start_date: date, end_date: date) -> ProjectionRows:
        """Fetch rows relevant to a projection window.

        Returns schedule rows paid with paid_at in range or pending with
        due_date in range, entries with date in range, and expenses with
        date in range. Bounds are inclusive calendar days.
        """
        pass
