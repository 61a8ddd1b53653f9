"""Tests for Database interface returning domain models."""

import pytest
from datetime import date, datetime
from decimal import Decimal
from sqlalchemy.exc import IntegrityError, OperationalError

from cashflow.domain import entities
from cashflow.domain.errors import StoreReadError


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_entry_returns_domain_model(self, temp_db):
        """Test that get_entry returns a domain LedgerEntry entity."""
        entry_id = temp_db.create_entry(
            amount=Decimal("42.50"),
            entry_date=date(2025, 3, 1),
            status=entities.EntryStatus.PENDING,
            due_date=date(2025, 3, 31),
        )

        entry = temp_db.get_entry(entry_id)

        assert isinstance(entry, entities.LedgerEntry)
        assert entry.amount == Decimal("42.50")
        assert entry.status == entities.EntryStatus.PENDING
        assert isinstance(entry.created_at, datetime)

    def test_missing_rows_return_none(self, temp_db):
        assert temp_db.get_entry(1) is None
        assert temp_db.get_schedule(1) is None
        assert temp_db.get_client(1) is None
        assert temp_db.get_catalog_item(1) is None

    def test_list_unpaid_schedules_joins_entry(self, temp_db, installment_entry):
        rows = temp_db.list_unpaid_schedules()

        assert len(rows) == 3
        assert all(isinstance(r, entities.UnpaidScheduleRow) for r in rows)
        assert [r.schedule.installment_number for r in rows] == [1, 2, 3]
        assert rows[0].entry_amount == Decimal("900.00")
        assert rows[0].client_name == "Maria Souza"
        assert rows[0].item_name == "Website redesign"
        assert rows[0].entry_description == "Redesign"

    def test_count_paid_schedules_by_entry(self, temp_db, installment_entry):
        entry_id, schedule_ids = installment_entry
        temp_db.update_schedule_payment(
            schedule_ids[0], entities.EntryStatus.PAID, datetime(2025, 3, 20, 9, 0)
        )

        assert temp_db.count_paid_schedules_by_entry({entry_id, 999}) == {entry_id: 1}
        assert temp_db.count_paid_schedules_by_entry(set()) == {}

    def test_list_unsettled_entries_ordered_by_effective_due_date(self, temp_db):
        later = temp_db.create_entry(
            amount=Decimal("1.00"),
            entry_date=date(2025, 1, 1),
            status=entities.EntryStatus.PENDING,
            due_date=date(2025, 5, 1),
        )
        earlier = temp_db.create_entry(
            amount=Decimal("1.00"),
            entry_date=date(2025, 2, 1),
            status=entities.EntryStatus.PENDING,
        )
        temp_db.create_entry(
            amount=Decimal("1.00"),
            entry_date=date(2025, 1, 1),
            status=entities.EntryStatus.PAID,
            payment_date=date(2025, 1, 1),
        )

        rows = temp_db.list_unsettled_entries()

        assert [r.entry.id for r in rows] == [earlier, later]

    def test_schedule_existence_by_entry(self, temp_db, installment_entry):
        entry_id, _ = installment_entry
        plain = temp_db.create_entry(
            amount=Decimal("1.00"), entry_date=date(2025, 1, 1), status=entities.EntryStatus.PENDING
        )

        assert temp_db.schedule_existence_by_entry({entry_id, plain}) == {entry_id}
        assert temp_db.schedule_existence_by_entry([]) == set()

    def test_list_projection_rows_filters_by_status_date(self, temp_db, installment_entry):
        entry_id, schedule_ids = installment_entry
        # Paid in February although due in March: outside a March..April window
        temp_db.update_schedule_payment(
            schedule_ids[0], entities.EntryStatus.PAID, datetime(2025, 2, 28, 23, 0)
        )
        # Paid on the last day of the window
        temp_db.update_schedule_payment(
            schedule_ids[2], entities.EntryStatus.PAID, datetime(2025, 4, 30, 18, 0)
        )
        temp_db.create_expense(
            value=Decimal("5.00"),
            expense_date=date(2025, 4, 30),
            category="supplies",
            expense_type=entities.ExpenseType.VARIABLE,
            status=entities.EntryStatus.PAID,
        )

        rows = temp_db.list_projection_rows(date(2025, 3, 1), date(2025, 4, 30))

        assert {s.id for s in rows.schedules} == {schedule_ids[1], schedule_ids[2]}
        assert [e.id for e in rows.entries] == [entry_id]
        assert len(rows.expenses) == 1

    def test_create_scheduled_entry_stores_both(self, temp_db):
        entry_id, schedule_ids = temp_db.create_scheduled_entry(
            amount=Decimal("50.00"),
            entry_date=date(2025, 3, 1),
            schedule_type=entities.ScheduleType.INSTALLMENT,
            installments=[(date(2025, 3, 10), Decimal("25.00")), (date(2025, 4, 9), Decimal("25.00"))],
        )

        rows = temp_db.list_schedules(entry_id)
        assert [r.id for r in rows] == schedule_ids
        assert [r.installment_number for r in rows] == [1, 2]
        assert {r.installments_total for r in rows} == {2}
        assert temp_db.get_entry(entry_id).status == entities.EntryStatus.PENDING

    def test_create_scheduled_entry_is_all_or_nothing(self, temp_db):
        with pytest.raises(IntegrityError):
            temp_db.create_scheduled_entry(
                amount=Decimal("-50.00"),
                entry_date=date(2025, 3, 1),
                schedule_type=entities.ScheduleType.INSTALLMENT,
                installments=[(date(2025, 3, 10), Decimal("-50.00"))],
            )

        assert temp_db.list_entries() == []
        assert temp_db.list_schedules() == []

    def test_read_failure_raises_store_read_error(self, temp_db, monkeypatch):
        session = temp_db._get_session()

        def broken_query(*args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("database is locked"))

        monkeypatch.setattr(session, "query", broken_query)

        with pytest.raises(StoreReadError, match="list_unpaid_schedules"):
            temp_db.list_unpaid_schedules()
