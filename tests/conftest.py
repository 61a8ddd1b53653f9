"""Shared pytest fixtures for cashflow tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from cashflow.database.factories import create_sqlite_database
from cashflow.domain.ledger import LedgerService
from cashflow.domain.projection import ProjectionService
from cashflow.domain.receivables import ReceivablesService


TODAY = date(2025, 3, 15)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def today():
    """Fixed reference day used across tests."""
    return TODAY


@pytest.fixture
def ledger_service(temp_db):
    """Create a LedgerService with a temporary database."""
    return LedgerService(temp_db)


@pytest.fixture
def receivables_service(temp_db):
    """Create a ReceivablesService with a temporary database."""
    return ReceivablesService(temp_db)


@pytest.fixture
def projection_service(temp_db):
    """Create a ProjectionService with a temporary database."""
    return ProjectionService(temp_db)


@pytest.fixture
def sample_client(ledger_service):
    """Create a sample client and return its ID."""
    return ledger_service.create_client(name="Maria Souza", phone="(11) 98765-4321")


@pytest.fixture
def sample_item(ledger_service):
    """Create a sample service and return its ID."""
    return ledger_service.create_catalog_item(name="Website redesign")


@pytest.fixture
def installment_entry(ledger_service, sample_client, sample_item):
    """Entry of 900.00 split into 3 monthly installments starting on 2025-03-20."""
    entry_id = ledger_service.create_entry(
        amount=Decimal("900.00"),
        entry_date=date(2025, 3, 1),
        due_date=date(2025, 3, 20),
        client_id=sample_client,
        item_id=sample_item,
        description="Redesign",
    )
    schedule_ids = ledger_service.create_schedules(
        entry_id,
        installments_total=3,
        first_due_date=date(2025, 3, 20),
        interval_days=30,
    )
    return entry_id, schedule_ids


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
