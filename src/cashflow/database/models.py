"""SQLAlchemy models for cashflow database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    CheckConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Client(Base):
    """Client model."""

    __tablename__ = "clients"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    entries = relationship("LedgerEntry", back_populates="client")


class CatalogItem(Base):
    """Service/product catalog model."""

    __tablename__ = "catalog_items"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    kind = Column(String, nullable=False, default="service")
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    entries = relationship("LedgerEntry", back_populates="item")


class LedgerEntry(Base):
    """Income entry model."""

    __tablename__ = "ledger_entries"

    id = Column(Integer, primary_key=True)
    amount = Column(Numeric(12, 2), nullable=False)
    status = Column(String, nullable=False, default="pending")
    date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=True)
    payment_date = Column(Date, nullable=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=True)
    item_id = Column(Integer, ForeignKey("catalog_items.id"), nullable=True)
    description = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (CheckConstraint("amount >= 0", name="ck_entry_amount_non_negative"),)

    # Relationships
    client = relationship("Client", back_populates="entries")
    item = relationship("CatalogItem", back_populates="entries")
    schedules = relationship(
        "InstallmentSchedule", back_populates="entry", cascade="all, delete-orphan"
    )


class InstallmentSchedule(Base):
    """Installment schedule row model."""

    __tablename__ = "installment_schedules"

    id = Column(Integer, primary_key=True)
    entry_id = Column(Integer, ForeignKey("ledger_entries.id"), nullable=False, index=True)
    schedule_type = Column(String, nullable=False, default="installment")
    installment_number = Column(Integer, nullable=False)
    installments_total = Column(Integer, nullable=False)
    due_date = Column(Date, nullable=False)
    status = Column(String, nullable=False, default="pending")
    amount = Column(Numeric(12, 2), nullable=False)
    paid_at = Column(DateTime, nullable=True)

    # Relationships
    entry = relationship("LedgerEntry", back_populates="schedules")


class Expense(Base):
    """Expense model."""

    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True)
    value = Column(Numeric(12, 2), nullable=False)
    date = Column(Date, nullable=False)
    category = Column(String, nullable=False, default="other")
    expense_type = Column(String, nullable=False, default="variable")
    status = Column(String, nullable=False, default="paid")
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
