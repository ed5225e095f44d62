"""SQLAlchemy models for ledgerkit database."""

import uuid
from datetime import datetime, UTC
from decimal import Decimal
from sqlalchemy import (
    BigInteger,
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Boolean,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session
from sqlalchemy.pool import StaticPool
from sqlalchemy.types import TypeDecorator

Base = declarative_base()


class Cents(TypeDecorator):
    """Decimal amount stored as a whole number of cents.

    Amounts up to MAX_AMOUNT round-trip exactly, including on SQLite.
    """

    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return int((Decimal(value) * 100).to_integral_value())

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value).scaleb(-2)


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(UTC)


class Account(Base):
    """Chart of accounts model.

    ``seq`` preserves insertion order; ``id`` is the public identifier.
    """

    __tablename__ = "accounts"

    seq = Column(Integer, primary_key=True)
    id = Column(String(36), unique=True, nullable=False, default=_new_id)
    code = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)
    category = Column(String, nullable=False)
    # Back-reference only, no cascade
    parent_id = Column(String(36), nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, nullable=False)

    # Relationships
    lines = relationship("JournalLine", back_populates="account")


class JournalEntry(Base):
    """Journal entry model."""

    __tablename__ = "journal_entries"

    seq = Column(Integer, primary_key=True)
    id = Column(String(36), unique=True, nullable=False, default=_new_id)
    date = Column(Date, nullable=False, index=True)
    description = Column(String, nullable=False)
    is_closed = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, nullable=False)

    # Relationships
    lines = relationship(
        "JournalLine",
        back_populates="entry",
        cascade="all, delete-orphan",
        order_by="JournalLine.position",
    )


class JournalLine(Base):
    """Journal line model, owned by its entry."""

    __tablename__ = "journal_lines"

    seq = Column(Integer, primary_key=True)
    id = Column(String(36), unique=True, nullable=False, default=_new_id)
    journal_entry_id = Column(String(36), ForeignKey("journal_entries.id"), nullable=False)
    account_id = Column(String(36), ForeignKey("accounts.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    debit_amount = Column(Cents(), nullable=False, default=0)
    credit_amount = Column(Cents(), nullable=False, default=0)

    # Relationships
    entry = relationship("JournalEntry", back_populates="lines")
    account = relationship("Account", back_populates="lines")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory.

    In-memory SQLite keeps one shared connection so every thread sees the same
    data.
    """
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        engine = create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    elif database_url.startswith("sqlite"):
        engine = create_engine(
            database_url, echo=False, connect_args={"check_same_thread": False}
        )
    else:
        engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
