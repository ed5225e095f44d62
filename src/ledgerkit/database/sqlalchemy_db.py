"""Generic SQLAlchemy database implementation."""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence
from datetime import date, datetime, UTC
from sqlalchemy.orm import Session

from ledgerkit.database.base import Database
from ledgerkit.database.models import (
    Account,
    JournalEntry,
    JournalLine,
    create_session_factory,
)
from ledgerkit.database.mappers import account_to_domain, journal_entry_to_domain
from ledgerkit.domain.entities import (
    Account as DomainAccount,
    AccountType,
    JournalEntry as DomainJournalEntry,
    LineInput,
)
from ledgerkit.domain.errors import (
    AccountNotFoundError,
    EntryNotFoundError,
    account_not_found,
    entry_not_found,
)

logger = logging.getLogger(__name__)


class SQLAlchemyDatabase(Database):
    """SQLAlchemy-based implementation of Database interface."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy database.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite://' for an
                in-memory store, 'sqlite:///path/to.db', etc.)
        """
        super().__init__()
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    @contextmanager
    def _write(self) -> Iterator[Session]:
        """Yield the session and commit, rolling back on any failure."""
        session = self._get_session()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    def clear(self) -> None:
        """Remove all journal entries and accounts."""
        with self._write() as session:
            for entry in session.query(JournalEntry).all():
                session.delete(entry)
            session.flush()
            session.query(Account).delete()
        logger.info("Cleared all accounts and journal entries")

    # Account operations
    def _find_account(self, session: Session, account_id: str) -> Account:
        account = session.query(Account).filter(Account.id == account_id).first()
        if account is None:
            raise AccountNotFoundError(account_not_found(account_id))
        return account

    def create_account(
        self,
        code: str,
        name: str,
        account_type: AccountType,
        category: str,
        parent_id: Optional[str] = None,
    ) -> str:
        """Create a new account. Returns account ID."""
        with self._write() as session:
            account = Account(
                code=code,
                name=name,
                type=AccountType(account_type).value,
                category=category,
                parent_id=parent_id,
            )
            session.add(account)
        return account.id

    def get_account(self, account_id: str) -> Optional[DomainAccount]:
        """Get account by ID."""
        session = self._get_session()
        account = session.query(Account).filter(Account.id == account_id).first()
        if account is None:
            return None
        return account_to_domain(account)

    def get_account_by_code(self, code: str) -> Optional[DomainAccount]:
        """Get account by code."""
        session = self._get_session()
        account = session.query(Account).filter(Account.code == code).first()
        if account is None:
            return None
        return account_to_domain(account)

    def list_accounts(self, account_type: Optional[AccountType] = None) -> list[DomainAccount]:
        """List accounts in insertion order, optionally filtered by type."""
        session = self._get_session()
        query = session.query(Account)
        if account_type is not None:
            query = query.filter(Account.type == AccountType(account_type).value)
        accounts = query.order_by(Account.seq).all()
        return [account_to_domain(acc) for acc in accounts]

    def update_account(
        self, account_id: str, name: Optional[str] = None, category: Optional[str] = None
    ) -> None:
        """Update mutable account fields."""
        with self._write() as session:
            account = self._find_account(session, account_id)
            if name is not None:
                account.name = name
            if category is not None:
                account.category = category
            account.updated_at = datetime.now(UTC)

    def delete_account(self, account_id: str) -> None:
        """Delete an account."""
        with self._write() as session:
            account = self._find_account(session, account_id)
            session.delete(account)

    def get_account_line_count(self, account_id: str) -> int:
        """Get count of journal lines posting to an account."""
        session = self._get_session()
        return session.query(JournalLine).filter(JournalLine.account_id == account_id).count()

    # Journal entry operations
    def _find_entry(self, session: Session, entry_id: str) -> JournalEntry:
        entry = session.query(JournalEntry).filter(JournalEntry.id == entry_id).first()
        if entry is None:
            raise EntryNotFoundError(entry_not_found(entry_id))
        return entry

    @staticmethod
    def _build_lines(lines: Sequence[LineInput]) -> list[JournalLine]:
        return [
            JournalLine(
                account_id=line.account_id,
                position=position,
                debit_amount=line.debit_amount,
                credit_amount=line.credit_amount,
            )
            for position, line in enumerate(lines)
        ]

    def create_journal_entry(
        self, date: date, description: str, lines: Sequence[LineInput]
    ) -> str:
        """Create a journal entry with its lines. Returns entry ID."""
        with self._write() as session:
            entry = JournalEntry(date=date, description=description)
            entry.lines = self._build_lines(lines)
            session.add(entry)
        return entry.id

    def get_journal_entry(self, entry_id: str) -> Optional[DomainJournalEntry]:
        """Get journal entry by ID."""
        session = self._get_session()
        entry = session.query(JournalEntry).filter(JournalEntry.id == entry_id).first()
        if entry is None:
            return None
        return journal_entry_to_domain(entry)

    def list_journal_entries(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_id: Optional[str] = None,
    ) -> list[DomainJournalEntry]:
        """List journal entries in insertion order with optional filters."""
        session = self._get_session()
        query = session.query(JournalEntry)

        if start_date is not None:
            query = query.filter(JournalEntry.date >= start_date)
        if end_date is not None:
            query = query.filter(JournalEntry.date <= end_date)
        if account_id is not None:
            query = query.filter(JournalEntry.lines.any(JournalLine.account_id == account_id))

        entries = query.order_by(JournalEntry.seq).all()
        return [journal_entry_to_domain(entry) for entry in entries]

    def update_journal_entry(
        self,
        entry_id: str,
        date: Optional[date] = None,
        description: Optional[str] = None,
        lines: Optional[Sequence[LineInput]] = None,
    ) -> None:
        """Update entry fields. When ``lines`` is given they replace the old lines."""
        with self._write() as session:
            entry = self._find_entry(session, entry_id)
            if date is not None:
                entry.date = date
            if description is not None:
                entry.description = description
            if lines is not None:
                # delete-orphan cascade removes the previous lines
                entry.lines = self._build_lines(lines)
            entry.updated_at = datetime.now(UTC)

    def delete_journal_entry(self, entry_id: str) -> None:
        """Delete a journal entry and its lines."""
        with self._write() as session:
            entry = self._find_entry(session, entry_id)
            session.delete(entry)

    def close_journal_entries(self, through_date: date) -> int:
        """Mark open entries dated on or before ``through_date`` as closed."""
        with self._write() as session:
            entries = (
                session.query(JournalEntry)
                .filter(JournalEntry.date <= through_date, JournalEntry.is_closed.is_(False))
                .all()
            )
            now = datetime.now(UTC)
            for entry in entries:
                entry.is_closed = True
                entry.updated_at = now
        return len(entries)
