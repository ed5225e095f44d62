"""Abstract database interface."""

import threading
from abc import ABC, abstractmethod
from typing import Optional, Sequence
from datetime import date

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerkit.domain.entities import (
    Account,
    AccountType,
    JournalEntry,
    LineInput,
)


class Database(ABC):
    """Abstract database interface for ledgerkit.

    ``lock`` serializes access to the store. Services hold it for the whole of
    each operation so that check-then-write sequences are atomic and reads
    never observe a partially written entry.
    """

    def __init__(self) -> None:
        self.lock = threading.RLock()

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

    @abstractmethod
    def clear(self) -> None:
        """Remove all journal entries and accounts."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        code: str,
        name: str,
        account_type: AccountType,
        category: str,
        parent_id: Optional[str] = None,
    ) -> str:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: str) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def get_account_by_code(self, code: str) -> Optional[Account]:
        """Get account by code."""
        pass

    @abstractmethod
    def list_accounts(self, account_type: Optional[AccountType] = None) -> list[Account]:
        """List accounts in insertion order, optionally filtered by type."""
        pass

    @abstractmethod
    def update_account(
        self, account_id: str, name: Optional[str] = None, category: Optional[str] = None
    ) -> None:
        """Update mutable account fields."""
        pass

    @abstractmethod
    def delete_account(self, account_id: str) -> None:
        """Delete an account."""
        pass

    @abstractmethod
    def get_account_line_count(self, account_id: str) -> int:
        """Get count of journal lines posting to an account."""
        pass

    # Journal entry operations
    @abstractmethod
    def create_journal_entry(
        self, date: date, description: str, lines: Sequence[LineInput]
    ) -> str:
        """Create a journal entry with its lines. Returns entry ID."""
        pass

    @abstractmethod
    def get_journal_entry(self, entry_id: str) -> Optional[JournalEntry]:
        """Get journal entry by ID."""
        pass

    @abstractmethod
    def list_journal_entries(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_id: Optional[str] = None,
    ) -> list[JournalEntry]:
        """List journal entries in insertion order.

        Args:
            start_date: Optional inclusive lower date bound
            end_date: Optional inclusive upper date bound
            account_id: If given, only entries with a line on this account
        """
        pass

    @abstractmethod
    def update_journal_entry(
        self,
        entry_id: str,
        date: Optional[date] = None,
        description: Optional[str] = None,
        lines: Optional[Sequence[LineInput]] = None,
    ) -> None:
        """Update entry fields. When ``lines`` is given they replace the old lines."""
        pass

    @abstractmethod
    def delete_journal_entry(self, entry_id: str) -> None:
        """Delete a journal entry and its lines."""
        pass

    @abstractmethod
    def close_journal_entries(self, through_date: date) -> int:
        """Mark open entries dated on or before ``through_date`` as closed.

        Returns the number of entries that changed.
        """
        pass
