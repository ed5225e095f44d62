"""Domain model entities for ledgerkit.

These are pure data classes representing bookkeeping concepts, independent of
the database schema. Report types are derived views and are never persisted.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Callable, Iterator, Optional, Sequence

# Absolute tolerance used whenever two monetary sums are compared
BALANCE_TOLERANCE = Decimal("0.01")


class AccountType(str, Enum):
    """Account classification that fixes the normal balance side."""

    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    REVENUE = "revenue"
    EXPENSE = "expense"

    @property
    def is_debit_normal(self) -> bool:
        """Assets and expenses grow with debits; everything else with credits."""
        return self in (AccountType.ASSET, AccountType.EXPENSE)

    def signed_balance(self, debit: Decimal, credit: Decimal) -> Decimal:
        """Return the balance of debit/credit totals on this type's normal side."""
        if self.is_debit_normal:
            return debit - credit
        return credit - debit

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


@dataclass(frozen=True)
class Account:
    """Chart of accounts entry."""

    id: str
    code: str
    name: str
    type: AccountType
    category: str
    parent_id: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class JournalLine:
    """One posting of a journal entry.

    ``account_name`` is resolved from ``account_id`` when the line is read.
    """

    id: str
    journal_entry_id: str
    account_id: str
    account_name: Optional[str]
    debit_amount: Decimal
    credit_amount: Decimal


@dataclass(frozen=True)
class JournalEntry:
    """Journal entry domain entity."""

    id: str
    date: date
    description: str
    lines: tuple[JournalLine, ...]
    is_closed: bool
    created_at: datetime
    updated_at: datetime

    @property
    def total_debit(self) -> Decimal:
        return sum((line.debit_amount for line in self.lines), Decimal("0"))

    @property
    def total_credit(self) -> Decimal:
        return sum((line.credit_amount for line in self.lines), Decimal("0"))


@dataclass(frozen=True)
class LineInput:
    """Unvalidated line as submitted by a caller."""

    account_id: str
    debit_amount: Decimal = Decimal("0")
    credit_amount: Decimal = Decimal("0")


@dataclass(frozen=True)
class TrialBalanceRow:
    """Debit and credit totals for a single account."""

    account_id: str
    account_code: str
    account_name: str
    account_type: AccountType
    debit: Decimal
    credit: Decimal


@dataclass(frozen=True)
class TrialBalance:
    """Aggregate debit/credit check across all included entries."""

    total_debit: Decimal
    total_credit: Decimal
    as_of: Optional[date] = None
    rows: tuple[TrialBalanceRow, ...] = ()

    @property
    def is_balanced(self) -> bool:
        return abs(self.total_debit - self.total_credit) <= BALANCE_TOLERANCE


@dataclass(frozen=True)
class BalanceSheet:
    """Point-in-time totals for assets, liabilities and equity.

    Equity includes revenue and expense activity of the included entries,
    since no closing entries are posted to retained earnings.
    """

    assets: Decimal
    liabilities: Decimal
    equity: Decimal
    as_of: Optional[date] = None

    @property
    def is_balanced(self) -> bool:
        return abs(self.assets - (self.liabilities + self.equity)) <= BALANCE_TOLERANCE


@dataclass(frozen=True)
class IncomeStatement:
    """Revenue and expense totals for a closed date range."""

    start_date: date
    end_date: date
    revenue: Decimal
    expenses: Decimal

    @property
    def net_income(self) -> Decimal:
        return self.revenue - self.expenses


@dataclass(frozen=True)
class TAccountRow:
    """One ledger line of a T-account view."""

    date: date
    description: str
    journal_entry_id: str
    debit: Decimal
    credit: Decimal


class TAccountRows:
    """Restartable iterable of T-account rows.

    Rows are built on each iteration from a snapshot of (entry, line) pairs
    taken when the view was requested.
    """

    def __init__(self, postings: Sequence[tuple[JournalEntry, JournalLine]]):
        self._postings = tuple(postings)

    def __iter__(self) -> Iterator[TAccountRow]:
        for entry, line in self._postings:
            yield TAccountRow(
                date=entry.date,
                description=entry.description,
                journal_entry_id=entry.id,
                debit=line.debit_amount,
                credit=line.credit_amount,
            )

    def __len__(self) -> int:
        return len(self._postings)

    def __bool__(self) -> bool:
        return bool(self._postings)

    def total(self, pick: Callable[[TAccountRow], Decimal]) -> Decimal:
        return sum((pick(row) for row in self), Decimal("0"))


@dataclass(frozen=True)
class TAccount:
    """Chronological ledger view of all postings to one account."""

    account: Account
    entries: TAccountRows
    total_debit: Decimal
    total_credit: Decimal
    balance: Decimal
    as_of: Optional[date] = None
