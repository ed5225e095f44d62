"""Domain layer for ledgerkit application.

Services are imported from their modules (``ledgerkit.domain.account`` and
so on) because they depend on the database layer, which in turn imports the
entities exported here.
"""

from ledgerkit.domain.entities import (
    Account,
    AccountType,
    BalanceSheet,
    IncomeStatement,
    JournalEntry,
    JournalLine,
    LineInput,
    TAccount,
    TrialBalance,
)
from ledgerkit.domain.errors import (
    AccountNotFoundError,
    ConflictError,
    DomainError,
    DuplicateCodeError,
    EntryNotFoundError,
    NotFoundError,
    UnbalancedEntryError,
    ValidationError,
)

__all__ = [
    "Account",
    "AccountType",
    "BalanceSheet",
    "IncomeStatement",
    "JournalEntry",
    "JournalLine",
    "LineInput",
    "TAccount",
    "TrialBalance",
    "AccountNotFoundError",
    "ConflictError",
    "DomainError",
    "DuplicateCodeError",
    "EntryNotFoundError",
    "NotFoundError",
    "UnbalancedEntryError",
    "ValidationError",
]
