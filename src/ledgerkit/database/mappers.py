"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic. Line account names are resolved
through the account relationship on every read, so a renamed account shows
its current name on existing lines.
"""

from decimal import Decimal

from ledgerkit.domain import entities as domain
from ledgerkit.database.models import (
    Account as ORMAccount,
    JournalEntry as ORMJournalEntry,
    JournalLine as ORMJournalLine,
)

_ZERO = Decimal("0.00")


def _amount(value) -> Decimal:
    if value is None:
        return _ZERO
    return Decimal(value).quantize(_ZERO)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        code=orm_account.code,
        name=orm_account.name,
        type=domain.AccountType(orm_account.type),
        category=orm_account.category,
        parent_id=orm_account.parent_id,
        created_at=orm_account.created_at,
        updated_at=orm_account.updated_at,
    )


def journal_line_to_domain(orm_line: ORMJournalLine) -> domain.JournalLine:
    """Convert SQLAlchemy JournalLine model to domain JournalLine entity."""
    account_name = orm_line.account.name if orm_line.account is not None else None
    return domain.JournalLine(
        id=orm_line.id,
        journal_entry_id=orm_line.journal_entry_id,
        account_id=orm_line.account_id,
        account_name=account_name,
        debit_amount=_amount(orm_line.debit_amount),
        credit_amount=_amount(orm_line.credit_amount),
    )


def journal_entry_to_domain(orm_entry: ORMJournalEntry) -> domain.JournalEntry:
    """Convert SQLAlchemy JournalEntry model to domain JournalEntry entity."""
    return domain.JournalEntry(
        id=orm_entry.id,
        date=orm_entry.date,
        description=orm_entry.description,
        lines=tuple(journal_line_to_domain(line) for line in orm_entry.lines),
        is_closed=bool(orm_entry.is_closed),
        created_at=orm_entry.created_at,
        updated_at=orm_entry.updated_at,
    )
