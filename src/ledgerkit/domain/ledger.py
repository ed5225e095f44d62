"""Ledger projection service.

Balances and statements are computed on demand from the stored accounts and
journal entries. Nothing here writes to the store.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Optional

from ledgerkit.database.base import Database
from ledgerkit.domain.entities import (
    Account,
    AccountType,
    BalanceSheet,
    IncomeStatement,
    JournalEntry,
    TAccount,
    TAccountRows,
    TrialBalance,
    TrialBalanceRow,
)
from ledgerkit.domain.errors import AccountNotFoundError, ValidationError, account_not_found
from ledgerkit.domain.journal import parse_filter_date

_ZERO = Decimal("0")


def raw_balances(entries: list[JournalEntry]) -> dict[str, tuple[Decimal, Decimal]]:
    """Sum debits and credits per account ID over the given entries."""
    debits: dict[str, Decimal] = defaultdict(lambda: _ZERO)
    credits: dict[str, Decimal] = defaultdict(lambda: _ZERO)
    for entry in entries:
        for line in entry.lines:
            debits[line.account_id] += line.debit_amount
            credits[line.account_id] += line.credit_amount
    return {
        account_id: (debits[account_id], credits[account_id])
        for account_id in debits.keys() | credits.keys()
    }


class LedgerService:
    """Service for deriving balances and financial statements."""

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    def _require_account(self, account_id: str) -> Account:
        account = self.db.get_account(account_id)
        if account is None:
            raise AccountNotFoundError(account_not_found(account_id))
        return account

    def account_balance(self, account_id: str, as_of: date | str | None = None) -> Decimal:
        """Return the balance of one account on its normal side.

        An account without postings has a balance of zero.

        Raises:
            AccountNotFoundError: If the account does not exist
        """
        as_of_date = parse_filter_date(as_of, "asOfDate")
        with self.db.lock:
            account = self._require_account(account_id)
            entries = self.db.list_journal_entries(end_date=as_of_date, account_id=account_id)

        debit, credit = raw_balances(entries).get(account_id, (_ZERO, _ZERO))
        return account.type.signed_balance(debit, credit)

    def trial_balance(self, as_of: date | str | None = None) -> TrialBalance:
        """Sum every debit and every credit across included entries.

        Per-account rows are listed in chart order for accounts with activity.
        """
        as_of_date = parse_filter_date(as_of, "asOfDate")
        with self.db.lock:
            accounts = self.db.list_accounts()
            entries = self.db.list_journal_entries(end_date=as_of_date)

        total_debit = _ZERO
        total_credit = _ZERO
        for entry in entries:
            total_debit += entry.total_debit
            total_credit += entry.total_credit

        balances = raw_balances(entries)
        rows = tuple(
            TrialBalanceRow(
                account_id=account.id,
                account_code=account.code,
                account_name=account.name,
                account_type=account.type,
                debit=balances[account.id][0],
                credit=balances[account.id][1],
            )
            for account in accounts
            if account.id in balances
        )
        return TrialBalance(
            total_debit=total_debit, total_credit=total_credit, as_of=as_of_date, rows=rows
        )

    def balance_sheet(self, as_of: date | str | None = None) -> BalanceSheet:
        """Build the balance sheet totals as of a date.

        Revenue and expense activity is folded into equity directly. Expense
        balances are subtracted, not added as in the plain "equity + expense"
        formula, so assets always equal liabilities plus equity.
        """
        as_of_date = parse_filter_date(as_of, "asOfDate")
        with self.db.lock:
            accounts = self.db.list_accounts()
            entries = self.db.list_journal_entries(end_date=as_of_date)

        balances = raw_balances(entries)
        assets = liabilities = equity = _ZERO
        for account in accounts:
            debit, credit = balances.get(account.id, (_ZERO, _ZERO))
            raw = debit - credit
            if account.type is AccountType.ASSET:
                assets += raw
            elif account.type is AccountType.LIABILITY:
                liabilities -= raw
            else:
                # Equity, revenue and expense all settle in equity. An expense
                # has a positive raw balance, so subtracting it reduces equity.
                equity -= raw

        return BalanceSheet(
            assets=assets, liabilities=liabilities, equity=equity, as_of=as_of_date
        )

    def income_statement(
        self, start_date: date | str | None, end_date: date | str | None
    ) -> IncomeStatement:
        """Sum revenue and expense activity between two dates, inclusive.

        Raises:
            ValidationError: If either date is missing or start is after end
        """
        start = parse_filter_date(start_date, "startDate")
        end = parse_filter_date(end_date, "endDate")
        if start is None or end is None:
            raise ValidationError("startDate and endDate are required")
        if start > end:
            raise ValidationError("startDate must not be after endDate")

        with self.db.lock:
            accounts = {account.id: account for account in self.db.list_accounts()}
            entries = self.db.list_journal_entries(start_date=start, end_date=end)

        revenue = expenses = _ZERO
        for account_id, (debit, credit) in raw_balances(entries).items():
            account = accounts.get(account_id)
            if account is None:
                continue
            if account.type is AccountType.REVENUE:
                revenue += credit - debit
            elif account.type is AccountType.EXPENSE:
                expenses += debit - credit

        return IncomeStatement(start_date=start, end_date=end, revenue=revenue, expenses=expenses)

    def t_account(self, account_id: str, as_of: date | str | None = None) -> TAccount:
        """Build the T-account view for one account.

        Rows are ordered by entry date; entries on the same date keep the
        order in which they were recorded.

        Raises:
            AccountNotFoundError: If the account does not exist
        """
        as_of_date = parse_filter_date(as_of, "asOfDate")
        with self.db.lock:
            account = self._require_account(account_id)
            entries = self.db.list_journal_entries(end_date=as_of_date, account_id=account_id)

        postings = [
            (entry, line)
            for entry in sorted(entries, key=lambda e: e.date)
            for line in entry.lines
            if line.account_id == account_id
        ]
        rows = TAccountRows(postings)
        total_debit = rows.total(lambda row: row.debit)
        total_credit = rows.total(lambda row: row.credit)
        return TAccount(
            account=account,
            entries=rows,
            total_debit=total_debit,
            total_credit=total_credit,
            balance=account.type.signed_balance(total_debit, total_credit),
            as_of=as_of_date,
        )
