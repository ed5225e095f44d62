"""Serialize domain entities into the camelCase JSON the API returns."""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from ledgerkit.domain.entities import (
    Account,
    BalanceSheet,
    IncomeStatement,
    JournalEntry,
    JournalLine,
    TAccount,
    TrialBalance,
)


def money(amount: Decimal) -> float | int:
    """Render an amount as a JSON number, without a fraction when whole."""
    if amount == amount.to_integral_value():
        return int(amount)
    return float(amount)


def iso(value: Optional[date | datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def account_to_dict(account: Account) -> dict[str, Any]:
    return {
        "id": account.id,
        "code": account.code,
        "name": account.name,
        "type": account.type.value,
        "category": account.category,
        "parentId": account.parent_id,
        "createdAt": iso(account.created_at),
        "updatedAt": iso(account.updated_at),
    }


def line_to_dict(line: JournalLine) -> dict[str, Any]:
    return {
        "id": line.id,
        "journalEntryId": line.journal_entry_id,
        "accountId": line.account_id,
        "accountName": line.account_name,
        "debitAmount": money(line.debit_amount),
        "creditAmount": money(line.credit_amount),
    }


def entry_to_dict(entry: JournalEntry) -> dict[str, Any]:
    return {
        "id": entry.id,
        "date": entry.date.isoformat(),
        "description": entry.description,
        "lines": [line_to_dict(line) for line in entry.lines],
        "isClosed": entry.is_closed,
        "createdAt": iso(entry.created_at),
        "updatedAt": iso(entry.updated_at),
    }


def trial_balance_to_dict(report: TrialBalance) -> dict[str, Any]:
    return {
        "totalDebit": money(report.total_debit),
        "totalCredit": money(report.total_credit),
        "isBalanced": report.is_balanced,
        "asOfDate": iso(report.as_of),
        "accounts": [
            {
                "accountId": row.account_id,
                "accountCode": row.account_code,
                "accountName": row.account_name,
                "accountType": row.account_type.value,
                "debit": money(row.debit),
                "credit": money(row.credit),
            }
            for row in report.rows
        ],
    }


def balance_sheet_to_dict(report: BalanceSheet) -> dict[str, Any]:
    return {
        "assets": {"total": money(report.assets)},
        "liabilities": {"total": money(report.liabilities)},
        "equity": {"total": money(report.equity)},
        "isBalanced": report.is_balanced,
        "asOfDate": iso(report.as_of),
    }


def income_statement_to_dict(report: IncomeStatement) -> dict[str, Any]:
    return {
        "startDate": report.start_date.isoformat(),
        "endDate": report.end_date.isoformat(),
        "revenue": {"total": money(report.revenue)},
        "expenses": {"total": money(report.expenses)},
        "netIncome": money(report.net_income),
    }


def account_balance_to_dict(account: Account, balance: Decimal, as_of: date) -> dict[str, Any]:
    return {
        "accountId": account.id,
        "accountCode": account.code,
        "accountName": account.name,
        "accountType": account.type.value,
        "balance": money(balance),
        "asOfDate": as_of.isoformat(),
    }


def t_account_to_dict(view: TAccount, as_of: date) -> dict[str, Any]:
    return {
        "account": {
            "id": view.account.id,
            "code": view.account.code,
            "name": view.account.name,
            "type": view.account.type.value,
        },
        "asOfDate": as_of.isoformat(),
        "entries": [
            {
                "date": row.date.isoformat(),
                "description": row.description,
                "journalEntryId": row.journal_entry_id,
                "debit": money(row.debit),
                "credit": money(row.credit),
            }
            for row in view.entries
        ],
        "totalDebit": money(view.total_debit),
        "totalCredit": money(view.total_credit),
        "balance": money(view.balance),
    }
