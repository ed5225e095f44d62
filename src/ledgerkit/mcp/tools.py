"""Tool descriptors and handlers for the tool-call server.

Tools address accounts by code. Business rejections are returned as
``{"success": False, "error": ...}`` results, never as protocol errors.
"""

import logging
from datetime import date
from typing import Any, Callable

from ledgerkit.api.serializers import money
from ledgerkit.database.base import Database
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.entities import AccountType
from ledgerkit.domain.errors import (
    AccountNotFoundError,
    DomainError,
    ValidationError,
    account_not_found,
)
from ledgerkit.domain.journal import JournalService
from ledgerkit.domain.ledger import LedgerService
from ledgerkit.utils.date_parser import parse_optional_iso_date

logger = logging.getLogger(__name__)

ISO_DATE_HINT = "YYYY-MM-DD format"

# Account IDs are UUIDs, so this never matches a stored account
UNKNOWN_CODE_PREFIX = "code:"

TOOLS: list[dict[str, Any]] = [
    {
        "name": "create_journal_entry",
        "description": (
            "Create a new journal entry with balanced debits and credits. Each line must "
            "specify either debitAmount or creditAmount (not both). The total debits must "
            "equal total credits."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "date": {"type": "string", "description": f"Journal entry date in {ISO_DATE_HINT}"},
                "description": {"type": "string", "description": "Description of the transaction"},
                "lines": {
                    "type": "array",
                    "description": "Array of journal entry lines (minimum 2 lines)",
                    "items": {
                        "type": "object",
                        "properties": {
                            "accountCode": {
                                "type": "string",
                                "description": 'Account code (e.g., "100" for Cash, "400" for Sales)',
                            },
                            "debitAmount": {
                                "type": "number",
                                "description": "Debit amount (set to 0 if using creditAmount)",
                            },
                            "creditAmount": {
                                "type": "number",
                                "description": "Credit amount (set to 0 if using debitAmount)",
                            },
                        },
                        "required": ["accountCode", "debitAmount", "creditAmount"],
                    },
                },
            },
            "required": ["date", "description", "lines"],
        },
    },
    {
        "name": "get_account_balance",
        "description": (
            "Get the current balance for a specific account. Returns the account details "
            "and its balance as of the specified date."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "accountCode": {"type": "string", "description": 'Account code (e.g., "100" for Cash)'},
                "asOfDate": {
                    "type": "string",
                    "description": f"Date to calculate balance as of ({ISO_DATE_HINT}). Optional, defaults to current date.",
                },
            },
            "required": ["accountCode"],
        },
    },
    {
        "name": "list_accounts",
        "description": "List all accounts or filter by account type. Returns account codes, names, and types.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "type": {
                    "type": "string",
                    "description": "Filter by account type. Optional.",
                    "enum": AccountType.values(),
                },
            },
        },
    },
    {
        "name": "generate_balance_sheet",
        "description": (
            "Generate a balance sheet (financial statement showing assets, liabilities, "
            "and equity) as of a specific date."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "asOfDate": {
                    "type": "string",
                    "description": f"Date to generate balance sheet as of ({ISO_DATE_HINT}). Optional.",
                },
            },
        },
    },
    {
        "name": "generate_income_statement",
        "description": (
            "Generate an income statement (profit and loss statement) for a specific period "
            "showing revenue, expenses, and net income."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "startDate": {"type": "string", "description": f"Start date of the period ({ISO_DATE_HINT})"},
                "endDate": {"type": "string", "description": f"End date of the period ({ISO_DATE_HINT})"},
            },
            "required": ["startDate", "endDate"],
        },
    },
]


class LedgerTools:
    """Tool implementations bound to one ledger store."""

    def __init__(self, db: Database):
        self.accounts = AccountService(db)
        self.journal = JournalService(db)
        self.ledger = LedgerService(db)
        self._handlers: dict[str, Callable[[dict[str, Any]], dict[str, Any]]] = {
            "create_journal_entry": self.create_journal_entry,
            "get_account_balance": self.get_account_balance,
            "list_accounts": self.list_accounts,
            "generate_balance_sheet": self.generate_balance_sheet,
            "generate_income_statement": self.generate_income_statement,
        }

    def has_tool(self, name: str) -> bool:
        return name in self._handlers

    def call(self, name: str, arguments: dict[str, Any]) -> dict[str, Any]:
        """Run a tool, folding domain errors into a failed result.

        Raises:
            KeyError: If no tool has this name
        """
        handler = self._handlers[name]
        try:
            return handler(arguments)
        except DomainError as e:
            logger.info("Tool %s rejected: %s", name, e)
            return {"success": False, "error": str(e)}

    def _code_to_id(self, code: Any) -> str:
        """Return the account ID for a code, or an unmatchable marker when unknown.

        The marker lets the journal service report the missing account at its
        usual point in the validation order, and never resolves to a real
        account, so a raw account ID sent as a code is not accepted.
        """
        if code is None or not str(code).strip():
            return ""
        code = str(code).strip()
        try:
            return self.accounts.get_account_by_code(code).id
        except DomainError:
            return f"{UNKNOWN_CODE_PREFIX}{code}"

    def create_journal_entry(self, args: dict[str, Any]) -> dict[str, Any]:
        lines = args.get("lines")
        if isinstance(lines, list):
            lines = [
                {
                    "account_id": self._code_to_id(line.get("accountCode")),
                    "debit_amount": line.get("debitAmount"),
                    "credit_amount": line.get("creditAmount"),
                }
                if isinstance(line, dict)
                else line
                for line in lines
            ]

        try:
            entry = self.journal.create_entry(
                date=args.get("date"), description=args.get("description"), lines=lines
            )
        except AccountNotFoundError as e:
            missing = str(e).removeprefix(account_not_found(UNKNOWN_CODE_PREFIX))
            raise AccountNotFoundError(account_not_found(missing))
        codes = {account.id: account.code for account in self.accounts.list_accounts()}
        return {
            "success": True,
            "journalEntry": {
                "id": entry.id,
                "date": entry.date.isoformat(),
                "description": entry.description,
                "lines": [
                    {
                        "accountCode": codes.get(line.account_id),
                        "accountName": line.account_name,
                        "debitAmount": money(line.debit_amount),
                        "creditAmount": money(line.credit_amount),
                    }
                    for line in entry.lines
                ],
            },
        }

    def get_account_balance(self, args: dict[str, Any]) -> dict[str, Any]:
        code = args.get("accountCode")
        if code is None or not str(code).strip():
            raise ValidationError("accountCode is required")
        account = self.accounts.get_account_by_code(str(code))
        balance = self.ledger.account_balance(account.id, as_of=args.get("asOfDate"))
        as_of = parse_optional_iso_date(args.get("asOfDate")) or date.today()
        return {
            "success": True,
            "accountCode": account.code,
            "accountName": account.name,
            "accountType": account.type.value,
            "balance": money(balance),
            "asOfDate": as_of.isoformat(),
        }

    def list_accounts(self, args: dict[str, Any]) -> dict[str, Any]:
        accounts = self.accounts.list_accounts(account_type=args.get("type"))
        return {
            "success": True,
            "accounts": [
                {
                    "code": account.code,
                    "name": account.name,
                    "type": account.type.value,
                    "category": account.category,
                }
                for account in accounts
            ],
        }

    def generate_balance_sheet(self, args: dict[str, Any]) -> dict[str, Any]:
        report = self.ledger.balance_sheet(as_of=args.get("asOfDate"))
        return {
            "success": True,
            "asOfDate": (report.as_of or date.today()).isoformat(),
            "balanceSheet": {
                "assets": {"total": money(report.assets)},
                "liabilities": {"total": money(report.liabilities)},
                "equity": {"total": money(report.equity)},
            },
        }

    def generate_income_statement(self, args: dict[str, Any]) -> dict[str, Any]:
        report = self.ledger.income_statement(args.get("startDate"), args.get("endDate"))
        return {
            "success": True,
            "period": {
                "startDate": report.start_date.isoformat(),
                "endDate": report.end_date.isoformat(),
            },
            "incomeStatement": {
                "revenue": {"total": money(report.revenue)},
                "expenses": {"total": money(report.expenses)},
                "netIncome": money(report.net_income),
            },
        }
