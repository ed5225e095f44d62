"""Standard chart of accounts and ledger reset."""

import logging

from ledgerkit.database.base import Database
from ledgerkit.domain.entities import AccountType

logger = logging.getLogger(__name__)

# (code, name, type, category)
STANDARD_ACCOUNTS = [
    # Assets
    ("100", "Cash", AccountType.ASSET, "Current Assets"),
    ("101", "Bank Deposits", AccountType.ASSET, "Current Assets"),
    ("110", "Accounts Receivable", AccountType.ASSET, "Current Assets"),
    ("120", "Merchandise", AccountType.ASSET, "Current Assets"),
    ("150", "Equipment", AccountType.ASSET, "Fixed Assets"),
    ("160", "Buildings", AccountType.ASSET, "Fixed Assets"),
    # Liabilities
    ("200", "Accounts Payable", AccountType.LIABILITY, "Current Liabilities"),
    ("210", "Accrued Liabilities", AccountType.LIABILITY, "Current Liabilities"),
    ("250", "Loans Payable", AccountType.LIABILITY, "Long-term Liabilities"),
    # Equity
    ("300", "Capital Stock", AccountType.EQUITY, "Capital"),
    ("310", "Retained Earnings", AccountType.EQUITY, "Retained Earnings"),
    # Revenue
    ("400", "Sales", AccountType.REVENUE, "Operating Revenue"),
    ("410", "Miscellaneous Income", AccountType.REVENUE, "Non-operating Revenue"),
    # Expenses
    ("500", "Purchases", AccountType.EXPENSE, "Cost of Sales"),
    ("510", "Salaries", AccountType.EXPENSE, "Selling, General & Administrative"),
    ("520", "Advertising", AccountType.EXPENSE, "Selling, General & Administrative"),
    ("530", "Travel", AccountType.EXPENSE, "Selling, General & Administrative"),
    ("540", "Supplies", AccountType.EXPENSE, "Selling, General & Administrative"),
    ("550", "Depreciation", AccountType.EXPENSE, "Selling, General & Administrative"),
]


def seed_standard_chart(db: Database) -> int:
    """Create any standard account whose code is not yet present.

    Returns:
        Number of accounts created
    """
    created = 0
    with db.lock:
        for code, name, account_type, category in STANDARD_ACCOUNTS:
            if db.get_account_by_code(code) is not None:
                continue
            db.create_account(code=code, name=name, account_type=account_type, category=category)
            created += 1

    if created:
        logger.info("Seeded %d standard accounts", created)
    return created


def reset_ledger(db: Database) -> None:
    """Empty the journal and restore the standard chart of accounts."""
    with db.lock:
        db.clear()
        seed_standard_chart(db)
    logger.info("Ledger reset to the standard chart of accounts")
