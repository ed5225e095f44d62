"""API routers."""

from ledgerkit.api.routes import accounts, balances, journal_entries, reports, system

__all__ = ["accounts", "balances", "journal_entries", "reports", "system"]
