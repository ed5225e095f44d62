"""Utility for resolving account codes to IDs."""

from ledgerkit.domain.account import AccountService
from ledgerkit.domain.errors import AccountNotFoundError


def resolve_account(account_service: AccountService, account: str) -> str:
    """Resolve an account code or ID to the account ID.

    Codes are what people type ("100"), so they are tried first; anything
    else is looked up as an account ID.

    Args:
        account_service: AccountService instance
        account: Account code or ID

    Returns:
        Account ID

    Raises:
        AccountNotFoundError: If neither a code nor an ID matches
    """
    account = str(account).strip()
    try:
        return account_service.get_account_by_code(account).id
    except AccountNotFoundError:
        pass

    return account_service.get_account(account).id
