"""Account domain service (chart of accounts registry)."""

import logging
from typing import Optional

from ledgerkit.database.base import Database
from ledgerkit.domain.entities import Account as AccountEntity, AccountType
from ledgerkit.domain.errors import (
    AccountNotFoundError,
    ConflictError,
    DuplicateCodeError,
    ValidationError,
    account_delete_blocked,
    account_not_found,
    duplicate_account_code,
)

logger = logging.getLogger(__name__)


def _require_text(value, field: str) -> str:
    if value is None or not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Missing required field: {field}")
    return value.strip()


def parse_account_type(value) -> AccountType:
    """Convert a string to AccountType.

    Raises:
        ValidationError: If value is not one of the five account types
    """
    if isinstance(value, AccountType):
        return value
    try:
        return AccountType(str(value).strip().lower())
    except ValueError:
        raise ValidationError(
            f"Invalid account type '{value}'. Expected one of: {', '.join(AccountType.values())}"
        )


class AccountService:
    """Service for managing the chart of accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        code: str,
        name: str,
        account_type: AccountType | str,
        category: str,
        parent_id: Optional[str] = None,
    ) -> AccountEntity:
        """Create a new account.

        Args:
            code: Unique account code (e.g. "100")
            name: Display name
            account_type: One of asset, liability, equity, revenue, expense
            category: Free-form classification
            parent_id: Optional parent account ID

        Returns:
            The created account

        Raises:
            ValidationError: If a required field is missing or type is unknown
            DuplicateCodeError: If the code is already used
            AccountNotFoundError: If parent_id does not resolve
        """
        code = _require_text(code, "code")
        name = _require_text(name, "name")
        if account_type is None or (isinstance(account_type, str) and not account_type.strip()):
            raise ValidationError("Missing required field: type")
        account_type = parse_account_type(account_type)
        category = _require_text(category, "category")
        if parent_id is not None and not str(parent_id).strip():
            parent_id = None

        with self.db.lock:
            if self.db.get_account_by_code(code) is not None:
                raise DuplicateCodeError(duplicate_account_code(code))
            if parent_id is not None and self.db.get_account(parent_id) is None:
                raise AccountNotFoundError(account_not_found(parent_id))

            account_id = self.db.create_account(
                code=code,
                name=name,
                account_type=account_type,
                category=category,
                parent_id=parent_id,
            )
            account = self.db.get_account(account_id)

        logger.info("Created account %s (%s, %s)", code, name, account_type.value)
        return account

    def get_account(self, account_id: str) -> AccountEntity:
        """Get account by ID.

        Raises:
            AccountNotFoundError: If no account has this ID
        """
        with self.db.lock:
            account = self.db.get_account(account_id)
        if account is None:
            raise AccountNotFoundError(account_not_found(account_id))
        return account

    def get_account_by_code(self, code: str) -> AccountEntity:
        """Get account by its code.

        Raises:
            AccountNotFoundError: If no account has this code
        """
        with self.db.lock:
            account = self.db.get_account_by_code(code)
        if account is None:
            raise AccountNotFoundError(account_not_found(code))
        return account

    def list_accounts(self, account_type: Optional[AccountType | str] = None) -> list[AccountEntity]:
        """List accounts in insertion order.

        Args:
            account_type: Optional account type filter

        Raises:
            ValidationError: If type is not a known account type
        """
        if account_type:
            account_type = parse_account_type(account_type)
        with self.db.lock:
            return self.db.list_accounts(account_type=account_type or None)

    def update_account(
        self,
        account_id: str,
        name: Optional[str] = None,
        category: Optional[str] = None,
    ) -> AccountEntity:
        """Update the mutable fields of an account.

        Code and type are fixed at creation and cannot be changed here.

        Raises:
            AccountNotFoundError: If account not found
            ValidationError: If a provided value is blank
        """
        if name is not None:
            name = _require_text(name, "name")
        if category is not None:
            category = _require_text(category, "category")

        with self.db.lock:
            if self.db.get_account(account_id) is None:
                raise AccountNotFoundError(account_not_found(account_id))
            self.db.update_account(account_id, name=name, category=category)
            account = self.db.get_account(account_id)

        logger.info("Updated account %s", account.code)
        return account

    def delete_account(self, account_id: str) -> None:
        """Delete an account that no journal line uses.

        The usage check and the delete run under one hold of the store lock,
        so an entry cannot be posted to the account in between.

        Raises:
            AccountNotFoundError: If account not found
            ConflictError: If journal lines still reference the account
        """
        with self.db.lock:
            account = self.db.get_account(account_id)
            if account is None:
                raise AccountNotFoundError(account_not_found(account_id))

            line_count = self.db.get_account_line_count(account_id)
            if line_count > 0:
                logger.warning("Refused to delete account %s: %d lines", account.code, line_count)
                raise ConflictError(account_delete_blocked(account_id, line_count))

            self.db.delete_account(account_id)

        logger.info("Deleted account %s", account.code)
