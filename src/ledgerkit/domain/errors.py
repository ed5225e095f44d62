"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """

    kind = "DomainError"


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""

    kind = "ValidationError"


class UnbalancedEntryError(ValidationError):
    """Journal entry debits and credits do not match."""

    kind = "UnbalancedEntry"


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""

    kind = "NotFound"


class AccountNotFoundError(NotFoundError):
    """Referenced account does not exist."""

    kind = "AccountNotFound"


class EntryNotFoundError(NotFoundError):
    """Referenced journal entry does not exist."""

    kind = "EntryNotFound"


class ConflictError(DomainError):
    """Operation is incompatible with current state."""

    kind = "Conflict"


class DuplicateCodeError(ConflictError):
    """Account code is already taken."""

    kind = "DuplicateCode"


def account_not_found(account_id: str) -> str:
    """Return message for missing account."""
    return f"Account not found: {account_id}"


def entry_not_found(entry_id: str) -> str:
    """Return message for missing journal entry."""
    return f"Journal entry not found: {entry_id}"


def duplicate_account_code(code: str) -> str:
    """Return message for an account code that already exists."""
    return f"Account code '{code}' already exists"


def account_delete_blocked(account_id: str, line_count: int) -> str:
    """Return message when journal lines still post to the account."""
    return (
        f"Cannot delete account {account_id}: it is used by "
        f"{line_count} journal line{'s' if line_count != 1 else ''}"
    )


def entry_closed(entry_id: str) -> str:
    """Return message for mutation of an entry in a closed period."""
    return f"Journal entry {entry_id} belongs to a closed period and cannot be changed"


def unbalanced_entry(total_debit, total_credit) -> str:
    """Return message for debit/credit mismatch."""
    return f"Debits ({total_debit}) and credits ({total_credit}) must be equal"
