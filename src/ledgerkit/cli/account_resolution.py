"""CLI helpers for account resolution."""

import click

from ledgerkit.domain.account import AccountService
from ledgerkit.domain.errors import DomainError
from ledgerkit.utils.account_resolver import resolve_account


def resolve_account_or_exit(ctx: click.Context, account_service: AccountService, account: str) -> str:
    """Resolve an account code or ID, or exit with a CLI error."""
    try:
        return resolve_account(account_service, account)
    except DomainError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
