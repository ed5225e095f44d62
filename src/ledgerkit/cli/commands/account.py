"""Account management commands."""

import click

from ledgerkit.cli.account_resolution import resolve_account_or_exit
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.entities import AccountType
from ledgerkit.domain.errors import DomainError


@click.group()
def account_group():
    """Manage the chart of accounts."""
    pass


@account_group.command("create")
@click.argument("code", metavar="CODE")
@click.argument("name", metavar="NAME")
@click.option(
    "--type",
    "account_type",
    required=True,
    type=click.Choice(AccountType.values(), case_sensitive=False),
    help="Account type",
)
@click.option("--category", required=True, help='Classification (e.g. "Current Assets")')
@click.option("--parent", help="Parent account code or ID")
@click.pass_context
def create_account(ctx, code: str, name: str, account_type: str, category: str, parent: str | None):
    """Create a new account.

    Examples:
        ledgerkit account create 105 "Petty Cash" --type asset --category "Current Assets"
        ledgerkit account create 121 "Raw Materials" --type asset --category Inventory --parent 120
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    parent_id = None
    if parent is not None:
        parent_id = resolve_account_or_exit(ctx, service, parent)

    try:
        account = service.create_account(
            code=code, name=name, account_type=account_type, category=category, parent_id=parent_id
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created account {account.code} '{account.name}' (ID: {account.id})")


@account_group.command("list")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(AccountType.values(), case_sensitive=False),
    help="Only list accounts of this type",
)
@click.pass_context
def list_accounts(ctx, account_type: str | None):
    """List accounts in chart order."""
    db = ctx.obj["db"]
    service = AccountService(db)

    accounts = service.list_accounts(account_type=account_type)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 72)
    for acc in accounts:
        click.echo(f"{acc.code:6s} | {acc.name:24s} | {acc.type.value:9s} | {acc.category}")


@account_group.command("rename")
@click.argument("account", metavar="ACCOUNT")
@click.argument("new_name", metavar="NEW_NAME")
@click.option("--category", help="New category (optional)")
@click.pass_context
def rename_account(ctx, account: str, new_name: str, category: str | None) -> None:
    """Rename an account.

    ACCOUNT can be an account code or ID. The code and type never change.

    Examples:
        ledgerkit account rename 100 "Cash on Hand"
        ledgerkit account rename 520 "Marketing" --category "Selling Expenses"
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, service, account)

    try:
        updated = service.update_account(account_id, name=new_name, category=category)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Renamed account {updated.code} to '{updated.name}'")
    if category is not None:
        click.echo(f"Category updated to '{updated.category}'")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account code or ID. Accounts that journal lines still
    post to cannot be deleted.

    Examples:
        ledgerkit account delete 105
        ledgerkit account delete 105 --yes
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, service, account)
    account_obj = service.get_account(account_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account {account_obj.code} '{account_obj.name}'?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted account {account_obj.code} '{account_obj.name}'")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
