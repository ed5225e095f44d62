"""Journal entry commands."""

import click

from ledgerkit.cli.date_filters import resolve_cli_date_range
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.entities import JournalEntry, LineInput
from ledgerkit.domain.errors import DomainError
from ledgerkit.domain.journal import JournalService
from ledgerkit.utils.account_resolver import resolve_account
from ledgerkit.utils.amount_parser import parse_amount
from ledgerkit.utils.date_parser import parse_date

SIDES = ("debit", "credit")


def parse_line_spec(spec: str) -> tuple[str, str, str]:
    """Split an ACCOUNT:SIDE:AMOUNT line option.

    Raises:
        click.BadParameter: If the option is not in that shape
    """
    parts = spec.rsplit(":", 2)
    if len(parts) != 3:
        raise click.BadParameter(f"'{spec}' is not ACCOUNT:debit|credit:AMOUNT", param_hint="--line")
    account, side, amount = (part.strip() for part in parts)
    side = side.lower()
    if side not in SIDES:
        raise click.BadParameter(f"'{side}' must be 'debit' or 'credit'", param_hint="--line")
    return account, side, amount


def _build_lines(account_service: AccountService, specs: tuple[str, ...]) -> list[LineInput]:
    lines = []
    for spec in specs:
        account, side, amount_str = parse_line_spec(spec)
        try:
            amount = parse_amount(amount_str)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--line")

        # Unknown accounts are left for the journal service to report
        try:
            account_id = resolve_account(account_service, account)
        except DomainError:
            account_id = account

        if side == "debit":
            lines.append(LineInput(account_id=account_id, debit_amount=amount))
        else:
            lines.append(LineInput(account_id=account_id, credit_amount=amount))
    return lines


def _echo_entry(entry: JournalEntry, codes: dict[str, str]) -> None:
    status = " [closed]" if entry.is_closed else ""
    click.echo(f"{entry.date.isoformat()}  {entry.description}{status}")
    click.echo(f"ID: {entry.id}")
    for line in entry.lines:
        code = codes.get(line.account_id, "?")
        debit = f"{line.debit_amount:>12,.2f}" if line.debit_amount else " " * 12
        credit = f"{line.credit_amount:>12,.2f}" if line.credit_amount else " " * 12
        click.echo(f"  {code:6s} {line.account_name:24s} {debit} {credit}")


@click.group()
def entry_group():
    """Record and manage journal entries."""
    pass


@entry_group.command("add")
@click.option("--date", "entry_date", required=True, help="Entry date (YYYY-MM-DD or relative like 'today')")
@click.option("--description", required=True, help="Description of the transaction")
@click.option(
    "--line",
    "line_specs",
    multiple=True,
    required=True,
    help="ACCOUNT:debit|credit:AMOUNT, repeat for every line",
)
@click.pass_context
def add_entry(ctx, entry_date: str, description: str, line_specs: tuple[str, ...]):
    """Record a balanced journal entry.

    ACCOUNT in --line can be an account code or ID.

    Examples:
        ledgerkit entry add --date 2024-01-01 --description "Owner investment" \\
            --line 100:debit:10000 --line 300:credit:10000
        ledgerkit entry add --date today --description "Cash sale" \\
            --line 100:debit:500 --line 400:credit:500
    """
    db = ctx.obj["db"]
    account_service = AccountService(db)
    journal_service = JournalService(db)

    try:
        parsed_date = parse_date(entry_date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    lines = _build_lines(account_service, line_specs)
    try:
        entry = journal_service.create_entry(date=parsed_date, description=description, lines=lines)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Recorded journal entry {entry.id} ({entry.total_debit:,.2f})")


@entry_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'start of month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--account", help="Only entries posting to this account code or ID")
@click.option("--this-month", is_flag=True, help="Limit to the current month")
@click.option("--this-year", is_flag=True, help="Limit to the current year")
@click.option("--last-month", is_flag=True, help="Limit to the previous month")
@click.option("--last-year", is_flag=True, help="Limit to the previous year")
@click.pass_context
def list_entries(
    ctx,
    start_date: str | None,
    end_date: str | None,
    account: str | None,
    this_month: bool,
    this_year: bool,
    last_month: bool,
    last_year: bool,
):
    """List journal entries in the order they were recorded."""
    db = ctx.obj["db"]
    account_service = AccountService(db)
    journal_service = JournalService(db)

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={
            "this-month": this_month,
            "this-year": this_year,
            "last-month": last_month,
            "last-year": last_year,
        },
    )

    account_id = None
    if account is not None:
        try:
            account_id = resolve_account(account_service, account)
        except DomainError as e:
            handle_domain_error(ctx, e)

    entries = journal_service.list_entries(start_date=start, end_date=end, account_id=account_id)
    if not entries:
        click.echo("No journal entries found.")
        return

    click.echo(f"\n{'Date':10s}  {'Amount':>12s}  Description")
    click.echo("-" * 72)
    for entry in entries:
        status = " [closed]" if entry.is_closed else ""
        click.echo(f"{entry.date.isoformat()}  {entry.total_debit:>12,.2f}  {entry.description}{status}")
        click.echo(f"{'':10s}  {'':12s}  ID: {entry.id}")
    click.echo(f"\n{len(entries)} entr{'ies' if len(entries) != 1 else 'y'}")


@entry_group.command("show")
@click.argument("entry_id", metavar="ENTRY_ID")
@click.pass_context
def show_entry(ctx, entry_id: str):
    """Show one journal entry with its lines."""
    db = ctx.obj["db"]
    journal_service = JournalService(db)

    try:
        entry = journal_service.get_entry(entry_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    codes = {acc.id: acc.code for acc in AccountService(db).list_accounts()}
    _echo_entry(entry, codes)


@entry_group.command("delete")
@click.argument("entry_id", metavar="ENTRY_ID")
@click.pass_context
def delete_entry(ctx, entry_id: str):
    """Delete an open journal entry."""
    db = ctx.obj["db"]
    journal_service = JournalService(db)

    try:
        journal_service.delete_entry(entry_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted journal entry {entry_id}")


@entry_group.command("close")
@click.option("--through", "through_date", required=True, help="Close entries dated on or before this date")
@click.pass_context
def close_period(ctx, through_date: str):
    """Close a period so its entries can no longer change.

    Examples:
        ledgerkit entry close --through 2023-12-31
    """
    db = ctx.obj["db"]
    journal_service = JournalService(db)

    try:
        through = parse_date(through_date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    closed = journal_service.close_period(through)
    click.echo(f"Closed {closed} journal entr{'ies' if closed != 1 else 'y'} through {through.isoformat()}")


def register_commands(cli):
    """Register journal entry commands with main CLI."""
    cli.add_command(entry_group, name="entry")
