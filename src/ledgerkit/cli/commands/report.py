"""Reporting commands."""

from datetime import date
from decimal import Decimal

import click

from ledgerkit.cli.account_resolution import resolve_account_or_exit
from ledgerkit.cli.date_filters import resolve_cli_date_range
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.errors import DomainError
from ledgerkit.domain.ledger import LedgerService
from ledgerkit.utils.date_parser import parse_date

WIDTH = 60


def _money(amount: Decimal) -> str:
    return f"{amount:>14,.2f}"


def _parse_as_of(ctx, as_of: str | None) -> date | None:
    if as_of is None:
        return None
    try:
        return parse_date(as_of)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)


def _as_of_label(as_of: date | None) -> str:
    return (as_of or date.today()).isoformat()


@click.group()
def report_group():
    """Balances and financial statements."""
    pass


@report_group.command("trial-balance")
@click.option("--as-of", help="Include entries dated on or before this date")
@click.pass_context
def trial_balance(ctx, as_of: str | None):
    """Show total debits and credits across all entries."""
    service = LedgerService(ctx.obj["db"])
    as_of_date = _parse_as_of(ctx, as_of)
    report = service.trial_balance(as_of=as_of_date)

    click.echo(f"\nTrial Balance as of {_as_of_label(as_of_date)}")
    click.echo("=" * WIDTH)
    for row in report.rows:
        label = f"{row.account_code} {row.account_name}"
        click.echo(f"{label:30s}{_money(row.debit)}{_money(row.credit)}")
    click.echo("-" * WIDTH)
    click.echo(f"{'Total':30s}{_money(report.total_debit)}{_money(report.total_credit)}")
    click.echo("Balanced" if report.is_balanced else "NOT BALANCED")


@report_group.command("balance-sheet")
@click.option("--as-of", help="Balance sheet date (defaults to today)")
@click.pass_context
def balance_sheet(ctx, as_of: str | None):
    """Show assets, liabilities and equity."""
    service = LedgerService(ctx.obj["db"])
    as_of_date = _parse_as_of(ctx, as_of)
    report = service.balance_sheet(as_of=as_of_date)

    click.echo(f"\nBalance Sheet as of {_as_of_label(as_of_date)}")
    click.echo("=" * WIDTH)
    click.echo(f"{'Assets':44s}{_money(report.assets)}")
    click.echo(f"{'Liabilities':44s}{_money(report.liabilities)}")
    click.echo(f"{'Equity':44s}{_money(report.equity)}")
    click.echo("-" * WIDTH)
    click.echo(f"{'Liabilities + Equity':44s}{_money(report.liabilities + report.equity)}")


@report_group.command("income-statement")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'start of year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--this-month", is_flag=True, help="Report on the current month")
@click.option("--this-year", is_flag=True, help="Report on the current year")
@click.option("--last-month", is_flag=True, help="Report on the previous month")
@click.option("--last-year", is_flag=True, help="Report on the previous year")
@click.pass_context
def income_statement(
    ctx,
    start_date: str | None,
    end_date: str | None,
    this_month: bool,
    this_year: bool,
    last_month: bool,
    last_year: bool,
):
    """Show revenue, expenses and net income for a period.

    Examples:
        ledgerkit report income-statement --start-date 2024-01-01 --end-date 2024-12-31
        ledgerkit report income-statement --this-year
    """
    service = LedgerService(ctx.obj["db"])
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

    try:
        report = service.income_statement(start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"\nIncome Statement {report.start_date.isoformat()} to {report.end_date.isoformat()}")
    click.echo("=" * WIDTH)
    click.echo(f"{'Revenue':44s}{_money(report.revenue)}")
    click.echo(f"{'Expenses':44s}{_money(report.expenses)}")
    click.echo("-" * WIDTH)
    click.echo(f"{'Net income':44s}{_money(report.net_income)}")


@report_group.command("balance")
@click.argument("account", metavar="ACCOUNT")
@click.option("--as-of", help="Balance date (defaults to today)")
@click.pass_context
def account_balance(ctx, account: str, as_of: str | None):
    """Show the balance of one account.

    ACCOUNT can be an account code or ID.
    """
    db = ctx.obj["db"]
    account_service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, account_service, account)
    as_of_date = _parse_as_of(ctx, as_of)

    acc = account_service.get_account(account_id)
    balance = LedgerService(db).account_balance(account_id, as_of=as_of_date)
    click.echo(f"{acc.code} {acc.name} ({acc.type.value}): {balance:,.2f} as of {_as_of_label(as_of_date)}")


@report_group.command("t-account")
@click.argument("account", metavar="ACCOUNT")
@click.option("--as-of", help="Include entries dated on or before this date")
@click.pass_context
def t_account(ctx, account: str, as_of: str | None):
    """Show the debit and credit postings of one account.

    ACCOUNT can be an account code or ID.
    """
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)
    as_of_date = _parse_as_of(ctx, as_of)
    view = LedgerService(db).t_account(account_id, as_of=as_of_date)

    click.echo(f"\n{view.account.code} {view.account.name}")
    click.echo("=" * WIDTH)
    if not view.entries:
        click.echo("No postings.")
    for row in view.entries:
        debit = _money(row.debit) if row.debit else " " * 14
        credit = _money(row.credit) if row.credit else " " * 14
        click.echo(f"{row.date.isoformat()} {row.description[:21]:21s}{debit}{credit}")
    click.echo("-" * WIDTH)
    click.echo(f"{'Total':32s}{_money(view.total_debit)}{_money(view.total_credit)}")
    click.echo(f"{'Balance':32s}{_money(view.balance)}")


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
