"""Seed the standard chart of accounts."""

import click

from ledgerkit.domain.chart import STANDARD_ACCOUNTS, seed_standard_chart


@click.command("init-chart")
@click.pass_context
def init_chart(ctx):
    """Initialize the ledger with the standard chart of accounts.

    Accounts whose code already exists are left untouched, so running this
    twice is harmless.
    """
    db = ctx.obj["db"]
    created = seed_standard_chart(db)

    if created == 0:
        click.echo("Standard chart of accounts already present.")
    else:
        click.echo(f"Created {created} of {len(STANDARD_ACCOUNTS)} standard accounts.")


def register_commands(cli):
    """Register init-chart command with main CLI."""
    cli.add_command(init_chart)
