"""Main CLI entry point."""

import click

from ledgerkit.config import get_settings
from ledgerkit.database.factories import create_sqlite_database
from ledgerkit.logging_config import setup_logging

# Import and register all commands at module level
from ledgerkit.cli.commands import (
    account,
    entry,
    init_chart,
    mcp,
    report,
    serve,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERKIT_DB_PATH environment variable)",
    envvar="LEDGERKIT_DB_PATH",
)
@click.option(
    "--log-level",
    help="Log level for diagnostics on stderr (overrides LEDGERKIT_LOG_LEVEL)",
    envvar="LEDGERKIT_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """Ledgerkit - double-entry bookkeeping ledger.

    Keep a chart of accounts and balanced journal entries, and derive trial
    balances, balance sheets and income statements from them. Without
    --db-path the ledger lives in memory for the duration of the command.
    """
    ctx.ensure_object(dict)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        settings = get_settings()
        setup_logging("cli", level=log_level or "WARNING")
        db = create_sqlite_database(database_path=db_path or settings.db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["settings"] = settings
        ctx.call_on_close(db.disconnect)


# Register all commands
init_chart.register_commands(cli)
account.register_commands(cli)
entry.register_commands(cli)
report.register_commands(cli)
serve.register_commands(cli)
mcp.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
