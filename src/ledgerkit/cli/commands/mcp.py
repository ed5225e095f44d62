"""Run the tool-call server on stdin/stdout."""

import click

from ledgerkit.domain.chart import seed_standard_chart
from ledgerkit.logging_config import setup_logging
from ledgerkit.mcp.server import ToolServer


@click.command("mcp")
@click.pass_context
def mcp(ctx):
    """Serve ledger tools over JSON-RPC on stdin/stdout.

    Each request and each reply is one line of JSON. Diagnostics are
    written to stderr.
    """
    db = ctx.obj["db"]
    settings = ctx.obj["settings"]
    setup_logging("mcp", level=settings.log_level)

    seed_standard_chart(db)
    server = ToolServer(db, enable_test_reset=settings.enable_test_reset)
    server.serve()


def register_commands(cli):
    """Register mcp command with main CLI."""
    cli.add_command(mcp)
