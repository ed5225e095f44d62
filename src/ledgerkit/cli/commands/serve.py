"""Run the REST API."""

import click
import uvicorn

from ledgerkit.api.app import create_app
from ledgerkit.domain.chart import seed_standard_chart
from ledgerkit.logging_config import setup_logging


@click.command("serve")
@click.option("--host", help="Interface to bind (defaults to LEDGERKIT_HOST or 127.0.0.1)")
@click.option("--port", type=int, help="Port to listen on (defaults to LEDGERKIT_PORT or 3000)")
@click.pass_context
def serve(ctx, host: str | None, port: int | None):
    """Serve the ledger over HTTP.

    The standard chart of accounts is seeded on start when missing.
    """
    db = ctx.obj["db"]
    settings = ctx.obj["settings"]
    setup_logging("api", level=settings.log_level)

    seed_standard_chart(db)
    app = create_app(db=db, settings=settings)
    uvicorn.run(app, host=host or settings.host, port=port or settings.port, log_config=None)


def register_commands(cli):
    """Register serve command with main CLI."""
    cli.add_command(serve)
