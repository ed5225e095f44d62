"""FastAPI dependencies."""

from fastapi import Request

from ledgerkit.database.base import Database


def get_db(request: Request) -> Database:
    """Return the ledger store owned by the running application."""
    return request.app.state.db
