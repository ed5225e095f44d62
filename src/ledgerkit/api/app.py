"""
FastAPI application

Router registration and app setup.
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ledgerkit import __version__
from ledgerkit.api.errors import register_error_handlers
from ledgerkit.api.routes import accounts, balances, journal_entries, reports, system
from ledgerkit.config import Settings, get_settings
from ledgerkit.database.base import Database
from ledgerkit.database.factories import create_sqlite_database
from ledgerkit.domain.chart import seed_standard_chart

logger = logging.getLogger(__name__)


def create_app(db: Optional[Database] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Build the REST application around a ledger store.

    Args:
        db: Store to serve. When omitted one is created from settings and
            seeded with the standard chart of accounts.
        settings: Runtime settings; defaults to the environment

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    if db is None:
        db = create_sqlite_database(settings.db_path)
        db.connect()
        db.initialize_schema()
        seed_standard_chart(db)

    app = FastAPI(
        title="ledgerkit API",
        description="Double-entry bookkeeping ledger",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.db = db
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    app.include_router(system.router)
    app.include_router(accounts.router)
    app.include_router(journal_entries.router)
    app.include_router(reports.router)
    app.include_router(balances.router)
    if settings.enable_test_reset:
        app.include_router(system.reset_router)
    else:
        logger.info("Test reset endpoint disabled")

    return app
