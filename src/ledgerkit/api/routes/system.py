"""
System routes

GET /api/health, POST /api/test/reset (test harnesses only)
"""

import logging

from fastapi import APIRouter, Depends

from ledgerkit import __version__
from ledgerkit.api.dependencies import get_db
from ledgerkit.database.base import Database
from ledgerkit.domain.chart import reset_ledger

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["system"])

reset_router = APIRouter(prefix="/api", tags=["system"], include_in_schema=False)


@router.get("/health")
async def health_check():
    return {"data": {"status": "ok", "version": __version__}}


@reset_router.post("/test/reset")
async def reset(db: Database = Depends(get_db)):
    """Restore the standard chart of accounts and empty the journal."""
    reset_ledger(db)
    logger.info("Ledger reset over HTTP")
    return {"message": "Database reset to initial state"}
