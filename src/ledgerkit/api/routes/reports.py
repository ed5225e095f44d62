"""
Financial report routes

GET /api/reports/trial-balance, /api/reports/balance-sheet,
/api/reports/income-statement
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ledgerkit.api.dependencies import get_db
from ledgerkit.api.serializers import (
    balance_sheet_to_dict,
    income_statement_to_dict,
    trial_balance_to_dict,
)
from ledgerkit.database.base import Database
from ledgerkit.domain.ledger import LedgerService

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/trial-balance")
async def trial_balance(
    as_of_date: Optional[str] = Query(default=None, alias="asOfDate"),
    db: Database = Depends(get_db),
):
    service = LedgerService(db)
    return {"data": trial_balance_to_dict(service.trial_balance(as_of=as_of_date))}


@router.get("/balance-sheet")
async def balance_sheet(
    as_of_date: Optional[str] = Query(default=None, alias="asOfDate"),
    db: Database = Depends(get_db),
):
    service = LedgerService(db)
    return {"data": balance_sheet_to_dict(service.balance_sheet(as_of=as_of_date))}


@router.get("/income-statement")
async def income_statement(
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
    db: Database = Depends(get_db),
):
    """Revenue, expenses and net income for an inclusive period. Both dates are required."""
    service = LedgerService(db)
    report = service.income_statement(start_date, end_date)
    return {"data": income_statement_to_dict(report)}
