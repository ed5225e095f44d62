"""
Account balance routes

GET /api/balances/{account_id}, GET /api/balances/{account_id}/t-account
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ledgerkit.api.dependencies import get_db
from ledgerkit.api.serializers import account_balance_to_dict, t_account_to_dict
from ledgerkit.database.base import Database
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.ledger import LedgerService
from ledgerkit.utils.date_parser import parse_optional_iso_date

router = APIRouter(prefix="/api/balances", tags=["balances"])


@router.get("/{account_id}")
async def account_balance(
    account_id: str,
    as_of_date: Optional[str] = Query(default=None, alias="asOfDate"),
    db: Database = Depends(get_db),
):
    """Balance of one account on its normal side."""
    account = AccountService(db).get_account(account_id)
    service = LedgerService(db)
    balance = service.account_balance(account_id, as_of=as_of_date)
    as_of = parse_optional_iso_date(as_of_date) or date.today()
    return {"data": account_balance_to_dict(account, balance, as_of)}


@router.get("/{account_id}/t-account")
async def t_account(
    account_id: str,
    as_of_date: Optional[str] = Query(default=None, alias="asOfDate"),
    db: Database = Depends(get_db),
):
    """Chronological postings to one account with running totals."""
    service = LedgerService(db)
    view = service.t_account(account_id, as_of=as_of_date)
    return {"data": t_account_to_dict(view, view.as_of or date.today())}
