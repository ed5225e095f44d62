"""
Account routes

GET/POST /api/accounts, GET/PUT/DELETE /api/accounts/{account_id}
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from ledgerkit.api.dependencies import get_db
from ledgerkit.api.errors import error_response
from ledgerkit.api.schemas import AccountCreateRequest, AccountUpdateRequest
from ledgerkit.api.serializers import account_to_dict
from ledgerkit.database.base import Database
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.errors import AccountNotFoundError

router = APIRouter(prefix="/api/accounts", tags=["accounts"])


@router.get("")
async def list_accounts(
    type: Optional[str] = Query(default=None, description="Filter by account type"),
    db: Database = Depends(get_db),
):
    """List the chart of accounts in creation order."""
    service = AccountService(db)
    return {"data": [account_to_dict(acc) for acc in service.list_accounts(account_type=type)]}


@router.post("", status_code=201)
async def create_account(body: AccountCreateRequest, db: Database = Depends(get_db)):
    """Create an account. Codes must be unique."""
    service = AccountService(db)
    try:
        account = service.create_account(
            code=body.code,
            name=body.name,
            account_type=body.type,
            category=body.category,
            parent_id=body.parent_id,
        )
    except AccountNotFoundError as e:
        # Unknown parent is a problem with the request body
        return error_response(e, not_found_status=400)
    return {"data": account_to_dict(account)}


@router.get("/{account_id}")
async def get_account(account_id: str, db: Database = Depends(get_db)):
    service = AccountService(db)
    return {"data": account_to_dict(service.get_account(account_id))}


@router.put("/{account_id}")
async def update_account(account_id: str, body: AccountUpdateRequest, db: Database = Depends(get_db)):
    """Update name and/or category. Code and type are immutable and ignored."""
    service = AccountService(db)
    account = service.update_account(account_id, name=body.name, category=body.category)
    return {"data": account_to_dict(account)}


@router.delete("/{account_id}", status_code=204)
async def delete_account(account_id: str, db: Database = Depends(get_db)):
    """Delete an account that no journal line uses."""
    service = AccountService(db)
    service.delete_account(account_id)
    return Response(status_code=204)
