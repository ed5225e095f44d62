"""
Journal entry routes

GET/POST /api/journal-entries, GET/PUT/DELETE /api/journal-entries/{entry_id},
POST /api/periods/close
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from ledgerkit.api.dependencies import get_db
from ledgerkit.api.errors import error_response
from ledgerkit.api.schemas import (
    ClosePeriodRequest,
    JournalEntryCreateRequest,
    JournalEntryUpdateRequest,
    lines_to_domain,
)
from ledgerkit.api.serializers import entry_to_dict
from ledgerkit.database.base import Database
from ledgerkit.domain.errors import AccountNotFoundError
from ledgerkit.domain.journal import JournalService

router = APIRouter(tags=["journal"])


@router.get("/api/journal-entries")
async def list_journal_entries(
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
    account_id: Optional[str] = Query(default=None, alias="accountId"),
    db: Database = Depends(get_db),
):
    """List journal entries, optionally by inclusive date range and account."""
    service = JournalService(db)
    entries = service.list_entries(start_date=start_date, end_date=end_date, account_id=account_id)
    return {"data": [entry_to_dict(entry) for entry in entries]}


@router.post("/api/journal-entries", status_code=201)
async def create_journal_entry(body: JournalEntryCreateRequest, db: Database = Depends(get_db)):
    """Record a balanced journal entry."""
    service = JournalService(db)
    try:
        entry = service.create_entry(
            date=body.date, description=body.description, lines=lines_to_domain(body.lines)
        )
    except AccountNotFoundError as e:
        return error_response(e, not_found_status=400)
    return {"data": entry_to_dict(entry)}


@router.get("/api/journal-entries/{entry_id}")
async def get_journal_entry(entry_id: str, db: Database = Depends(get_db)):
    service = JournalService(db)
    return {"data": entry_to_dict(service.get_entry(entry_id))}


@router.put("/api/journal-entries/{entry_id}")
async def update_journal_entry(
    entry_id: str, body: JournalEntryUpdateRequest, db: Database = Depends(get_db)
):
    """Update an open entry. Replacing lines re-runs the full validation."""
    service = JournalService(db)
    try:
        entry = service.update_entry(
            entry_id,
            date=body.date,
            description=body.description,
            lines=lines_to_domain(body.lines),
        )
    except AccountNotFoundError as e:
        return error_response(e, not_found_status=400)
    return {"data": entry_to_dict(entry)}


@router.delete("/api/journal-entries/{entry_id}", status_code=204)
async def delete_journal_entry(entry_id: str, db: Database = Depends(get_db)):
    service = JournalService(db)
    service.delete_entry(entry_id)
    return Response(status_code=204)


@router.post("/api/periods/close")
async def close_period(body: ClosePeriodRequest, db: Database = Depends(get_db)):
    """Close all entries dated on or before throughDate."""
    service = JournalService(db)
    closed = service.close_period(body.through_date)
    return {"data": {"throughDate": body.through_date, "closedEntries": closed}}
