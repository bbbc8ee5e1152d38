"""
backend/routers/entry.py

Router for a user's income/expense entries and the monthly summary.

Every endpoint requires a bearer token; the owner id always comes from the
verified token, never from the request body or path. The service layer
applies it to every query, so a user can only ever see or touch their own
rows.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backend.schemas.entry import (
    EntryCreate,
    EntryCreated,
    EntryDeleted,
    EntryRead,
    EntryUpdated,
    SummaryBucket,
)
from backend.services import entry as entry_service
from backend.services.summary import get_monthly_summary
from backend.deps import checked_body, get_current_identity
from backend.utils.auth import Identity
from backend.utils.checks import ENTRY_CHECKS
from backend.database import get_db

router = APIRouter(tags=["entries"])


def _parse_entry_id(raw: str) -> Optional[int]:
    """Path ids are integers; anything else cannot match an entry."""
    if raw.isascii() and raw.isdigit() and len(raw) <= 18:
        return int(raw)
    return None


@router.post("/expense", response_model=EntryCreated)
def create_entry(
    identity: Identity = Depends(get_current_identity),
    payload: Dict[str, Any] = Depends(checked_body(ENTRY_CHECKS)),
    db: Session = Depends(get_db),
):
    """
    Record an expense or income entry for the caller: POST /expense
    """
    new_entry = entry_service.create_entry(
        identity.user_id, EntryCreate.from_payload(payload), db
    )
    return EntryCreated(id=new_entry.id)


@router.get("/expenses", response_model=List[EntryRead])
def list_entries(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """
    All of the caller's entries, newest date first.
    """
    return entry_service.list_entries(identity.user_id, db)


@router.put("/expense/{entry_id}", response_model=EntryUpdated)
def update_entry(
    entry_id: str,
    identity: Identity = Depends(get_current_identity),
    payload: Dict[str, Any] = Depends(checked_body(ENTRY_CHECKS)),
    db: Session = Depends(get_db),
):
    """
    Replace all fields of one of the caller's entries.

    {"updated": 0} covers both "no such entry" and "someone else's entry";
    the two are deliberately not told apart.
    """
    parsed_id = _parse_entry_id(entry_id)
    if parsed_id is None:
        return EntryUpdated(updated=0)
    count = entry_service.update_entry(
        identity.user_id, parsed_id, EntryCreate.from_payload(payload), db
    )
    return EntryUpdated(updated=count)


@router.delete("/expense/{entry_id}", response_model=EntryDeleted)
def delete_entry(
    entry_id: str,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """
    Delete one of the caller's entries. Same zero-count rule as update.
    """
    parsed_id = _parse_entry_id(entry_id)
    if parsed_id is None:
        return EntryDeleted(deleted=0)
    return EntryDeleted(deleted=entry_service.delete_entry(identity.user_id, parsed_id, db))


@router.get("/summary", response_model=List[SummaryBucket])
def summary(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """
    Income and expense totals per 'YYYY-MM' for the caller.
    """
    return get_monthly_summary(identity.user_id, db)
