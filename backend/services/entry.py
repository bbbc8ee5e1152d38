"""
backend/services/entry.py

Owner-scoped CRUD for ledger entries.

Every query and every mutation filters on owner_id, so an entry that belongs
to someone else behaves exactly like an entry that does not exist: update and
delete report a count of 0 in both cases. Each mutation is one SQL statement
on at most one row.
"""

import logging
from typing import List

from sqlalchemy import delete, or_, update
from sqlalchemy.orm import Session

from backend.models.entry import LedgerEntry
from backend.schemas.entry import EntryCreate

logger = logging.getLogger(__name__)


def list_entries(owner_id: int, db: Session) -> List[LedgerEntry]:
    """
    Return every entry of the owner, newest date first. Entries sharing a
    date are ordered by id descending so repeated calls agree.
    """
    return (
        db.query(LedgerEntry)
        .filter(LedgerEntry.owner_id == owner_id)
        .order_by(LedgerEntry.date.desc(), LedgerEntry.id.desc())
        .all()
    )


def create_entry(owner_id: int, entry: EntryCreate, db: Session) -> LedgerEntry:
    """
    Insert a validated entry bound to owner_id and return the stored row.
    """
    new_entry = LedgerEntry(owner_id=owner_id, **entry.model_dump())
    db.add(new_entry)
    db.commit()
    db.refresh(new_entry)
    logger.info(f"Created entry id={new_entry.id} for owner id={owner_id}")
    return new_entry


def update_entry(owner_id: int, entry_id: int, entry: EntryCreate, db: Session) -> int:
    """
    Replace type, amount, date and description of the entry matching both
    entry_id and owner_id. Returns the number of rows modified (0 or 1):
    writing back the values the entry already has modifies nothing.
    """
    result = db.execute(
        update(LedgerEntry)
        .where(
            LedgerEntry.id == entry_id,
            LedgerEntry.owner_id == owner_id,
            or_(
                LedgerEntry.type != entry.type,
                LedgerEntry.amount != entry.amount,
                LedgerEntry.date != entry.date,
                LedgerEntry.description != entry.description,
            ),
        )
        .values(**entry.model_dump())
    )
    db.commit()
    logger.info(f"Update entry id={entry_id} owner id={owner_id}: {result.rowcount} row(s)")
    return result.rowcount


def delete_entry(owner_id: int, entry_id: int, db: Session) -> int:
    """
    Delete the entry matching both entry_id and owner_id.
    Returns the number of rows deleted (0 or 1).
    """
    result = db.execute(
        delete(LedgerEntry)
        .where(LedgerEntry.id == entry_id, LedgerEntry.owner_id == owner_id)
    )
    db.commit()
    logger.info(f"Delete entry id={entry_id} owner id={owner_id}: {result.rowcount} row(s)")
    return result.rowcount
