"""
backend/services/summary.py

Monthly income/expense rollup for one owner, computed in a single GROUP BY
over the owner's entries. The period key is the first seven characters of
the stored 'YYYY-MM-DD' date.
"""

from typing import Dict, List

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from backend.models.entry import LedgerEntry, ENTRY_TYPE_EXPENSE, ENTRY_TYPE_INCOME


def _total_for(entry_type: str):
    return func.sum(
        case((LedgerEntry.type == entry_type, LedgerEntry.amount), else_=0)
    )


def get_monthly_summary(owner_id: int, db: Session) -> List[Dict]:
    """
    Returns one dict per month the owner has entries in:
      {"period": "YYYY-MM", "total_income": float, "total_expense": float}

    A month with no income reports total_income 0 (same for expense).
    Bucket order is whatever the database grouping yields.
    """
    period = func.substr(LedgerEntry.date, 1, 7)
    rows = (
        db.query(
            period.label("period"),
            _total_for(ENTRY_TYPE_INCOME).label("total_income"),
            _total_for(ENTRY_TYPE_EXPENSE).label("total_expense"),
        )
        .filter(LedgerEntry.owner_id == owner_id)
        .group_by(period)
        .all()
    )
    return [
        {
            "period": row.period,
            "total_income": row.total_income or 0,
            "total_expense": row.total_expense or 0,
        }
        for row in rows
    ]
