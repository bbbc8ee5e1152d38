"""
backend/models/entry.py

A LedgerEntry is one income or expense record belonging to exactly one user.

Dates are kept as ISO-8601 'YYYY-MM-DD' strings so the monthly summary can
group on the first seven characters directly in SQL, and so lexical order
matches chronological order.
"""

from __future__ import annotations
from typing import TYPE_CHECKING
from sqlalchemy import CheckConstraint, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship, Mapped, mapped_column

from backend.database import Base

if TYPE_CHECKING:
    from backend.models.user import User

ENTRY_TYPE_EXPENSE = "expense"
ENTRY_TYPE_INCOME = "income"
ENTRY_TYPES = (ENTRY_TYPE_EXPENSE, ENTRY_TYPE_INCOME)


class LedgerEntry(Base):
    """
    Columns:
      - id: PK, grows with insertion order (used as the list tie-breaker)
      - owner_id: the user who created the entry; every query filters on it
      - type: 'expense' or 'income'
      - amount: strictly positive
      - date: 'YYYY-MM-DD'
      - description: free text, never empty
    """

    __tablename__ = "ledger_entries"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_ledger_entries_amount_positive"),
        CheckConstraint("type IN ('expense', 'income')", name="ck_ledger_entries_type"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    owner_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True
    )
    type: Mapped[str] = mapped_column(String(10), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    date: Mapped[str] = mapped_column(String(10), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    owner: Mapped[User] = relationship("User", back_populates="entries")

    def __repr__(self) -> str:
        return (
            f"<LedgerEntry(id={self.id}, owner_id={self.owner_id}, type={self.type}, "
            f"amount={self.amount}, date={self.date})>"
        )
