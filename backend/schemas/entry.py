"""
backend/schemas/entry.py

Pydantic schemas for ledger entries and the monthly summary.

Request bodies are first run through backend/utils/checks.ENTRY_CHECKS so
clients get the full list of violated rules; EntryCreate is then built from
the already-valid payload with from_payload().

- EntryCreate: the four user-supplied fields, used for create and full update
- EntryRead: output, adds 'id' and 'owner_id'
- EntryCreated / EntryUpdated / EntryDeleted: mutation responses
- SummaryBucket: one month of totals
"""

from typing import Any, Literal, Mapping
from pydantic import BaseModel, ConfigDict, Field

from backend.utils.checks import parse_positive_number


class EntryBase(BaseModel):
    """
    Shared entry fields. 'date' stays an ISO 'YYYY-MM-DD' string.
    """
    type: Literal["expense", "income"]
    amount: float = Field(gt=0)
    date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")
    description: str = Field(min_length=1)


class EntryCreate(EntryBase):
    """
    For creating an entry or replacing all of its fields.
    """

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "EntryCreate":
        return cls(
            type=payload["type"],
            amount=parse_positive_number(payload["amount"]),
            date=payload["date"],
            description=payload["description"],
        )


class EntryRead(EntryBase):
    """
    Schema for returning entries to their owner.
    """
    id: int
    owner_id: int

    model_config = ConfigDict(from_attributes=True)


class EntryCreated(BaseModel):
    id: int


class EntryUpdated(BaseModel):
    updated: int


class EntryDeleted(BaseModel):
    deleted: int


class SummaryBucket(BaseModel):
    """
    Totals for one 'YYYY-MM' period.
    """
    period: str
    total_income: float
    total_expense: float
