"""
backend/models/user.py

Represents a registered user of the expense ledger. Each user owns their
own LedgerEntry rows and nobody else's. Users are created on registration
and never modified or deleted through the API.
"""

from __future__ import annotations
from typing import List, TYPE_CHECKING
import bcrypt
from sqlalchemy import Integer, String
from sqlalchemy.orm import relationship, Mapped, mapped_column
from backend.database import Base

if TYPE_CHECKING:
    from backend.models.entry import LedgerEntry

# Fixed bcrypt work factor
BCRYPT_ROUNDS = 10

# bcrypt only looks at the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


class User(Base):
    """
    The credential table. Each user has:
      - An ID (PK)
      - A unique username
      - A bcrypt password hash (never the plaintext)
      - A list of ledger entries they own
    """

    __tablename__ = 'users'

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    # Unique username for login; the UNIQUE constraint is the source of truth
    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    # Bcrypt-hashed password storage
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # Relationship: a user can have many ledger entries
    entries: Mapped[List[LedgerEntry]] = relationship(
        "LedgerEntry",
        back_populates="owner",
        doc="All income/expense entries owned by this user."
    )

    def set_password(self, password: str) -> None:
        """
        Hash and store the user's password with a fresh salt.
        Input past 72 bytes is ignored, the same way bcrypt always has.
        """
        raw = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
        self.password_hash = bcrypt.hashpw(raw, salt).decode("utf-8")

    def verify_password(self, password: str) -> bool:
        """
        Verify a plain-text password against the stored hash.
        """
        raw = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        return bcrypt.checkpw(raw, self.password_hash.encode("utf-8"))

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username})>"
