# backend/models/__init__.py

"""
Centralizes model imports so every table is registered on Base.metadata
whenever any model is used.
"""

from backend.database import Base

# Models from user.py
from .user import User

# Models (and type constants) from entry.py
from .entry import LedgerEntry, ENTRY_TYPES, ENTRY_TYPE_EXPENSE, ENTRY_TYPE_INCOME
