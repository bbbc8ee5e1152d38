"""
Constants and small helpers shared by the test modules.
"""

import uuid

DEFAULT_PASSWORD = "pass1234"

SAMPLE_ENTRY = {
    "type": "expense",
    "amount": 12.5,
    "date": "2025-01-05",
    "description": "lunch",
}


def unique_username(prefix: str = "user") -> str:
    """Usernames are unique per call so tests can share one database."""
    return f"{prefix}_{uuid.uuid4().hex[:10]}"
