"""
backend/utils/checks.py

Request body pre-conditions as plain functions.

A check takes the decoded JSON payload and returns None when it passes or a
human-readable reason when it fails. run_checks() evaluates a whole rule set
and returns every failure, so a client sees all problems at once.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Any, Callable, Iterable, List, Mapping, Optional

from backend.models.entry import ENTRY_TYPES

Check = Callable[[Mapping[str, Any]], Optional[str]]

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Keeps any month's SUM(amount) finite
MAX_AMOUNT = 1_000_000_000_000_000


def _text(payload: Mapping[str, Any], field: str) -> str:
    value = payload.get(field)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def required(field: str, message: str) -> Check:
    """Fails when the field is missing, null or an empty string."""
    def check(payload: Mapping[str, Any]) -> Optional[str]:
        return message if _text(payload, field) == "" else None
    return check


def min_length(field: str, length: int, message: str) -> Check:
    def check(payload: Mapping[str, Any]) -> Optional[str]:
        return message if len(_text(payload, field)) < length else None
    return check


def one_of(field: str, allowed: Iterable[str], message: str) -> Check:
    allowed = tuple(allowed)

    def check(payload: Mapping[str, Any]) -> Optional[str]:
        return None if payload.get(field) in allowed else message
    return check


def parse_positive_number(value: Any) -> Optional[float]:
    """Return value as a float if it is a finite number > 0, else None."""
    if isinstance(value, bool) or value is None:
        return None
    if not isinstance(value, (int, float, str)):
        return None
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (ValueError, OverflowError):
        return None
    # NaN and inf both fail this
    if not (0 < number < float("inf")):
        return None
    return number


def positive_number(field: str, message: str) -> Check:
    def check(payload: Mapping[str, Any]) -> Optional[str]:
        return message if parse_positive_number(payload.get(field)) is None else None
    return check


def at_most(field: str, limit: float, message: str) -> Check:
    """Only judges values that parse as positive numbers; positive_number reports the rest."""
    def check(payload: Mapping[str, Any]) -> Optional[str]:
        number = parse_positive_number(payload.get(field))
        return message if number is not None and number > limit else None
    return check


def is_iso_date(value: Any) -> bool:
    """True for a real calendar date written as YYYY-MM-DD."""
    if not isinstance(value, str) or not ISO_DATE_PATTERN.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def iso_date(field: str, message: str) -> Check:
    def check(payload: Mapping[str, Any]) -> Optional[str]:
        return None if is_iso_date(payload.get(field)) else message
    return check


def not_empty(field: str, message: str) -> Check:
    """Fails on a missing, non-string or zero-length value. Whitespace counts as content."""
    def check(payload: Mapping[str, Any]) -> Optional[str]:
        value = payload.get(field)
        if not isinstance(value, str) or value == "":
            return message
        return None
    return check


def run_checks(payload: Any, checks: Iterable[Check]) -> List[str]:
    """
    Run every check against the payload and collect the failure reasons
    in declaration order. A non-object payload is checked as {}.
    """
    if not isinstance(payload, Mapping):
        payload = {}
    failures = []
    for check in checks:
        reason = check(payload)
        if reason is not None:
            failures.append(reason)
    return failures

# -------------------------------------------------
# RULE SETS
# -------------------------------------------------

REGISTER_CHECKS = (
    required("username", "Username is required"),
    min_length("username", 4, "Username must be at least 4 characters"),
    min_length("password", 4, "Password must be at least 4 characters"),
)

LOGIN_CHECKS = (
    required("username", "Username is required"),
    required("password", "Password is required"),
)

ENTRY_CHECKS = (
    one_of("type", ENTRY_TYPES, "type must be either expense or income"),
    positive_number("amount", "amount must be a number greater than 0"),
    at_most("amount", MAX_AMOUNT, f"amount must be at most {MAX_AMOUNT}"),
    iso_date("date", "date must be a valid date in YYYY-MM-DD format"),
    not_empty("description", "description must not be empty"),
)
