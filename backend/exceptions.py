"""
backend/exceptions.py

Domain exceptions raised by the service layer and request pre-conditions.
backend/main.py registers one handler per class that turns it into a JSON
error body with the matching HTTP status.
"""

from typing import Iterable


class LedgerError(Exception):
    """Base class for every error this application maps to an HTTP response."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(LedgerError):
    """Raised when a request body breaks one or more field rules."""

    status_code = 400

    def __init__(self, messages: Iterable[str]) -> None:
        self.messages = list(messages)
        super().__init__("; ".join(self.messages))


class ConflictError(LedgerError):
    """Raised when a username is already registered."""

    status_code = 400


class AuthError(LedgerError):
    """
    Raised for failed logins and rejected bearer tokens.
    401 for missing credentials or failed login, 403 for a bad token.
    """

    def __init__(self, message: str, status_code: int = 401) -> None:
        super().__init__(message)
        self.status_code = status_code


class ServiceUnavailable(LedgerError):
    """Raised while the database connection is not established."""

    status_code = 503

    def __init__(self, message: str = "Database not ready") -> None:
        super().__init__(message)
