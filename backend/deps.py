"""
backend/deps.py

FastAPI dependencies that act as request pre-conditions. They run before the
handler in this order: database readiness (app-wide), bearer token, then the
JSON body checks. Each one either passes a value on or raises a domain
exception that backend/main.py turns into a JSON error.
"""

import json
import logging
from typing import Any, Dict, Iterable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from backend.database import DatabaseState
from backend.exceptions import AuthError, ServiceUnavailable, ValidationError
from backend.utils.auth import Identity, NO_TOKEN, verify_access_token
from backend.utils.checks import Check, run_checks

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_db_state(request: Request) -> DatabaseState:
    """
    The readiness object created with the app (see backend/main.py).
    """
    return request.app.state.db_state


def require_db_ready(state: DatabaseState = Depends(get_db_state)) -> None:
    """
    Rejects the request with 503 until the database connection is up.
    Evaluated on every request.
    """
    if not state.ready:
        raise ServiceUnavailable()


def get_current_identity(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Identity:
    """
    Verifies the 'Authorization: Bearer <token>' header.
    401 when no token is sent, 403 when it is invalid or expired.
    """
    token = creds.credentials if creds else None
    result = verify_access_token(token)
    if result.ok:
        return result.identity
    status_code = 401 if result.reason == NO_TOKEN else 403
    raise AuthError(result.reason, status_code=status_code)


async def read_json_body(request: Request) -> Any:
    """
    Decode the request body. Empty or malformed JSON reads as an empty object
    so the body checks report every missing field.
    """
    raw = await request.body()
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except (ValueError, UnicodeDecodeError):
        logger.info("Request body is not valid JSON")
        return {}


def checked_body(checks: Iterable[Check]):
    """
    Build a dependency that runs a rule set against the JSON body and raises
    ValidationError listing every failed rule.
    """
    checks = tuple(checks)

    def dependency(payload: Any = Depends(read_json_body)) -> Dict[str, Any]:
        failures = run_checks(payload, checks)
        if failures:
            raise ValidationError(failures)
        return payload

    return dependency
