from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
import logging
import os

logger = logging.getLogger(__name__)

# Load environment variables
DEFAULT_SECRET_KEY = "default_secret_key"
SECRET_KEY = os.getenv("SECRET_KEY", DEFAULT_SECRET_KEY)
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

if SECRET_KEY == DEFAULT_SECRET_KEY:
    logger.warning("SECRET_KEY not set; signing tokens with the built-in default key")

NO_TOKEN = "No token provided"
INVALID_TOKEN = "Invalid or expired token"

# --- Result Types ---

@dataclass(frozen=True)
class Identity:
    """The owner identity carried by a verified token."""
    user_id: int
    username: str


@dataclass(frozen=True)
class TokenCheck:
    """
    Outcome of verify_access_token(): either an identity or a failure reason.
    """
    identity: Optional[Identity] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.identity is not None

# --- JWT Helper Functions ---

def create_access_token(user_id: int, username: str, now: Optional[datetime] = None) -> str:
    """
    Generate a signed JWT for a user.

    Args:
        user_id (int): ID of the authenticated user.
        username (str): Their username.
        now (datetime, optional): Issuance time; defaults to the current UTC time.

    Returns:
        str: Encoded JWT token with claims user_id, username and exp.
    """
    issued_at = now or datetime.now(timezone.utc)
    expire = issued_at + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {"user_id": user_id, "username": username, "exp": expire}
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def verify_access_token(token: Optional[str]) -> TokenCheck:
    """
    Verify the signature and expiry of a JWT access token.

    Args:
        token (str): The JWT token to verify, or None if the client sent none.

    Returns:
        TokenCheck: identity on success, otherwise the reason it was rejected.
    """
    if not token:
        return TokenCheck(reason=NO_TOKEN)
    try:
        payload = jwt.decode(
            token, SECRET_KEY, algorithms=[ALGORITHM], options={"require_exp": True}
        )
    except JWTError as e:
        logger.info(f"Rejected token: {e}")
        return TokenCheck(reason=INVALID_TOKEN)

    user_id = payload.get("user_id")
    username = payload.get("username")
    if not isinstance(user_id, int) or not isinstance(username, str):
        logger.info("Rejected token: missing identity claims")
        return TokenCheck(reason=INVALID_TOKEN)
    return TokenCheck(identity=Identity(user_id=user_id, username=username))
