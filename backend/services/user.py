"""
backend/services/user.py

Credential storage and authentication: lookup by username, registration with
a bcrypt hash, and login that returns a signed bearer token.
Ledger entries are handled separately in backend/services/entry.py.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backend.exceptions import AuthError, ConflictError
from backend.models.user import User
from backend.utils.auth import create_access_token

logger = logging.getLogger(__name__)

USERNAME_TAKEN = "Username already exists"
USER_NOT_FOUND = "User not found"
INVALID_PASSWORD = "Invalid password"


def get_user_by_username(username: str, db: Session) -> User | None:
    """
    Return a User by username, or None if not found.
    """
    return db.query(User).filter(User.username == username).first()


def insert_user(username: str, password: str, db: Session) -> User:
    """
    Hash the password and insert one user row.

    The UNIQUE constraint on users.username decides races between two
    registrations of the same name; the loser gets ConflictError.
    """
    new_user = User(username=username)
    new_user.set_password(password)
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info(f"Registration rejected by unique constraint: {username!r}")
        raise ConflictError(USERNAME_TAKEN)
    db.refresh(new_user)
    return new_user


def register_user(username: str, password: str, db: Session) -> User:
    """
    Create a new User. The caller has already validated field lengths.
    Raises ConflictError if the username is taken.
    """
    if get_user_by_username(username, db):
        logger.info(f"Registration rejected, username exists: {username!r}")
        raise ConflictError(USERNAME_TAKEN)

    new_user = insert_user(username, password, db)
    logger.info(f"Registered user id={new_user.id} username={new_user.username!r}")
    return new_user


def authenticate_user(username: str, password: str, db: Session) -> str:
    """
    Check a username/password pair and return a fresh access token.

    The two failure messages differ on purpose (clients have relied on them),
    even though that reveals whether a username exists.
    """
    user = get_user_by_username(username, db)
    if not user:
        logger.info(f"Login failed, unknown user: {username!r}")
        raise AuthError(USER_NOT_FOUND, status_code=401)

    if not user.verify_password(password):
        logger.info(f"Login failed, bad password for user id={user.id}")
        raise AuthError(INVALID_PASSWORD, status_code=401)

    logger.info(f"Login succeeded for user id={user.id}")
    return create_access_token(user.id, user.username)
