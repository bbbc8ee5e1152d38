# FILE: backend/routers/user.py

from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

# Pydantic schemas for credentials and responses
from backend.schemas.user import Credentials, TokenResponse, UserRead

# Service functions that interact with the database
from backend.services.user import authenticate_user, register_user

# Body pre-conditions
from backend.deps import checked_body
from backend.utils.checks import LOGIN_CHECKS, REGISTER_CHECKS

# Database session provider
from backend.database import get_db

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=UserRead)
def register(
    payload: Dict[str, Any] = Depends(checked_body(REGISTER_CHECKS)),
    db: Session = Depends(get_db),
):
    """
    Register a new user: POST /register

    1. Body rules: username present and at least 4 characters, password
       at least 4 characters. All violations come back together as a 400.
    2. A taken username is a 400 as well.
    3. Returns {id, username}; the password hash never leaves the server.
    """
    creds = Credentials.from_payload(payload)
    return register_user(creds.username, creds.password, db)


@router.post("/login", response_model=TokenResponse)
def login(
    payload: Dict[str, Any] = Depends(checked_body(LOGIN_CHECKS)),
    db: Session = Depends(get_db),
):
    """
    Exchange a username/password for a bearer token: POST /login

    - 400 if either field is missing
    - 401 "User not found" or "Invalid password"
    - 200 {token}, valid for one hour
    """
    creds = Credentials.from_payload(payload)
    token = authenticate_user(creds.username, creds.password, db)
    return TokenResponse(token=token)
