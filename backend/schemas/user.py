"""
backend/schemas/user.py

Defines the Pydantic schemas for registration, login, and user output.
The raw password only ever appears on the way in; UserRead never carries
the hash.
"""

from typing import Any, Mapping
from pydantic import BaseModel, ConfigDict


class UserBase(BaseModel):
    """
    Shared user fields. 'username' is the unique identifier.
    """
    username: str


class Credentials(UserBase):
    """
    Body of /register and /login. The service layer hashes 'password'
    before anything is stored.
    """
    password: str

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Credentials":
        return cls(
            username=str(payload.get("username", "")),
            password=str(payload.get("password", "")),
        )


class UserRead(UserBase):
    """
    Schema for returning user data to clients.
    Includes the DB 'id' but excludes the hashed password.
    """
    id: int

    model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
    """
    Successful login: the bearer token to send as 'Authorization: Bearer <token>'.
    """
    token: str
