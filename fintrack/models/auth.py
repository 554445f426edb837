"""
Authentication Models

Credentials, token claims and the outcome of an auth action.

SECURITY NOTE: Credential.password is the plaintext password, exactly
as stored in the directory. See DESIGN.md before relying on it.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SessionState(str, Enum):
    """States of the session lifecycle."""
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"  # only observable mid-call
    AUTHENTICATED = "authenticated"


class Credential(BaseModel):
    """A directory entry. Never mutated, never deleted."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    def to_directory_entry(self) -> dict:
        """Value stored under the username in the directory map."""
        return {"password": self.password}


class TokenClaims(BaseModel):
    """Claims carried by a session token."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    username: str = Field(..., min_length=1)


class AuthResult(BaseModel):
    """
    Outcome of signup, login or startup restore.

    Failures carry a message fit to show the user and leave the
    session exactly as it was.
    """

    success: bool
    state: SessionState
    username: Optional[str] = None
    message: str = ""
    error_code: Optional[str] = Field(
        default=None,
        description="Machine-readable failure reason"
    )
