"""Authentication services package."""

from fintrack.services.auth.errors import (
    InvalidCredentialsError,
    MalformedTokenError,
    NotAuthenticatedError,
    SessionError,
    SignatureMismatchError,
    TokenError,
    UsernameTakenError,
)
from fintrack.services.auth.directory import CorruptDirectoryError, UserDirectory
from fintrack.services.auth.token_codec import SessionTokenCodec

__all__ = [
    # Exceptions
    "CorruptDirectoryError",
    "InvalidCredentialsError",
    "MalformedTokenError",
    "NotAuthenticatedError",
    "SessionError",
    "SignatureMismatchError",
    "TokenError",
    "UsernameTakenError",
    # Services
    "SessionTokenCodec",
    "UserDirectory",
]
