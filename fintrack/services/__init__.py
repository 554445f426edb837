"""Services package."""

from fintrack.services.storage import (
    FileKeyValueStore,
    InMemoryKeyValueStore,
    KeyValueStore,
    StorageError,
)
from fintrack.services.auth import (
    CorruptDirectoryError,
    InvalidCredentialsError,
    MalformedTokenError,
    NotAuthenticatedError,
    SessionError,
    SessionTokenCodec,
    SignatureMismatchError,
    TokenError,
    UserDirectory,
    UsernameTakenError,
)
from fintrack.services.records import (
    CorruptCollectionError,
    ScopedDataStore,
)

__all__ = [
    # Storage services
    "FileKeyValueStore",
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "StorageError",
    # Auth services
    "CorruptDirectoryError",
    "InvalidCredentialsError",
    "MalformedTokenError",
    "NotAuthenticatedError",
    "SessionError",
    "SessionTokenCodec",
    "SignatureMismatchError",
    "TokenError",
    "UserDirectory",
    "UsernameTakenError",
    # Record services
    "CorruptCollectionError",
    "ScopedDataStore",
]
