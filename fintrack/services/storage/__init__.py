"""
Storage Services Package

Provides the abstract key-value store interface and its implementations.
The file-backed store is the default; the in-memory store backs tests.
"""

from fintrack.services.storage.interface import (
    KeyValueStore,
    StorageError,
)
from fintrack.services.storage.memory import InMemoryKeyValueStore
from fintrack.services.storage.file_store import FileKeyValueStore

__all__ = [
    # Interface
    "KeyValueStore",
    # Exceptions
    "StorageError",
    # Implementations
    "FileKeyValueStore",
    "InMemoryKeyValueStore",
]
