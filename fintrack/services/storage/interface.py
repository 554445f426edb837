"""
Abstract Key-Value Store Interface

DESIGN DECISION: The session layer persists through one primitive only:
a flat, synchronous, string-keyed store. This allows us to:
1. Keep one key per collection, the layout existing stored data uses
2. Use in-memory storage for testing
3. Swap in a file-backed store, or anything else with get/set/remove

The interface is intentionally tiny. There are no transactions across
keys, and callers must not assume any.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """
    Abstract interface for the shared key-value store.

    Any storage implementation must implement these methods.
    Values are opaque strings; serialization is the caller's job.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Store a value, replacing any previous one.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """
        Remove a key. Removing an absent key is not an error.

        Raises:
            StorageError: If the removal fails
        """
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List every key currently stored."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass
