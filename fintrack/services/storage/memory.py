"""In-memory key-value store, for tests and throwaway sessions."""

from typing import Optional

from fintrack.services.storage.interface import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store. Contents vanish with the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"Store values must be strings, got {type(value).__name__}")
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)
