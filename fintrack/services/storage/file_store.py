"""
File-Backed Key-Value Store

DESIGN DECISION: Each key lives in its own file under one root directory.
1. Mirrors the per-key independence of the browser store it replaces
2. A torn write can only ever damage one key
3. Users can inspect or back up their data with ordinary file tools

TRADEOFFS:
- No cross-key atomicity (the session layer never assumes any)
- One writer process assumed; there is no locking

Each write goes to a temp file in the same directory and is moved into
place with os.replace, so a reader sees either the old or the new value.
Transient OS errors on write are retried.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional
from urllib.parse import quote, unquote

from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from fintrack.config import TrackerSettings, get_settings
from fintrack.services.storage.interface import KeyValueStore, StorageError


VALUE_SUFFIX = ".kv"


class FileKeyValueStore(KeyValueStore):
    """
    File-per-key implementation of the key-value store.

    Keys are percent-encoded into file names, so any string is a valid key.
    """

    def __init__(
        self,
        root: Optional[Path] = None,
        settings: Optional[TrackerSettings] = None,
    ):
        self._settings = settings or get_settings()
        self._root = Path(root) if root is not None else self._settings.storage_dir
        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create store directory {self._root}: {e}") from e

    @property
    def root(self) -> Path:
        return self._root

    def _path_for(self, key: str) -> Path:
        """File holding a key's value."""
        return self._root / (quote(key, safe="") + VALUE_SUFFIX)

    def _retrying(self) -> Retrying:
        return Retrying(
            stop=stop_after_attempt(self._settings.write_retry_attempts),
            wait=wait_exponential(multiplier=0.05, min=0.05, max=1),
            retry=retry_if_exception_type(OSError),
            reraise=True,
        )

    def get_item(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read key {key!r}: {e}") from e

    def _write(self, path: Path, value: str) -> None:
        """Write a value atomically next to its final location."""
        fd, tmp_name = tempfile.mkstemp(dir=self._root, prefix=".tmp-")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def set_item(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"Store values must be strings, got {type(value).__name__}")

        path = self._path_for(key)
        try:
            for attempt in self._retrying():
                with attempt:
                    self._write(path, value)
        except OSError as e:
            raise StorageError(f"Failed to write key {key!r}: {e}") from e

    def remove_item(self, key: str) -> None:
        path = self._path_for(key)
        try:
            for attempt in self._retrying():
                with attempt:
                    path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to remove key {key!r}: {e}") from e

    def keys(self) -> list[str]:
        try:
            names = [
                entry.name
                for entry in self._root.iterdir()
                if entry.is_file() and entry.name.endswith(VALUE_SUFFIX)
            ]
        except OSError as e:
            raise StorageError(f"Failed to list {self._root}: {e}") from e
        return sorted(unquote(name[: -len(VALUE_SUFFIX)]) for name in names)
