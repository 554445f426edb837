"""
User Directory

The persisted table of registered usernames and their passwords, kept
as one JSON object under {prefix}_users:

    {"alice": {"password": "pw1"}, "bob": {"password": "hunter2"}}

DESIGN DECISION: Nothing is cached. Every call reloads the map from the
store, so a write made by another process is seen on the next call.

SECURITY NOTE: Passwords are stored and compared in plaintext.
"""

import hmac
import json
from typing import Optional

from fintrack.config import TrackerSettings, get_settings
from fintrack.models.auth import Credential
from fintrack.services.auth.errors import InvalidCredentialsError, UsernameTakenError
from fintrack.services.storage import KeyValueStore, StorageError


class CorruptDirectoryError(StorageError):
    """The stored directory cannot be parsed."""
    pass


class UserDirectory:
    """
    Registers and authenticates users against the stored directory.

    Usernames are matched case-sensitively and without normalization.
    """

    def __init__(
        self,
        store: KeyValueStore,
        settings: Optional[TrackerSettings] = None,
    ):
        self._store = store
        self._settings = settings or get_settings()

    def _load(self) -> dict[str, dict]:
        """
        Read the whole directory map.

        An absent key is an empty directory. An unreadable value is NOT:
        treating it as empty would let the next register overwrite
        every other account.
        """
        raw = self._store.get_item(self._settings.users_key)
        if raw is None:
            return {}

        try:
            users = json.loads(raw)
        except ValueError as e:
            raise CorruptDirectoryError(f"User directory is not valid JSON: {e}") from e

        if not isinstance(users, dict):
            raise CorruptDirectoryError("User directory is not a JSON object")
        return users

    def _save(self, users: dict[str, dict]) -> None:
        self._store.set_item(self._settings.users_key, json.dumps(users))

    def exists(self, username: str) -> bool:
        return username in self._load()

    def register(self, username: str, password: str) -> Credential:
        """
        Add a new user.

        The whole map is written back in a single store write.

        Raises:
            UsernameTakenError: If the username is already registered
            CorruptDirectoryError: If the stored directory is unreadable
        """
        users = self._load()
        if username in users:
            raise UsernameTakenError(username)

        credential = Credential(username=username, password=password)
        users[username] = credential.to_directory_entry()
        self._save(users)
        return credential

    def authenticate(self, username: str, password: str) -> Credential:
        """
        Check a username/password pair.

        Raises:
            InvalidCredentialsError: Unknown user or wrong password
            CorruptDirectoryError: If the stored directory is unreadable
        """
        entry = self._load().get(username)
        stored = entry.get("password") if isinstance(entry, dict) else None

        if not isinstance(stored, str) or not hmac.compare_digest(
            stored.encode("utf-8"), password.encode("utf-8")
        ):
            raise InvalidCredentialsError("Invalid username or password")

        return Credential(username=username, password=stored)
