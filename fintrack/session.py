"""
Session Lifecycle for fintrack

This module ties together the token codec, the user directory and the
scoped data store, and defines the four auth flows:
1. Signup  (register → issue token → load records)
2. Login   (authenticate → issue token → load records)
3. Logout  (drop token → drop in-memory records)
4. Restore (stored token → verify → load records), the only way to
   reach an authenticated session without a password

DESIGN DECISION: Session state is an explicit object, not ambient state.
Consumers hold a SessionLifecycle and pass its record set to the
ScopedDataStore mutators.

A failed auth action never changes state: whatever session was active
before the call is still active after it.
"""

from typing import Callable, Optional

from fintrack.audit import AuditLogger
from fintrack.config import TrackerSettings, get_settings
from fintrack.models.auth import AuthResult, SessionState, TokenClaims
from fintrack.models.records import ScopedRecordSet, UserSettings
from fintrack.services.auth import (
    CorruptDirectoryError,
    InvalidCredentialsError,
    NotAuthenticatedError,
    SessionTokenCodec,
    TokenError,
    UserDirectory,
    UsernameTakenError,
)
from fintrack.services.records import ScopedDataStore
from fintrack.services.storage import (
    FileKeyValueStore,
    KeyValueStore,
    StorageError,
)


CREDENTIALS_REQUIRED_MESSAGE = "Username and password are required."
USERNAME_TAKEN_MESSAGE = "Username already exists."
INVALID_CREDENTIALS_MESSAGE = "Invalid username or password."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."


class SessionLifecycle:
    """
    State machine for the active session.

    States:
        UNAUTHENTICATED → (signup | login | restore) → AUTHENTICATED
        AUTHENTICATED   → logout                     → UNAUTHENTICATED

    AUTHENTICATING is held only while an auth call runs.
    """

    def __init__(
        self,
        store: KeyValueStore,
        settings: Optional[TrackerSettings] = None,
        codec: Optional[SessionTokenCodec] = None,
        directory: Optional[UserDirectory] = None,
        data_store: Optional[ScopedDataStore] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._settings = settings or get_settings()
        self._store = store
        self._audit_logger = audit_logger
        self._codec = codec or SessionTokenCodec(settings=self._settings)
        self._directory = directory or UserDirectory(store, self._settings)
        self._data_store = data_store or ScopedDataStore(
            store, self._settings, audit_logger
        )

        self._state = SessionState.UNAUTHENTICATED
        self._username: Optional[str] = None
        self._records: Optional[ScopedRecordSet] = None

    # -------------------------------------------------------------------------
    # Read-only view
    # -------------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def username(self) -> Optional[str]:
        return self._username

    @property
    def is_authenticated(self) -> bool:
        return self._state == SessionState.AUTHENTICATED

    @property
    def records(self) -> Optional[ScopedRecordSet]:
        """The active user's record set, or None when signed out."""
        return self._records

    @property
    def data_store(self) -> ScopedDataStore:
        return self._data_store

    @property
    def settings(self) -> UserSettings:
        """Active user's settings, or the anonymous defaults."""
        if self._records is not None:
            return self._records.settings
        return UserSettings(currency=self._settings.default_currency)

    def require_records(self) -> ScopedRecordSet:
        """
        The active record set.

        Raises:
            NotAuthenticatedError: If no session is active
        """
        if self._records is None:
            raise NotAuthenticatedError("No active session")
        return self._records

    # -------------------------------------------------------------------------
    # Internal transitions
    # -------------------------------------------------------------------------

    def _establish(self, username: str) -> None:
        """Persist a token for username and load their records."""
        token = self._codec.issue(TokenClaims(username=username))
        self._store.set_item(self._settings.session_key, token)
        self._records = self._data_store.load(username)
        self._username = username
        self._state = SessionState.AUTHENTICATED

    def _enter(self, username: str, check: Callable[[], object]) -> None:
        """
        Run a credential check and, if it passes, establish the session.

        On any failure the previous state is put back and the error re-raised.
        """
        previous = (self._state, self._username, self._records)
        self._state = SessionState.AUTHENTICATING
        try:
            check()
            self._establish(username)
        except Exception:
            self._state, self._username, self._records = previous
            raise

    def _clear(self) -> None:
        self._state = SessionState.UNAUTHENTICATED
        self._username = None
        self._records = None

    def _discard_token(self) -> None:
        """Remove the stored token. A failing store is logged, not raised."""
        try:
            self._store.remove_item(self._settings.session_key)
        except StorageError as e:
            if self._audit_logger:
                self._audit_logger.log_error("token_remove_failed", str(e))

    def _failure(self, message: str, error_code: str) -> AuthResult:
        return AuthResult(
            success=False,
            state=self._state,
            username=self._username,
            message=message,
            error_code=error_code,
        )

    def _unexpected(self, action: str, error: Exception, username: Optional[str]) -> AuthResult:
        if self._audit_logger and isinstance(error, CorruptDirectoryError):
            self._audit_logger.log_directory_corrupt(str(error))
        elif self._audit_logger:
            self._audit_logger.log_error(
                error_type=f"{action}_failed",
                error_message=str(error),
                username=username,
            )
        return self._failure(UNEXPECTED_ERROR_MESSAGE, "storage_error")

    # -------------------------------------------------------------------------
    # Auth flows
    # -------------------------------------------------------------------------

    def signup(self, username: str, password: str) -> AuthResult:
        """Register a new user and sign them in."""
        if not username or not password:
            return self._failure(CREDENTIALS_REQUIRED_MESSAGE, "credentials_required")

        try:
            self._enter(username, lambda: self._directory.register(username, password))
        except UsernameTakenError as e:
            if self._audit_logger:
                self._audit_logger.log_signup(username, error_code=e.code)
            return self._failure(USERNAME_TAKEN_MESSAGE, e.code)
        except StorageError as e:
            return self._unexpected("signup", e, username)

        if self._audit_logger:
            self._audit_logger.log_signup(username)

        return AuthResult(
            success=True,
            state=self._state,
            username=username,
            message="Registration successful!",
        )

    def login(self, username: str, password: str) -> AuthResult:
        """Sign in an existing user."""
        if not username or not password:
            return self._failure(CREDENTIALS_REQUIRED_MESSAGE, "credentials_required")

        try:
            self._enter(username, lambda: self._directory.authenticate(username, password))
        except InvalidCredentialsError as e:
            if self._audit_logger:
                self._audit_logger.log_login(username, error_code=e.code)
            return self._failure(INVALID_CREDENTIALS_MESSAGE, e.code)
        except StorageError as e:
            return self._unexpected("login", e, username)

        if self._audit_logger:
            self._audit_logger.log_login(username)

        return AuthResult(
            success=True,
            state=self._state,
            username=username,
            message="Login successful!",
        )

    def logout(self) -> None:
        """
        End the session.

        The user's stored records are left untouched; the next login
        loads them again unchanged.
        """
        username = self._username
        self._discard_token()
        self._clear()

        if self._audit_logger:
            self._audit_logger.log_logout(username)

    def restore_on_startup(self) -> AuthResult:
        """
        Resume the session recorded in the store, if it still verifies.

        A missing token leaves the session signed out. An invalid one is
        also removed from the store.
        """
        try:
            token = self._store.get_item(self._settings.session_key)
        except StorageError as e:
            self._clear()
            return self._unexpected("restore", e, None)

        if token is None:
            self._clear()
            return self._failure("No stored session.", "no_session")

        try:
            claims = self._codec.verify(token)
        except TokenError as e:
            self._discard_token()
            self._clear()
            if self._audit_logger:
                self._audit_logger.log_token_rejected(e.code, str(e))
            return self._failure("Stored session is no longer valid.", e.code)

        self._records = self._data_store.load(claims.username)
        self._username = claims.username
        self._state = SessionState.AUTHENTICATED

        if self._audit_logger:
            self._audit_logger.log_session_restored(claims.username)

        return AuthResult(
            success=True,
            state=self._state,
            username=claims.username,
            message="Session restored.",
        )


def create_session(
    store: Optional[KeyValueStore] = None,
    settings: Optional[TrackerSettings] = None,
) -> SessionLifecycle:
    """
    Factory function to wire a session lifecycle with its collaborators.

    Args:
        store: Backing store. Defaults to the file-backed store under
               settings.storage_dir.
        settings: Configuration. Defaults to get_settings().

    Returns:
        A lifecycle in the UNAUTHENTICATED state. Call
        restore_on_startup() to resume a stored session.
    """
    settings = settings or get_settings()
    if store is None:
        store = FileKeyValueStore(settings=settings)
    return SessionLifecycle(
        store=store,
        settings=settings,
        audit_logger=AuditLogger(),
    )
