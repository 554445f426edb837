"""
Audit Models for fintrack

Every auth action and every recovery from bad stored data is logged.
This provides:
1. Traceability of who signed in, when, and from which path
2. Visibility into silently recovered corruption
3. Debugging information when a session does not come back

DESIGN DECISION: Passwords and token contents never enter an event.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Kinds of audited event."""
    # Authentication
    SIGNUP_SUCCEEDED = "signup_succeeded"
    SIGNUP_REJECTED = "signup_rejected"
    LOGIN_SUCCEEDED = "login_succeeded"
    LOGIN_FAILED = "login_failed"
    LOGOUT = "logout"

    # Startup restore
    SESSION_RESTORED = "session_restored"
    SESSION_TOKEN_REJECTED = "session_token_rejected"

    # Persisted data
    COLLECTION_CORRUPT = "collection_corrupt"
    DIRECTORY_CORRUPT = "directory_corrupt"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """One entry in the audit trail."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # Who the event is about, if anyone
    username: Optional[str] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """Flatten to the keyword arguments passed to the structlog call."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "username": self.username,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Constructors for every event the session layer emits.

    Usage:
        event = AuditEventBuilder.login_failed("alice", "invalid_credentials")
        event = AuditEventBuilder.collection_corrupt("alice", "budgets", err)
    """

    @staticmethod
    def signup_succeeded(username: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SIGNUP_SUCCEEDED,
            username=username,
            description=f"Account created: {username}",
            is_user_action=True,
        )

    @staticmethod
    def signup_rejected(username: str, reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SIGNUP_REJECTED,
            severity=AuditSeverity.WARNING,
            username=username,
            description="Signup rejected",
            details={"reason": reason},
            is_user_action=True,
        )

    @staticmethod
    def login_succeeded(username: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGIN_SUCCEEDED,
            username=username,
            description=f"User logged in: {username}",
            is_user_action=True,
        )

    @staticmethod
    def login_failed(username: str, reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGIN_FAILED,
            severity=AuditSeverity.WARNING,
            username=username,
            description="Login failed",
            details={"reason": reason},
            is_user_action=True,
        )

    @staticmethod
    def logout(username: Optional[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGOUT,
            username=username,
            description="User logged out",
            is_user_action=True,
        )

    @staticmethod
    def session_restored(username: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SESSION_RESTORED,
            username=username,
            description=f"Session restored from stored token: {username}",
        )

    @staticmethod
    def session_token_rejected(reason: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SESSION_TOKEN_REJECTED,
            severity=AuditSeverity.WARNING,
            description="Stored session token rejected and removed",
            details={"reason": reason},
            error_message=error_message,
        )

    @staticmethod
    def collection_corrupt(
        username: str,
        collection: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COLLECTION_CORRUPT,
            severity=AuditSeverity.WARNING,
            username=username,
            description=f"Stored {collection} unreadable, using defaults",
            details={"collection": collection},
            error_message=error_message,
        )

    @staticmethod
    def directory_corrupt(error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DIRECTORY_CORRUPT,
            severity=AuditSeverity.ERROR,
            description="User directory unreadable",
            error_message=error_message,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        username: Optional[str] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            username=username,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
        )
