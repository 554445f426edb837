"""
Data Models Package

This package contains all Pydantic models used in fintrack.
All data written to or read from the store must conform to these schemas.
"""

from fintrack.models.records import (
    CURRENCY_OPTIONS,
    DEFAULT_DISPLAY_NAME,
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    Budget,
    RecordCollection,
    ScopedRecordSet,
    Transaction,
    TransactionDraft,
    TransactionType,
    UserSettings,
    categories_for,
)
from fintrack.models.auth import (
    AuthResult,
    Credential,
    SessionState,
    TokenClaims,
)
from fintrack.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Record models
    "CURRENCY_OPTIONS",
    "DEFAULT_DISPLAY_NAME",
    "EXPENSE_CATEGORIES",
    "INCOME_CATEGORIES",
    "Budget",
    "RecordCollection",
    "ScopedRecordSet",
    "Transaction",
    "TransactionDraft",
    "TransactionType",
    "UserSettings",
    "categories_for",
    # Auth models
    "AuthResult",
    "Credential",
    "SessionState",
    "TokenClaims",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
