"""
Audit Logger

DESIGN DECISION: Every auth action and every recovery from bad stored
data is logged. This provides:
1. Traceability of sign-ins and restored sessions
2. Visibility into corruption that was silently replaced by defaults
3. Debugging capability

The audit logger:
- Is synchronous, like everything else in the session layer
- Gracefully handles failures (a broken log sink never breaks an auth action)
"""

from typing import Optional

import structlog

from fintrack.models.audit import AuditEvent, AuditEventBuilder


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Writes each event to the structured local log at the level
    matching its severity.
    """

    def __init__(self, logger_name: str = "fintrack.audit"):
        self._logger = structlog.get_logger(logger_name)

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns False if the log sink failed; never raises.
        """
        log_dict = event.to_log_dict()

        try:
            if event.severity.value == "error":
                self._logger.error("audit_event", **log_dict)
            elif event.severity.value == "warning":
                self._logger.warning("audit_event", **log_dict)
            elif event.severity.value == "debug":
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception:
            return False

        return True

    def log_signup(self, username: str, error_code: Optional[str] = None) -> None:
        """Log a signup attempt."""
        if error_code is None:
            self.log(AuditEventBuilder.signup_succeeded(username))
        else:
            self.log(AuditEventBuilder.signup_rejected(username, error_code))

    def log_login(self, username: str, error_code: Optional[str] = None) -> None:
        """Log a login attempt."""
        if error_code is None:
            self.log(AuditEventBuilder.login_succeeded(username))
        else:
            self.log(AuditEventBuilder.login_failed(username, error_code))

    def log_logout(self, username: Optional[str]) -> None:
        self.log(AuditEventBuilder.logout(username))

    def log_session_restored(self, username: str) -> None:
        self.log(AuditEventBuilder.session_restored(username))

    def log_token_rejected(self, reason: str, error_message: str) -> None:
        """Log a stored token that failed verification."""
        self.log(AuditEventBuilder.session_token_rejected(reason, error_message))

    def log_collection_corrupt(
        self,
        username: str,
        collection: str,
        error_message: str,
    ) -> None:
        """Log a stored collection that was replaced by its default."""
        self.log(
            AuditEventBuilder.collection_corrupt(
                username=username,
                collection=collection,
                error_message=error_message,
            )
        )

    def log_directory_corrupt(self, error_message: str) -> None:
        self.log(AuditEventBuilder.directory_corrupt(error_message))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        username: Optional[str] = None,
    ) -> None:
        """Log an error."""
        self.log(
            AuditEventBuilder.system_error(
                error_type=error_type,
                error_message=error_message,
                details=details,
                username=username,
            )
        )
