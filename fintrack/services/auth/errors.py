"""Exceptions raised by the authentication services."""


class SessionError(Exception):
    """Base exception for authentication and session errors."""

    # Stable identifier reported in AuthResult.error_code
    code = "session_error"


class UsernameTakenError(SessionError):
    """Signup for a username that is already registered."""

    code = "username_taken"

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"Username already exists: {username}")


class InvalidCredentialsError(SessionError):
    """Unknown username or wrong password. Deliberately not told apart."""

    code = "invalid_credentials"


class NotAuthenticatedError(SessionError):
    """A session-scoped operation was attempted with no active session."""

    code = "not_authenticated"


class TokenError(SessionError):
    """Base exception for session token verification failures."""

    code = "token_invalid"


class MalformedTokenError(TokenError):
    """Token is not three dot-separated parts with decodable claims."""

    code = "token_malformed"


class SignatureMismatchError(TokenError):
    """Recomputed signature differs from the one carried by the token."""

    code = "token_signature_mismatch"
