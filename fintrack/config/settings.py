"""
Configuration Management for fintrack

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Every component takes its settings as a constructor argument and falls
back to get_settings(), so tests can wire an isolated configuration
without touching the environment.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Secret of the local demo build. Tokens signed with it
# must keep verifying, so it stays the default.
DEMO_TOKEN_SECRET = "your-super-secret-key-for-local-demo-only"


class TrackerSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from FINTRACK_* environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="FINTRACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Store layout
    app_prefix: str = Field(
        default="financialTracker",
        min_length=1,
        description="Prefix of every key written to the store"
    )
    storage_dir: Path = Field(
        default=Path(".fintrack"),
        description="Root directory of the file-backed key-value store"
    )
    write_retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts for a single key write before giving up"
    )

    # Session tokens
    token_secret: str = Field(
        default=DEMO_TOKEN_SECRET,
        min_length=1,
        description="Process-wide secret mixed into token signatures"
    )

    # User defaults
    default_currency: str = Field(
        default="$",
        description="Currency symbol for newly seen users"
    )

    @field_validator('app_prefix')
    @classmethod
    def validate_app_prefix(cls, v: str) -> str:
        """Drop trailing separators so generated keys never contain '__'."""
        return v.rstrip("_") or v

    @property
    def users_key(self) -> str:
        """Key holding the serialized user directory."""
        return f"{self.app_prefix}_users"

    @property
    def session_key(self) -> str:
        """Key holding the current session token."""
        return f"{self.app_prefix}_jwt"

    def user_key(self, username: str, collection: str) -> str:
        """Key of one collection in a user's namespace."""
        return f"{self.app_prefix}_{username}_{collection}"


@lru_cache()
def get_settings() -> TrackerSettings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return TrackerSettings()
