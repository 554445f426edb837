"""
Shared fixtures.

Every test gets its own in-memory store and settings with a fixed
secret, so nothing leaks between tests or in from the environment.
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from fintrack.audit import AuditLogger
from fintrack.config import TrackerSettings
from fintrack.services.auth import SessionTokenCodec, UserDirectory
from fintrack.services.records import ScopedDataStore
from fintrack.services.storage import InMemoryKeyValueStore
from fintrack.session import SessionLifecycle


FIXED_NOW = datetime(2024, 1, 5, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def settings(tmp_path):
    return TrackerSettings(
        _env_file=None,
        app_prefix="financialTracker",
        token_secret="test-secret",
        storage_dir=tmp_path / "store",
    )


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def audit_logger():
    return MagicMock(spec=AuditLogger)


@pytest.fixture
def codec(settings):
    return SessionTokenCodec(settings=settings)


@pytest.fixture
def directory(store, settings):
    return UserDirectory(store, settings)


@pytest.fixture
def data_store(store, settings, audit_logger):
    return ScopedDataStore(
        store,
        settings,
        audit_logger=audit_logger,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def lifecycle(store, settings, codec, directory, data_store, audit_logger):
    return SessionLifecycle(
        store=store,
        settings=settings,
        codec=codec,
        directory=directory,
        data_store=data_store,
        audit_logger=audit_logger,
    )
