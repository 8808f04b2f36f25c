"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

from typing import Optional

import pytest

from modules.auth.context import AuthContext
from modules.auth.identity import SimulatedIdentityProvider
from modules.auth.models import User
from modules.session.store import MemorySessionStore
from shared.config import Settings
from shared.exceptions import StorageError


class FlakySessionStore(MemorySessionStore):
    """
    Memory store whose operations can be made to fail.

    Set ``fail_load``, ``fail_save`` or ``fail_clear`` to True to make the
    matching call raise StorageError.
    """

    def __init__(self, backend: Optional[dict[str, str]] = None):
        super().__init__(backend=backend)
        self.fail_load = False
        self.fail_save = False
        self.fail_clear = False

    def load(self) -> Optional[User]:
        if self.fail_load:
            raise StorageError("disk unreadable", code="SESSION_READ_FAILED")
        return super().load()

    def save(self, user: User) -> None:
        if self.fail_save:
            raise StorageError("disk full", code="SESSION_WRITE_FAILED")
        super().save(user)

    def clear(self) -> None:
        if self.fail_clear:
            raise StorageError("disk busy", code="SESSION_CLEAR_FAILED")
        super().clear()


@pytest.fixture
def settings() -> Settings:
    """Settings with no simulated latency and no vendor credentials."""
    return Settings(
        _env_file=None,
        identity_latency_seconds=0,
        openai_api_key="",
        shopify_api_key="",
        shopify_api_secret="",
        stripe_secret_key="",
    )


@pytest.fixture
def store() -> FlakySessionStore:
    """A fresh in-memory session store."""
    return FlakySessionStore()


@pytest.fixture
def make_store():
    """Factory for extra FlakySessionStore instances."""
    return FlakySessionStore


@pytest.fixture
def identity() -> SimulatedIdentityProvider:
    """Identity provider that answers immediately."""
    return SimulatedIdentityProvider(latency=0)


@pytest.fixture
def auth(store, identity) -> AuthContext:
    """An auth context that has not been started yet."""
    return AuthContext(store, identity)


@pytest.fixture
def test_user() -> User:
    """Provide a consistent test user."""
    return User(id="1", email="a@b.com")
