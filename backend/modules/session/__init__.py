"""
Session module.

Persists the single signed-in user record between application runs.

Public API:
- ISessionStore: Interface for session persistence
- MemorySessionStore, JsonFileSessionStore: Implementations
"""

from .interfaces import ISessionStore
from .store import (
    DEFAULT_SESSION_KEY,
    JsonFileSessionStore,
    MemorySessionStore,
    deserialize_user,
    serialize_user,
)

__all__ = [
    # Interface
    "ISessionStore",
    # Implementations
    "MemorySessionStore",
    "JsonFileSessionStore",
    "DEFAULT_SESSION_KEY",
    "serialize_user",
    "deserialize_user",
]
