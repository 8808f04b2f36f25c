"""
Session module interface.

The auth context depends on ISessionStore, not a concrete backend.
"""

from typing import Protocol, Optional, runtime_checkable

from modules.auth.models import User


@runtime_checkable
class ISessionStore(Protocol):
    """
    Durable storage for exactly one user record.

    Single writer (the auth context), single reader. Each save replaces
    the whole record.
    """

    def load(self) -> Optional[User]:
        """
        Return the stored user, or None.

        A record that cannot be parsed is reported as None, never raised.

        Raises:
            StorageError: If the underlying storage cannot be read
        """
        ...

    def save(self, user: User) -> None:
        """
        Persist ``user``, replacing any previous record.

        Raises:
            StorageError: If the write fails
        """
        ...

    def clear(self) -> None:
        """
        Remove the stored record. Clearing an empty store is not an error.

        Raises:
            StorageError: If the removal fails
        """
        ...
