"""
Authentication module interfaces.

The auth context depends on IIdentityProvider, not a concrete backend.
The shipped provider simulates the remote round-trip; a real identity
service can be swapped in without touching the context or the guard.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import ProfileUpdate, User


@runtime_checkable
class IIdentityProvider(Protocol):
    """
    Interface for the remote side of authentication.

    Implementations perform the network call (or its simulation) and
    return the canonical user record. They never touch session state.
    """

    async def login(self, email: str, password: str) -> User:
        """
        Authenticate with email and password.

        Returns:
            The user record for this account

        Raises:
            AuthenticationError: If the credentials are rejected
        """
        ...

    async def login_with_google(self) -> User:
        """
        Complete a federated Google sign-in.

        Raises:
            AuthProviderError: If the provider fails
        """
        ...

    async def signup(self, email: str, password: str, name: Optional[str] = None) -> User:
        """
        Create a new account.

        Returns:
            The new user record with a freshly assigned ID
        """
        ...

    async def reset_password(self, email: str) -> None:
        """Send a password reset notice to ``email``."""
        ...

    async def update_profile(self, user: User, update: ProfileUpdate) -> User:
        """
        Apply ``update`` to ``user`` remotely.

        Returns:
            The merged user record
        """
        ...
