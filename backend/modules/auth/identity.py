"""
Simulated identity provider.

Stands in for a remote identity service. Each call waits ``latency``
seconds to mimic the network round-trip, then fabricates the response.
Accounts created by ``signup`` are remembered for the life of the
provider, so a later ``login`` with the same email returns that record.
"""

import asyncio
import logging
import uuid
from typing import Optional

from .models import ProfileUpdate, User, merge_profile

logger = logging.getLogger(__name__)


GOOGLE_USER = User(id="789012", email="user@example.com", name="Google User")


def default_display_name(email: str) -> str:
    """Local part of an email address, used when no name is given."""
    return email.split("@")[0]


def derive_user_id(email: str) -> str:
    """Stable ID for an email that was never signed up through this provider."""
    return str(uuid.uuid5(uuid.NAMESPACE_URL, f"mailto:{email.lower()}"))


class SimulatedIdentityProvider:
    """
    In-memory implementation of IIdentityProvider.

    Passwords are accepted as-is; there is no credential check.
    """

    def __init__(self, latency: float = 1.0):
        self._latency = latency
        self._accounts: dict[str, User] = {}
        self.reset_requests: list[str] = []

    async def _round_trip(self) -> None:
        if self._latency > 0:
            await asyncio.sleep(self._latency)

    async def login(self, email: str, password: str) -> User:
        await self._round_trip()
        account = self._accounts.get(email.lower())
        if account is not None:
            return account
        return User(
            id=derive_user_id(email),
            email=email,
            name=default_display_name(email),
        )

    async def login_with_google(self) -> User:
        await self._round_trip()
        return GOOGLE_USER

    async def signup(self, email: str, password: str, name: Optional[str] = None) -> User:
        await self._round_trip()
        user = User(
            id=str(uuid.uuid4()),
            email=email,
            name=name or default_display_name(email),
        )
        self._accounts[email.lower()] = user
        return user

    async def reset_password(self, email: str) -> None:
        await self._round_trip()
        self.reset_requests.append(email)
        logger.info("Password reset email sent to %s", email)

    async def update_profile(self, user: User, update: ProfileUpdate) -> User:
        await self._round_trip()
        merged = merge_profile(user, update)
        if user.email.lower() in self._accounts:
            self._accounts.pop(user.email.lower())
            self._accounts[merged.email.lower()] = merged
        return merged
