"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

One container is built per application (see api.app.lifespan) and kept
on ``app.state``; there is no module-level instance.

Each browser gets its own auth context, keyed by the session cookie.
Session IDs are issued by the server; an unknown ID is only accepted
when its store already holds a record (a session from before a restart).
"""

import logging
import re
import secrets
from collections import OrderedDict
from typing import TYPE_CHECKING, Callable, Optional

from fastapi import Depends, Request, Response

from shared.config import Settings, get_settings
from shared.exceptions import StorageError

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.context import AuthContext
    from modules.auth.interfaces import IIdentityProvider
    from modules.billing.interfaces import IBillingService
    from modules.descriptions.interfaces import IDescriptionService
    from modules.session.interfaces import ISessionStore
    from modules.shopify.service import ShopifyService

logger = logging.getLogger(__name__)

SESSION_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{16,128}$")

StoreFactory = Callable[[str], "ISessionStore"]


def new_session_id() -> str:
    return secrets.token_urlsafe(32)


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached for the life
    of the container. Pass instances to the constructor to override them
    (tests do this to inject fakes). ``store_factory`` builds the session
    store for a session ID.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        store_factory: Optional[StoreFactory] = None,
        identity: "IIdentityProvider | None" = None,
        descriptions: "IDescriptionService | None" = None,
        billing: "IBillingService | None" = None,
        shopify: "ShopifyService | None" = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._store_factory = store_factory
        self._identity = identity
        self._descriptions = descriptions
        self._billing = billing
        self._shopify = shopify

        self._memory_backend: dict[str, str] = {}
        self._sessions: "OrderedDict[str, AuthContext]" = OrderedDict()
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    @property
    def session_count(self) -> int:
        return len(self._sessions)

    def store_for(self, session_id: str) -> "ISessionStore":
        """Session store for one client (file-backed when SESSION_STORE_DIR is set)."""
        if self._store_factory is not None:
            return self._store_factory(session_id)

        from modules.session.store import JsonFileSessionStore, MemorySessionStore
        key = f"{self.settings.session_key}-{session_id}"
        if self.settings.session_store_dir is not None:
            return JsonFileSessionStore(self.settings.session_store_dir, key=key)
        return MemorySessionStore(key=key, backend=self._memory_backend)

    def is_known_session(self, session_id: str) -> bool:
        """True for IDs this server issued or whose store holds a record."""
        if not SESSION_ID_PATTERN.match(session_id):
            return False
        if session_id in self._sessions:
            return True
        try:
            return self.store_for(session_id).load() is not None
        except StorageError:
            # The record exists but cannot be read; start() reports it.
            return True

    async def auth_for(self, session_id: str) -> "AuthContext":
        """
        Get the auth context of one client, creating it on first use.

        Contexts are restored from their store once the application has
        started; before that they stay in the loading state.
        """
        auth = self._sessions.get(session_id)
        if auth is None:
            from modules.auth.context import AuthContext
            auth = AuthContext(self.store_for(session_id), self.identity)
            self._sessions[session_id] = auth
            await self._evict()
        else:
            self._sessions.move_to_end(session_id)

        if self._started:
            await auth.start()
        return auth

    async def _evict(self) -> None:
        while len(self._sessions) > self.settings.max_sessions:
            session_id, oldest = self._sessions.popitem(last=False)
            logger.debug("Dropping idle auth context %s...", session_id[:8])
            await oldest.close()

    @property
    def identity(self) -> "IIdentityProvider":
        """Get the identity provider instance."""
        if self._identity is None:
            from modules.auth.identity import SimulatedIdentityProvider
            self._identity = SimulatedIdentityProvider(
                latency=self.settings.identity_latency_seconds
            )
        return self._identity

    @property
    def descriptions(self) -> "IDescriptionService":
        """Get the description service instance."""
        if self._descriptions is None:
            from modules.descriptions.service import DescriptionService
            self._descriptions = DescriptionService(self.settings)
        return self._descriptions

    @property
    def billing(self) -> "IBillingService":
        """Get the billing service instance."""
        if self._billing is None:
            from modules.billing.service import StripeBillingService
            self._billing = StripeBillingService(self.settings)
        return self._billing

    @property
    def shopify(self) -> "ShopifyService":
        """Get the Shopify service instance."""
        if self._shopify is None:
            from modules.shopify.service import ShopifyService
            self._shopify = ShopifyService(self.settings)
        return self._shopify

    async def startup(self) -> None:
        """Mount: restore any contexts created before startup finished."""
        self._started = True
        for auth in list(self._sessions.values()):
            await auth.start()

    async def shutdown(self) -> None:
        """Unmount: dispose every auth context and close HTTP clients."""
        self._started = False
        for auth in self._sessions.values():
            await auth.close()
        self._sessions.clear()
        if self._shopify is not None:
            await self._shopify.aclose()


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_container(request: Request) -> ServiceContainer:
    """FastAPI dependency for the application's container."""
    return request.app.state.container


def set_session_cookie(response: Response, settings: Settings, session_id: str) -> None:
    response.set_cookie(
        settings.session_cookie,
        session_id,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )


def get_session_id(request: Request, response: Response) -> str:
    """
    FastAPI dependency for the caller's session ID.

    Issues a new ID (and sets the cookie) when the request carries none or
    one this server does not know.
    """
    container = get_container(request)
    settings = container.settings
    session_id = request.cookies.get(settings.session_cookie)
    if session_id is None or not container.is_known_session(session_id):
        session_id = new_session_id()
        # Error responses are built elsewhere; they read it from here.
        request.state.issued_session_id = session_id
        set_session_cookie(response, settings, session_id)
    return session_id


async def get_auth_context(
    request: Request,
    session_id: str = Depends(get_session_id),
) -> "AuthContext":
    """FastAPI dependency for the caller's auth context."""
    return await get_container(request).auth_for(session_id)


def get_description_service(request: Request) -> "IDescriptionService":
    """FastAPI dependency for description service."""
    return get_container(request).descriptions
