"""
Auth context.

Owns the session state (user, loading, error) of one application root
and is its only mutator. Every operation runs the same cycle:

    Idle -> Pending (loading=True, error cleared) -> Resolved | Rejected

``loading`` is always reset in a ``finally``. On failure ``error`` is set
for passive display and the exception is re-raised for the caller; use
``attempt()`` to get a tagged OperationResult instead.

Overlapping calls are not serialized: the last successful write wins.
"""

import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Optional, TypeVar

from pydantic import ValidationError as PydanticValidationError

from shared.exceptions import CopywiseError, StorageError

from .exceptions import (
    AuthProviderError,
    InvalidProfileUpdateError,
    MissingCredentialsError,
    NotAuthenticatedError,
)
from .interfaces import IIdentityProvider
from .models import AuthState, OperationResult, ProfileUpdate, User

if TYPE_CHECKING:
    from modules.session.interfaces import ISessionStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

StateListener = Callable[[AuthState], None]

LOAD_FAILED_MESSAGE = "Failed to authenticate user. Please try again."

FALLBACK_MESSAGES = {
    "login": "Login failed. Please check your credentials and try again.",
    "login_with_google": "Google login failed. Please try again.",
    "signup": "Signup failed. Please try again.",
    "logout": "Logout failed. Please try again.",
    "reset_password": "Password reset failed. Please try again.",
    "update_profile": "Profile update failed. Please try again.",
}

_UNSET: Any = object()


class AuthContext:
    """
    Session state for one application root.

    Construct it explicitly, call ``start()`` on mount and ``close()`` on
    unmount (or use ``async with``). There is no module-level instance.
    """

    def __init__(self, store: "ISessionStore", identity: IIdentityProvider):
        self._store = store
        self._identity = identity

        self._user: Optional[User] = None
        self._loading = True
        self._error: Optional[str] = None

        self._listeners: list[StateListener] = []
        self._started = False
        self._closed = False

    # -- state -------------------------------------------------------------

    @property
    def user(self) -> Optional[User]:
        return self._user

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def state(self) -> AuthState:
        return AuthState(user=self._user, loading=self._loading, error=self._error)

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Call ``listener`` with the new state after every change.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set(self, user: Any = _UNSET, loading: Any = _UNSET, error: Any = _UNSET) -> None:
        if user is not _UNSET:
            self._user = user
        if loading is not _UNSET:
            self._loading = loading
        if error is not _UNSET:
            self._error = error

        snapshot = self.state
        for listener in list(self._listeners):
            listener(snapshot)

    def _commit(self, user: User) -> None:
        # Store first: a failed write must not leave memory ahead of disk.
        self._store.save(user)
        self._set(user=user)

    # -- lifecycle ---------------------------------------------------------

    async def start(self) -> AuthState:
        """
        Restore the session from the store.

        Load failures are logged and degrade to "no user" with ``error``
        set; they are never raised. Calling ``start()`` twice is a no-op.
        """
        self._ensure_open()
        if self._started:
            return self.state
        self._started = True

        self._set(loading=True, error=None)
        try:
            user = self._store.load()
            self._set(user=user)
            if user is not None:
                logger.info("Restored session for user %s", user.id)
        except StorageError as e:
            logger.error("Authentication check failed: %s", e.message)
            self._set(user=None, error=LOAD_FAILED_MESSAGE)
        except Exception:
            logger.exception("Authentication check failed")
            self._set(user=None, error=LOAD_FAILED_MESSAGE)
        finally:
            self._set(loading=False)
        return self.state

    async def close(self) -> None:
        """Detach all listeners. Operations on a closed context raise RuntimeError."""
        self._listeners.clear()
        self._closed = True

    async def __aenter__(self) -> "AuthContext":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("AuthContext has been closed")

    async def _run(self, operation: str, action: Callable[[], Awaitable[T]]) -> T:
        self._ensure_open()
        self._set(loading=True, error=None)
        try:
            return await action()
        except CopywiseError as e:
            logger.warning("%s failed: %s", operation, e.message)
            self._set(error=e.message or FALLBACK_MESSAGES[operation])
            raise
        except Exception as e:
            logger.exception("%s failed unexpectedly", operation)
            self._set(error=str(e) or FALLBACK_MESSAGES[operation])
            raise
        finally:
            self._set(loading=False)

    # -- operations --------------------------------------------------------

    async def login(self, email: str, password: str) -> User:
        """Sign in with email and password."""

        async def action() -> User:
            if not email or not password:
                raise MissingCredentialsError()
            user = await self._identity.login(email, password)
            self._commit(user)
            logger.info("User %s logged in", user.id)
            return user

        return await self._run("login", action)

    async def login_with_google(self) -> User:
        """Sign in through the federated Google flow.

        Provider failures that are not already a CopywiseError are raised
        as AuthProviderError.
        """

        async def action() -> User:
            try:
                user = await self._identity.login_with_google()
            except CopywiseError:
                raise
            except Exception as e:
                raise AuthProviderError(
                    str(e) or FALLBACK_MESSAGES["login_with_google"]
                ) from e
            self._commit(user)
            logger.info("User %s logged in with Google", user.id)
            return user

        return await self._run("login_with_google", action)

    async def signup(self, email: str, password: str, name: Optional[str] = None) -> User:
        """Create an account and sign in as it."""

        async def action() -> User:
            if not email or not password:
                raise MissingCredentialsError()
            user = await self._identity.signup(email, password, name)
            self._commit(user)
            logger.info("User %s signed up", user.id)
            return user

        return await self._run("signup", action)

    async def logout(self) -> None:
        """
        Clear the stored session and the in-memory user.

        Safe when nobody is signed in. If the store cannot be cleared the
        user is still dropped from memory and StorageError is raised.
        """

        async def action() -> None:
            previous = self._user
            try:
                self._store.clear()
            finally:
                self._set(user=None)
            if previous is not None:
                logger.info("User %s logged out", previous.id)

        await self._run("logout", action)

    async def reset_password(self, email: str) -> None:
        """Ask the identity provider to send a reset notice. Session state is untouched."""

        async def action() -> None:
            if not email:
                raise MissingCredentialsError("Email is required")
            await self._identity.reset_password(email)

        await self._run("reset_password", action)

    async def update_profile(self, changes: ProfileUpdate | dict[str, Any]) -> User:
        """
        Merge ``changes`` into the current user and persist the result.

        Args:
            changes: A ProfileUpdate, or a dict of User fields (``id`` excluded)

        Raises:
            NotAuthenticatedError: If nobody is signed in
            ValidationError: If the payload or the merged record is invalid
        """

        async def action() -> User:
            current = self._user
            if current is None:
                raise NotAuthenticatedError()
            try:
                update = (
                    changes
                    if isinstance(changes, ProfileUpdate)
                    else ProfileUpdate.model_validate(changes)
                )
                user = await self._identity.update_profile(current, update)
            except PydanticValidationError as e:
                raise InvalidProfileUpdateError(
                    e.errors(include_url=False, include_context=False)
                ) from e
            self._commit(user)
            logger.info("Updated profile for user %s", user.id)
            return user

        return await self._run("update_profile", action)

    # -- result channel ----------------------------------------------------

    async def attempt(
        self,
        operation: Callable[..., Awaitable[Any]],
        *args: Any,
        **kwargs: Any,
    ) -> OperationResult:
        """
        Run one of this context's operations and return a tagged result.

        Example:
            result = await auth.attempt(auth.login, email, password)
            if not result.ok:
                show(result.error["message"])
        """
        try:
            await operation(*args, **kwargs)
        except CopywiseError as e:
            return OperationResult(ok=False, state=self.state, error=e.to_dict())
        except Exception as e:
            error = {
                "error": type(e).__name__,
                "message": str(e) or self._error or "",
                "details": {},
            }
            return OperationResult(ok=False, state=self.state, error=error)
        return OperationResult(ok=True, state=self.state)
