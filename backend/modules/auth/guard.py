"""
Route guard.

Gates a protected view on the auth context:
- CHECKING while the context is loading: show a placeholder
- DENIED once loading is done and nobody is signed in: navigate to the
  login path (once per denial) and show nothing
- GRANTED once loading is done and a user is present: show the view
"""

import logging
from enum import Enum
from typing import Any, Callable, Optional, TypeVar

from .context import AuthContext
from .models import AuthState, User

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_PLACEHOLDER = "Loading..."


class GuardState(str, Enum):
    """Outcome of evaluating the guard."""

    CHECKING = "checking"
    DENIED = "denied"
    GRANTED = "granted"


def evaluate(state: AuthState) -> GuardState:
    """Map an auth snapshot to a guard state. An error with no user is a denial."""
    if state.loading:
        return GuardState.CHECKING
    if state.user is None:
        return GuardState.DENIED
    return GuardState.GRANTED


class RouteGuard:
    """
    Guard for one protected view.

    Mount it to follow the context; it re-evaluates only when ``user`` or
    ``loading`` changes, so a navigation that triggers another state
    notification does not redirect twice.
    """

    def __init__(
        self,
        auth: AuthContext,
        navigate: Callable[[str], Any],
        login_path: str = "/login",
    ):
        self._auth = auth
        self._navigate = navigate
        self._login_path = login_path

        self._state: Optional[GuardState] = None
        self._inputs: Optional[tuple[Optional[User], bool]] = None
        self._redirected = False
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def state(self) -> GuardState:
        """Current outcome. Reading it never navigates; only mount() and render() do."""
        if self.mounted and self._state is not None:
            return self._state
        return evaluate(self._auth.state)

    @property
    def mounted(self) -> bool:
        return self._unsubscribe is not None

    def mount(self) -> GuardState:
        """Start following the context and evaluate immediately."""
        if self._unsubscribe is None:
            self._unsubscribe = self._auth.subscribe(self._refresh)
        return self._refresh(self._auth.state)

    def unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def __enter__(self) -> "RouteGuard":
        self.mount()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unmount()

    def _refresh(self, snapshot: AuthState) -> GuardState:
        inputs = (snapshot.user, snapshot.loading)
        if self._state is not None and inputs == self._inputs:
            return self._state
        self._inputs = inputs

        new_state = evaluate(snapshot)
        self._state = new_state
        if new_state is not GuardState.DENIED:
            self._redirected = False
        elif not self._redirected:
            self._redirected = True
            logger.debug("No session, redirecting to %s", self._login_path)
            self._navigate(self._login_path)
        return new_state

    def render(
        self,
        protected: Callable[[], T],
        placeholder: Any = DEFAULT_PLACEHOLDER,
    ) -> Optional[T]:
        """
        Produce what the view should show right now.

        ``protected`` is only called when access is granted.
        """
        state = self._refresh(self._auth.state)
        if state is GuardState.CHECKING:
            return placeholder
        if state is GuardState.DENIED:
            return None
        return protected()
