"""
Authentication module.

Holds the client session: who is signed in, whether an auth operation is
in flight, and the last failure message. Also gates protected views.

Public API:
- AuthContext: Session state and the six auth operations
- RouteGuard, GuardState: Gating of protected views
- IIdentityProvider, SimulatedIdentityProvider: Remote side of auth
- User, Subscription, ProfileUpdate, AuthState, OperationResult: Models
- Auth exceptions: MissingCredentialsError, NotAuthenticatedError, etc.
"""

from .models import (
    User,
    Subscription,
    ProfileUpdate,
    AuthState,
    OperationResult,
    merge_profile,
)
from .exceptions import (
    MissingCredentialsError,
    InvalidProfileUpdateError,
    NotAuthenticatedError,
    AuthProviderError,
)
from .interfaces import IIdentityProvider
from .identity import SimulatedIdentityProvider
from .context import AuthContext
from .guard import RouteGuard, GuardState, evaluate

__all__ = [
    # Core
    "AuthContext",
    "RouteGuard",
    "GuardState",
    "evaluate",
    # Identity
    "IIdentityProvider",
    "SimulatedIdentityProvider",
    # Models
    "User",
    "Subscription",
    "ProfileUpdate",
    "AuthState",
    "OperationResult",
    "merge_profile",
    # Exceptions
    "MissingCredentialsError",
    "InvalidProfileUpdateError",
    "NotAuthenticatedError",
    "AuthProviderError",
]
