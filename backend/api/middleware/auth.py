"""
Session guard for protected endpoints.

Each request to a protected endpoint mounts a RouteGuard on the
caller's auth context (found by session cookie), the way a protected
page does:
- checking: 503 with Retry-After, the session is still being restored
- denied: 307 redirect to the login path
- granted: the signed-in user is handed to the route
"""

from fastapi import Depends, HTTPException, status

from modules.auth.context import AuthContext
from modules.auth.guard import GuardState, RouteGuard
from modules.auth.models import User

from ..dependencies import get_auth_context, get_container, ServiceContainer


class SessionCheckingError(HTTPException):
    """Session restore still in flight."""
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Checking authentication",
            headers={"Retry-After": "1"},
        )


class LoginRedirect(HTTPException):
    """No session: send the client to the login entry point."""
    def __init__(self, location: str):
        super().__init__(
            status_code=status.HTTP_307_TEMPORARY_REDIRECT,
            detail="Authentication required",
            headers={"Location": location},
        )


async def get_current_user(
    auth: AuthContext = Depends(get_auth_context),
    container: ServiceContainer = Depends(get_container),
) -> User:
    """
    Dependency that requires a signed-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: User = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    redirects: list[str] = []
    with RouteGuard(auth, navigate=redirects.append, login_path=container.settings.login_path) as guard:
        state = guard.state
        user = auth.user

    if state is GuardState.CHECKING:
        raise SessionCheckingError()
    if state is GuardState.DENIED:
        raise LoginRedirect(redirects[0])
    return user


# Type alias for cleaner route definitions
RequireSession = Depends(get_current_user)
