"""
Session endpoints.

Thin HTTP front for the application's auth context. Failures propagate
as CopywiseError and are turned into JSON by the app's error handler;
the context's ``error`` field is set either way.
"""

from fastapi import APIRouter, Depends

from modules.auth.context import AuthContext
from modules.auth.models import AuthState, ProfileUpdate, User

from ..dependencies import get_auth_context
from ..models.auth import LoginRequest, MessageResponse, ResetPasswordRequest, SignupRequest

router = APIRouter()


@router.get("/session", response_model=AuthState)
async def get_session(auth: AuthContext = Depends(get_auth_context)) -> AuthState:
    """Current session snapshot: user, loading flag and last error."""
    return auth.state


@router.post("/login", response_model=User)
async def login(
    body: LoginRequest,
    auth: AuthContext = Depends(get_auth_context),
) -> User:
    return await auth.login(body.email, body.password)


@router.post("/google", response_model=User)
async def login_with_google(auth: AuthContext = Depends(get_auth_context)) -> User:
    return await auth.login_with_google()


@router.post("/signup", response_model=User, status_code=201)
async def signup(
    body: SignupRequest,
    auth: AuthContext = Depends(get_auth_context),
) -> User:
    return await auth.signup(body.email, body.password, body.name)


@router.post("/logout", response_model=MessageResponse)
async def logout(auth: AuthContext = Depends(get_auth_context)) -> MessageResponse:
    await auth.logout()
    return MessageResponse(message="Logged out")


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    body: ResetPasswordRequest,
    auth: AuthContext = Depends(get_auth_context),
) -> MessageResponse:
    await auth.reset_password(body.email)
    return MessageResponse(message=f"Password reset email sent to {body.email}")


@router.patch("/profile", response_model=User)
async def update_profile(
    body: ProfileUpdate,
    auth: AuthContext = Depends(get_auth_context),
) -> User:
    """
    Merge the given fields into the signed-in user.

    Only fields present in the body are changed.
    """
    return await auth.update_profile(body)
