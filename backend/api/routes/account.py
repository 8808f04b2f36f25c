"""
Account endpoints.

Protected: requests without a session are redirected to the login path.
"""

from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel

from modules.auth.models import Subscription, User
from ..middleware.auth import RequireSession

router = APIRouter()


class AccountResponse(BaseModel):
    """What the account page shows."""

    id: str
    email: str
    name: Optional[str] = None
    shopify_store: Optional[str] = None
    stripe_customer_id: Optional[str] = None
    subscription: Optional[Subscription] = None


@router.get("", response_model=AccountResponse)
async def get_account(user: User = RequireSession) -> AccountResponse:
    """
    Get the signed-in user's account.

    The Shopify access token is never returned.
    """
    return AccountResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        shopify_store=user.shopify_store,
        stripe_customer_id=user.stripe_customer_id,
        subscription=user.subscription,
    )
