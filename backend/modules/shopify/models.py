"""Data models for the Shopify integration."""

from typing import Optional
from pydantic import BaseModel, Field


class ShopifySession(BaseModel):
    """
    An authorized connection to one store.

    Offline sessions (the only kind created here) are keyed
    ``offline_<shop>`` and do not expire.
    """

    model_config = {"frozen": True}

    id: str
    shop: str = Field(..., description="*.myshopify.com domain")
    access_token: Optional[str] = None
    scope: Optional[str] = None

    @classmethod
    def offline_id(cls, shop: str) -> str:
        return f"offline_{shop}"


class AuthorizationRequest(BaseModel):
    """Where to send the merchant to approve the app."""

    url: str
    state: str
