"""
Authentication module data models.

These models define the session data held by the auth context and
persisted by the session store. The persisted JSON uses camelCase keys
(``shopifyStore``, ``stripeCustomerId``...); either spelling is accepted
on input.
"""

from typing import Any, Optional
from pydantic import BaseModel, Field, model_validator
from pydantic.alias_generators import to_camel


class Subscription(BaseModel):
    """Current billing state of a user."""

    model_config = {"alias_generator": to_camel, "populate_by_name": True, "frozen": True}

    id: str = Field(..., description="Stripe subscription ID")
    plan: str = Field(..., description="Plan name or price ID")
    status: str = Field(..., description="Stripe subscription status")
    current_period_end: int = Field(..., description="End of the billing period (epoch seconds)")


class User(BaseModel):
    """
    The authenticated principal.

    A user with any Shopify field set must have both the store domain and
    the access token; partial linkage is rejected.
    """

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "ignore",
        "frozen": True,  # replaced wholesale, never mutated
    }

    id: str = Field(..., description="Opaque user ID, immutable once assigned")
    email: str = Field(..., min_length=1, description="Login email")
    name: Optional[str] = Field(None, description="Display name")

    shopify_store: Optional[str] = Field(None, description="Linked *.myshopify.com domain")
    shopify_access_token: Optional[str] = Field(None, description="Shopify offline token")
    stripe_customer_id: Optional[str] = Field(None, description="Stripe customer ID")
    subscription: Optional[Subscription] = None

    @model_validator(mode="after")
    def _check_shopify_linkage(self) -> "User":
        if (self.shopify_store is None) != (self.shopify_access_token is None):
            raise ValueError(
                "shopify_store and shopify_access_token must be set together"
            )
        return self

    @property
    def shopify_linked(self) -> bool:
        return self.shopify_store is not None

    def to_record(self) -> dict[str, Any]:
        """Serialize to the persisted (camelCase) shape, omitting unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ProfileUpdate(BaseModel):
    """
    Partial update applied to the current user.

    Only fields the caller explicitly set are merged. ``id`` cannot be
    changed, so it is not a field here and unknown keys are rejected.
    """

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "forbid",
    }

    email: Optional[str] = Field(None, min_length=1)
    name: Optional[str] = None
    shopify_store: Optional[str] = None
    shopify_access_token: Optional[str] = None
    stripe_customer_id: Optional[str] = None
    subscription: Optional[Subscription] = None

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


def merge_profile(user: User, update: ProfileUpdate) -> User:
    """
    Merge ``update`` into ``user`` and return a new, validated record.

    Raises:
        pydantic.ValidationError: If the merged record breaks a User invariant
    """
    merged = user.model_dump()
    merged.update(update.changes())
    return User.model_validate(merged)


class AuthState(BaseModel):
    """Snapshot of the auth context."""

    model_config = {"frozen": True}

    user: Optional[User] = None
    loading: bool = True
    error: Optional[str] = None

    @property
    def authenticated(self) -> bool:
        return self.user is not None


class OperationResult(BaseModel):
    """
    Tagged outcome of one auth operation.

    ``ok`` is True on success. On failure ``error`` carries the
    ``{error, message, details}`` dict of the raised exception.
    """

    ok: bool
    state: AuthState
    error: Optional[dict[str, Any]] = None
