"""
Billing module data models.

Trimmed views of Stripe objects. The subscription view is the
``Subscription`` record stored on the user.
"""

from typing import Optional

from pydantic import BaseModel, Field

from modules.auth.models import Subscription


class SubscriptionCheckout(BaseModel):
    """A newly created, not yet paid subscription."""

    subscription: Subscription
    client_secret: Optional[str] = Field(
        None,
        description="Payment intent secret the frontend confirms the first payment with",
    )


class InvoiceSummary(BaseModel):
    """One line of a customer's billing history."""

    id: str
    status: Optional[str] = None
    amount_due: int = Field(0, description="Smallest currency unit (e.g. cents)")
    amount_paid: int = 0
    currency: str = "usd"
    created: int = Field(..., description="Epoch seconds")
    hosted_invoice_url: Optional[str] = None


class SubscriptionUsage(BaseModel):
    """Subscription plus the products it covers."""

    subscription: Subscription
    products: list[str] = Field(default_factory=list)
