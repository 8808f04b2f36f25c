"""
Billing module interface.

Callers depend on IBillingService, not the Stripe implementation.
"""

from typing import Protocol, Optional, runtime_checkable

from modules.auth.models import Subscription

from .models import InvoiceSummary, SubscriptionCheckout, SubscriptionUsage


@runtime_checkable
class IBillingService(Protocol):
    """
    Interface for billing operations.

    Every method raises BillingError when the payment provider fails.
    """

    async def create_customer(self, email: str, name: Optional[str] = None) -> str:
        """
        Create a billing customer.

        Returns:
            The customer ID to store as ``stripe_customer_id``
        """
        ...

    async def create_subscription(
        self,
        customer_id: str,
        price_id: Optional[str] = None,
    ) -> SubscriptionCheckout:
        """
        Start a subscription whose first payment is still incomplete.

        Args:
            customer_id: Customer to subscribe
            price_id: Price to subscribe to; defaults to STRIPE_PRICE_ID
        """
        ...

    async def get_subscription(self, subscription_id: str) -> Subscription:
        """Fetch the current state of a subscription."""
        ...

    async def cancel_subscription(self, subscription_id: str) -> Subscription:
        """Cancel a subscription immediately."""
        ...

    async def update_customer_payment_method(
        self,
        customer_id: str,
        payment_method_id: str,
    ) -> bool:
        """Attach a payment method and make it the invoice default."""
        ...

    async def get_customer_invoices(
        self,
        customer_id: str,
        limit: int = 10,
    ) -> list[InvoiceSummary]:
        """Most recent invoices first."""
        ...

    async def get_subscription_usage(self, subscription_id: str) -> SubscriptionUsage:
        """Subscription with the names of the products it covers."""
        ...
