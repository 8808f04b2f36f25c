"""
Billing service implementation.

Thin wrapper around the Stripe SDK. The SDK is synchronous, so each call
runs in a worker thread. Stripe failures are logged and re-raised as
BillingError with a message fit for the UI.
"""

import asyncio
import logging
from typing import Any, Callable, Optional

import stripe

from modules.auth.models import Subscription
from shared.config import Settings, get_settings
from shared.exceptions import ConfigurationError

from .exceptions import BillingError
from .models import InvoiceSummary, SubscriptionCheckout, SubscriptionUsage

logger = logging.getLogger(__name__)


def _first_item(stripe_subscription: Any) -> Optional[Any]:
    items = stripe_subscription.get("items") or {}
    data = items.get("data") or []
    return data[0] if data else None


def to_subscription_record(stripe_subscription: Any) -> Subscription:
    """
    Convert a Stripe subscription object (or dict) to the user's record.

    ``plan`` is the price nickname when set, otherwise the price ID.
    Newer API versions report the period end per item, so fall back to it.
    """
    item = _first_item(stripe_subscription)
    price = (item or {}).get("price") or {}

    period_end = stripe_subscription.get("current_period_end")
    if period_end is None and item is not None:
        period_end = item.get("current_period_end")

    return Subscription(
        id=stripe_subscription["id"],
        plan=price.get("nickname") or price.get("id") or "unknown",
        status=stripe_subscription["status"],
        current_period_end=period_end or 0,
    )


class StripeBillingService:
    """IBillingService backed by Stripe."""

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()

    async def _call(self, failure_message: str, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        if not self._settings.stripe_secret_key:
            raise ConfigurationError(
                "Stripe is not configured. Please set the STRIPE_SECRET_KEY environment variable.",
                code="STRIPE_NOT_CONFIGURED",
            )
        try:
            return await asyncio.to_thread(
                fn, *args, api_key=self._settings.stripe_secret_key, **kwargs
            )
        except stripe.StripeError as e:
            logger.error("%s (stripe: %s)", failure_message, e)
            raise BillingError(failure_message, stripe_error=str(e)) from e

    async def create_customer(self, email: str, name: Optional[str] = None) -> str:
        params: dict[str, Any] = {"email": email}
        if name:
            params["name"] = name
        customer = await self._call(
            "Failed to create customer account. Please try again later.",
            stripe.Customer.create,
            **params,
        )
        logger.info("Created Stripe customer %s", customer["id"])
        return customer["id"]

    async def create_subscription(
        self,
        customer_id: str,
        price_id: Optional[str] = None,
    ) -> SubscriptionCheckout:
        subscription = await self._call(
            "Failed to create subscription. Please try again later.",
            stripe.Subscription.create,
            customer=customer_id,
            items=[{"price": price_id or self._settings.stripe_price_id}],
            payment_behavior="default_incomplete",
            expand=["latest_invoice.payment_intent"],
        )

        client_secret = None
        invoice = subscription.get("latest_invoice")
        if invoice is not None and hasattr(invoice, "get"):
            payment_intent = invoice.get("payment_intent")
            if payment_intent is not None and hasattr(payment_intent, "get"):
                client_secret = payment_intent.get("client_secret")

        return SubscriptionCheckout(
            subscription=to_subscription_record(subscription),
            client_secret=client_secret,
        )

    async def get_subscription(self, subscription_id: str) -> Subscription:
        subscription = await self._call(
            "Failed to retrieve subscription details. Please try again later.",
            stripe.Subscription.retrieve,
            subscription_id,
        )
        return to_subscription_record(subscription)

    async def cancel_subscription(self, subscription_id: str) -> Subscription:
        subscription = await self._call(
            "Failed to cancel subscription. Please try again later.",
            stripe.Subscription.cancel,
            subscription_id,
        )
        logger.info("Cancelled Stripe subscription %s", subscription_id)
        return to_subscription_record(subscription)

    async def update_customer_payment_method(
        self,
        customer_id: str,
        payment_method_id: str,
    ) -> bool:
        failure_message = "Failed to update payment method. Please try again later."
        await self._call(
            failure_message,
            stripe.PaymentMethod.attach,
            payment_method_id,
            customer=customer_id,
        )
        await self._call(
            failure_message,
            stripe.Customer.modify,
            customer_id,
            invoice_settings={"default_payment_method": payment_method_id},
        )
        return True

    async def get_customer_invoices(
        self,
        customer_id: str,
        limit: int = 10,
    ) -> list[InvoiceSummary]:
        invoices = await self._call(
            "Failed to retrieve billing history. Please try again later.",
            stripe.Invoice.list,
            customer=customer_id,
            limit=limit,
        )
        return [
            InvoiceSummary(
                id=invoice["id"],
                status=invoice.get("status"),
                amount_due=invoice.get("amount_due") or 0,
                amount_paid=invoice.get("amount_paid") or 0,
                currency=invoice.get("currency") or "usd",
                created=invoice["created"],
                hosted_invoice_url=invoice.get("hosted_invoice_url"),
            )
            for invoice in invoices["data"]
        ]

    async def get_subscription_usage(self, subscription_id: str) -> SubscriptionUsage:
        # Metered usage is not tracked yet; this reports what the plan covers.
        subscription = await self._call(
            "Failed to retrieve usage information. Please try again later.",
            stripe.Subscription.retrieve,
            subscription_id,
            expand=["items.data.price.product"],
        )

        products = []
        for item in (subscription.get("items") or {}).get("data") or []:
            product = (item.get("price") or {}).get("product")
            if hasattr(product, "get"):
                products.append(product.get("name") or product.get("id"))
            elif product:
                products.append(str(product))

        return SubscriptionUsage(
            subscription=to_subscription_record(subscription),
            products=products,
        )
