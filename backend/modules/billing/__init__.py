"""
Billing module.

Handles Stripe customers, subscriptions, payment methods and invoices.

Public API:
- IBillingService: Interface for billing operations
- StripeBillingService: Stripe implementation
- to_subscription_record: Stripe subscription -> user Subscription record
- SubscriptionCheckout, InvoiceSummary, SubscriptionUsage: Models
- BillingError: Raised when Stripe fails
"""

from .interfaces import IBillingService
from .models import SubscriptionCheckout, InvoiceSummary, SubscriptionUsage
from .service import StripeBillingService, to_subscription_record
from .exceptions import BillingError

__all__ = [
    # Interface
    "IBillingService",
    # Implementation
    "StripeBillingService",
    "to_subscription_record",
    # Models
    "SubscriptionCheckout",
    "InvoiceSummary",
    "SubscriptionUsage",
    # Exceptions
    "BillingError",
]
