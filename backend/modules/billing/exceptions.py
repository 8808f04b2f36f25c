"""
Billing module exceptions.

These exceptions are raised by the billing module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from typing import Optional

from shared.exceptions import ExternalServiceError


class BillingError(ExternalServiceError):
    """Raised when a Stripe call fails."""

    def __init__(self, message: str, stripe_error: Optional[str] = None):
        super().__init__(
            message,
            service="stripe",
            code="BILLING_ERROR",
            details={"stripe_error": stripe_error} if stripe_error else {},
        )
