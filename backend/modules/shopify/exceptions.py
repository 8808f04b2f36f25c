"""Shopify module exceptions."""

from typing import Any, Optional

from shared.exceptions import ExternalServiceError


class ShopifyError(ExternalServiceError):
    """Raised when a Shopify call fails or a session is unusable."""

    def __init__(
        self,
        message: str,
        code: str = "SHOPIFY_ERROR",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, service="shopify", code=code, details=details)


class OAuthCallbackError(ShopifyError):
    """Raised when an OAuth callback fails HMAC or state verification."""

    def __init__(self, reason: str):
        super().__init__(
            f"Failed to authenticate with Shopify: {reason}",
            code="SHOPIFY_OAUTH_FAILED",
            details={"reason": reason},
        )
