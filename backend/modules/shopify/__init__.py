"""
Shopify module.

Connects a store through OAuth and reads/updates its products.

Public API:
- ShopifyService: OAuth install flow and product calls
- link_store: Record a connection on the signed-in user
- ShopifySession, AuthorizationRequest: Models
- InMemoryShopifySessionStorage: Placeholder session storage
- ShopifyError, OAuthCallbackError: Exceptions
"""

from .models import ShopifySession, AuthorizationRequest
from .storage import InMemoryShopifySessionStorage
from .service import ShopifyService, link_store, validate_shop_domain, compute_hmac
from .exceptions import ShopifyError, OAuthCallbackError

__all__ = [
    "ShopifyService",
    "link_store",
    "validate_shop_domain",
    "compute_hmac",
    "ShopifySession",
    "AuthorizationRequest",
    "InMemoryShopifySessionStorage",
    "ShopifyError",
    "OAuthCallbackError",
]
