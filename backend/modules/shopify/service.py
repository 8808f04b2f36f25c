"""
Shopify service implementation.

Covers the offline OAuth install flow and the three product calls the
generator needs (list, fetch, update body HTML) against the Admin REST
API. Failures are re-raised as ShopifyError with a friendlier message.
"""

import hashlib
import hmac
import logging
import re
import secrets
from typing import TYPE_CHECKING, Any, Mapping, Optional

import httpx

from shared.config import Settings, get_settings
from shared.exceptions import ConfigurationError, ValidationError

from .exceptions import OAuthCallbackError, ShopifyError
from .models import AuthorizationRequest, ShopifySession
from .storage import InMemoryShopifySessionStorage

if TYPE_CHECKING:
    from modules.auth.context import AuthContext
    from modules.auth.models import User

logger = logging.getLogger(__name__)

SHOP_DOMAIN_PATTERN = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9\-]*\.myshopify\.com$")


def validate_shop_domain(shop: str) -> str:
    """
    Normalize and check a shop domain.

    Raises:
        ValidationError: If ``shop`` is not a *.myshopify.com domain
    """
    shop = shop.strip().lower()
    if not SHOP_DOMAIN_PATTERN.match(shop):
        raise ValidationError(
            f"Invalid shop domain: {shop}",
            code="INVALID_SHOP_DOMAIN",
            details={"shop": shop},
        )
    return shop


def compute_hmac(params: Mapping[str, str], secret: str) -> str:
    """HMAC-SHA256 Shopify signs callback query strings with (``hmac`` excluded)."""
    message = "&".join(
        f"{key}={value}" for key, value in sorted(params.items()) if key != "hmac"
    )
    return hmac.new(secret.encode(), message.encode(), hashlib.sha256).hexdigest()


class ShopifyService:
    """Thin client for the Shopify OAuth and Admin REST endpoints."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
        storage: Optional[InMemoryShopifySessionStorage] = None,
    ):
        self._settings = settings or get_settings()
        self._client = client
        self.storage = storage or InMemoryShopifySessionStorage()
        self._pending_states: dict[str, str] = {}

    def _require_credentials(self) -> None:
        if not self._settings.shopify_api_key or not self._settings.shopify_api_secret:
            raise ConfigurationError(
                "Shopify API Key or Secret is not configured. "
                "Please set SHOPIFY_API_KEY and SHOPIFY_API_SECRET environment variables.",
                code="SHOPIFY_NOT_CONFIGURED",
            )

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=30.0)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _api_url(self, shop: str, path: str) -> str:
        return f"https://{shop}/admin/api/{self._settings.shopify_api_version}/{path}"

    # -- OAuth -------------------------------------------------------------

    def begin_auth(self, shop: str, redirect_path: str) -> AuthorizationRequest:
        """
        Build the URL that asks the merchant to install the app.

        Args:
            shop: The merchant's *.myshopify.com domain
            redirect_path: Callback path on this app (e.g. "/api/shopify/callback")

        Returns:
            The authorize URL and the one-time state nonce it carries
        """
        self._require_credentials()
        shop = validate_shop_domain(shop)

        state = secrets.token_urlsafe(16)
        self._pending_states[state] = shop

        url = httpx.URL(
            f"https://{shop}/admin/oauth/authorize",
            params={
                "client_id": self._settings.shopify_api_key,
                "scope": ",".join(self._settings.shopify_scopes),
                "redirect_uri": f"https://{self._settings.host_name}{redirect_path}",
                "state": state,
            },
        )
        return AuthorizationRequest(url=str(url), state=state)

    async def complete_auth(self, query: Mapping[str, str]) -> ShopifySession:
        """
        Verify an OAuth callback and exchange its code for an offline token.

        The resulting session is stored and returned.

        Raises:
            OAuthCallbackError: If the HMAC, state or shop does not check out
            ShopifyError: If the token exchange fails
        """
        self._require_credentials()
        params = dict(query)

        received = params.get("hmac", "")
        expected = compute_hmac(params, self._settings.shopify_api_secret)
        if not hmac.compare_digest(received, expected):
            raise OAuthCallbackError("invalid HMAC signature")

        state = params.get("state", "")
        shop = self._pending_states.pop(state, None)
        if shop is None:
            raise OAuthCallbackError("unknown or reused state")
        if params.get("shop", "").lower() != shop:
            raise OAuthCallbackError("shop does not match the authorization request")
        if not params.get("code"):
            raise OAuthCallbackError("missing authorization code")

        client = await self._get_client()
        try:
            response = await client.post(
                f"https://{shop}/admin/oauth/access_token",
                json={
                    "client_id": self._settings.shopify_api_key,
                    "client_secret": self._settings.shopify_api_secret,
                    "code": params["code"],
                },
            )
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Error validating Shopify auth callback: %s", e)
            raise ShopifyError(f"Failed to authenticate with Shopify: {e}") from e

        session = ShopifySession(
            id=ShopifySession.offline_id(shop),
            shop=shop,
            access_token=body.get("access_token"),
            scope=body.get("scope"),
        )
        await self.storage.store(session)
        logger.info("Stored Shopify session for %s", shop)
        return session

    # -- Admin REST --------------------------------------------------------

    async def _request(
        self,
        session: ShopifySession,
        method: str,
        path: str,
        failure_message: str,
        **kwargs: Any,
    ) -> dict[str, Any]:
        if not session.access_token:
            raise ShopifyError("Invalid session provided: no access token", code="INVALID_SESSION")

        client = await self._get_client()
        try:
            response = await client.request(
                method,
                self._api_url(session.shop, path),
                headers={"X-Shopify-Access-Token": session.access_token},
                **kwargs,
            )
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("%s: %s", failure_message, e)
            raise ShopifyError(f"{failure_message}: {e}") from e

    async def get_products(self, session: ShopifySession, limit: int = 10) -> list[dict[str, Any]]:
        body = await self._request(
            session,
            "GET",
            "products.json",
            "Failed to fetch products from Shopify",
            params={"limit": str(limit)},
        )
        return body.get("products", [])

    async def get_product(self, session: ShopifySession, product_id: int | str) -> dict[str, Any]:
        body = await self._request(
            session,
            "GET",
            f"products/{product_id}.json",
            "Failed to fetch product details",
        )
        return body.get("product", {})

    async def update_product_description(
        self,
        session: ShopifySession,
        product_id: int | str,
        description: str,
    ) -> dict[str, Any]:
        body = await self._request(
            session,
            "PUT",
            f"products/{product_id}.json",
            "Failed to update product description in Shopify",
            json={"product": {"id": product_id, "body_html": description}},
        )
        return body.get("product", {})


async def link_store(auth: "AuthContext", session: ShopifySession) -> "User":
    """
    Record a Shopify connection on the signed-in user.

    Both fields are written in one profile update so the stored user never
    holds a store without its token.
    """
    if not session.access_token:
        raise ShopifyError("Invalid session provided: no access token", code="INVALID_SESSION")
    return await auth.update_profile(
        {"shopify_store": session.shop, "shopify_access_token": session.access_token}
    )
