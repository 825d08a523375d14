# tookan_relay/shopify/client.py
from typing import Optional, Dict, Any
import structlog
import requests

from tookan_relay.api.errors import ShopifyAPIError
from tookan_relay.core.config import Settings

log = structlog.get_logger(__name__)


def shop_domain(shop: str) -> str:
    """Accept either the bare shop name or its myshopify.com domain."""
    shop = shop.strip().rstrip("/")
    return shop if "." in shop else f"{shop}.myshopify.com"


class ShopifyClient:
    """
    Minimal Shopify Admin API client with:
      - Token or basic-auth (legacy private app) support
      - One attempt per call; failures surface as ShopifyAPIError
    """

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None) -> None:
        if not settings.SHOPIFY_SHOP:
            raise ShopifyAPIError("Missing Shopify shop. Set SHOPIFY_SHOP.")
        token = settings.SHOPIFY_ACCESS_TOKEN
        if not token and not (settings.SHOPIFY_API_KEY and settings.SHOPIFY_API_PASSWORD):
            raise ShopifyAPIError(
                "Missing Shopify credentials. Set SHOPIFY_ACCESS_TOKEN (Admin API access token) "
                "or SHOPIFY_API_KEY+SHOPIFY_API_PASSWORD for legacy private-app basic auth."
            )

        self.shop = shop_domain(settings.SHOPIFY_SHOP)
        self.version = settings.SHOPIFY_API_VERSION
        self.base = f"https://{self.shop}/admin/api/{self.version}"
        self.timeout = settings.SHOPIFY_TIMEOUT
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        if token:
            self.session.headers["X-Shopify-Access-Token"] = token
        else:
            # Legacy private app style basic auth
            self.session.auth = (settings.SHOPIFY_API_KEY, settings.SHOPIFY_API_PASSWORD)

    def close(self) -> None:
        self.session.close()

    def request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        """Returns parsed JSON or {}. HTTP, transport and decode errors raise ShopifyAPIError."""
        url = f"{self.base}{path}"
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise ShopifyAPIError(f"Shopify request failed: {e}") from e

        if resp.status_code >= 400:
            log.warning("shopify_error", path=path, status=resp.status_code,
                        headers=dict(resp.headers), body=resp.text)
            raise ShopifyAPIError(resp.text or resp.reason or "Shopify error",
                                  status_code=resp.status_code)
        if not (resp.text or "").strip():
            return {}
        try:
            return resp.json()
        except ValueError as e:
            log.warning("shopify_bad_json", path=path, status=resp.status_code, body=resp.text)
            raise ShopifyAPIError(f"Shopify returned a non-JSON body: {resp.text[:200]}",
                                  status_code=502) from e

    def create_draft_order(self, draft: Dict[str, Any]) -> Dict[str, Any]:
        return self.request("POST", "/draft_orders.json", json={"draft_order": draft})
