# tookan_relay/shopify/verification.py
import base64
import hashlib
import hmac
from typing import Optional


def compute_hmac(secret: str, body: bytes) -> str:
    """Base64 HMAC-SHA256 of the raw body, as sent in X-Shopify-Hmac-Sha256."""
    digest = hmac.new(secret.encode(), body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode()


def verify_webhook(secret: Optional[str], body: bytes, hmac_header: Optional[str]) -> bool:
    # body must be the untouched request bytes, never a re-serialized payload
    if not secret or not hmac_header:
        return False
    # a base64 digest is pure ASCII; anything else cannot match
    if not hmac_header.isascii():
        return False
    return hmac.compare_digest(compute_hmac(secret, body).encode(), hmac_header.encode())
