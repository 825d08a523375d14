"""Shared fixtures for the relay test suite."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from tookan_relay.api.main import create_app
from tookan_relay.core.config import Settings
from tookan_relay.shopify.verification import compute_hmac

WEBHOOK_SECRET = "shopify-test-secret"


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        SHOPIFY_WEBHOOK_SECRET=WEBHOOK_SECRET,
        SHOPIFY_SHOP="test-store",
        SHOPIFY_API_KEY="key",
        SHOPIFY_API_PASSWORD="password",
        SHOPIFY_ACCESS_TOKEN=None,
        TOOKAN_API_KEY="tookan-key",
        TOOKAN_TEAM="Team A",
        TOOKAN_TIMEZONE="60",
        TOOKAN_COLOR="green",
        STATIC_DIR=str(tmp_path / "missing"),
    )


@pytest.fixture()
def client(settings: Settings) -> TestClient:
    return TestClient(create_app(settings))


@pytest.fixture()
def sign():
    """Return a function computing the X-Shopify-Hmac-Sha256 value for a body."""

    def _sign(body: bytes, secret: str = WEBHOOK_SECRET) -> str:
        return compute_hmac(secret, body)

    return _sign
