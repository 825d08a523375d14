"""Outbound clients: Tookan dispatch and Shopify draft orders."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
import requests

from tookan_relay.api.errors import ShopifyAPIError
from tookan_relay.shopify.client import ShopifyClient, shop_domain
from tookan_relay.tookan.client import TookanClient, dispatch_once
from tookan_relay.tookan.routing import ADD_CUSTOMER_PATH, DispatchRequest


def _response(status: int, body: bytes = b"", reason: str = "") -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp._content = body
    resp.reason = reason
    resp.headers["Content-Type"] = "application/json"
    return resp


class TestTookanClient:
    REQUEST = DispatchRequest(endpoint=ADD_CUSTOMER_PATH, body={"user_type": 0, "email": "a@b.com"})

    def test_posts_json_with_api_key(self, settings):
        client = TookanClient(settings)
        with patch.object(client.session, "post", return_value=_response(200, b'{"status":200}')) as post:
            resp = client.dispatch(self.REQUEST)
        assert resp.status_code == 200
        post.assert_called_once()
        args, kwargs = post.call_args
        assert args[0] == "https://api.tookanapp.com/v2/customer/add"
        assert kwargs["json"] == {"api_key": "tookan-key", "user_type": 0, "email": "a@b.com"}

    def test_error_status_is_returned_not_raised(self, settings):
        client = TookanClient(settings)
        with patch.object(client.session, "post", return_value=_response(500, b"boom")):
            resp = client.dispatch(self.REQUEST)
        assert resp.status_code == 500

    def test_transport_error_is_logged_not_raised(self, settings):
        client = TookanClient(settings)
        with patch.object(client.session, "post", side_effect=requests.ConnectionError("down")) as post:
            assert client.dispatch(self.REQUEST) is None
        assert post.call_count == 1  # no retry


    def test_dispatch_once_closes_session(self, settings):
        with patch("requests.Session.post", return_value=_response(200, b"{}")) as post, \
                patch("requests.Session.close") as close:
            dispatch_once(settings, self.REQUEST)
        post.assert_called_once()
        close.assert_called_once()

    def test_dispatch_once_closes_session_on_error(self, settings):
        with patch("requests.Session.post", side_effect=requests.ConnectionError("down")), \
                patch("requests.Session.close") as close:
            dispatch_once(settings, self.REQUEST)
        close.assert_called_once()


class TestShopDomain:
    def test_bare_name(self):
        assert shop_domain("test-store") == "test-store.myshopify.com"

    def test_full_domain(self):
        assert shop_domain("test-store.myshopify.com/") == "test-store.myshopify.com"


class TestShopifyClient:
    def test_basic_auth(self, settings):
        client = ShopifyClient(settings)
        assert client.session.auth == ("key", "password")
        assert client.base == "https://test-store.myshopify.com/admin/api/2024-10"

    def test_token_auth_preferred(self, settings):
        settings.SHOPIFY_ACCESS_TOKEN = "shpat_x"
        client = ShopifyClient(settings)
        assert client.session.headers["X-Shopify-Access-Token"] == "shpat_x"
        assert client.session.auth is None

    def test_missing_credentials(self, settings):
        settings.SHOPIFY_API_PASSWORD = None
        with pytest.raises(ShopifyAPIError):
            ShopifyClient(settings)

    def test_create_draft_order(self, settings):
        client = ShopifyClient(settings)
        created = {"draft_order": {"id": 1, "invoice_url": "https://x"}}
        with patch.object(client.session, "request",
                          return_value=_response(201, json.dumps(created).encode())) as req:
            assert client.create_draft_order({"line_items": []}) == created
        args, kwargs = req.call_args
        assert args == ("POST", "https://test-store.myshopify.com/admin/api/2024-10/draft_orders.json")
        assert kwargs["json"] == {"draft_order": {"line_items": []}}

    def test_http_error_carries_status(self, settings):
        client = ShopifyClient(settings)
        body = b'{"errors":{"line_items":["is invalid"]}}'
        with patch.object(client.session, "request", return_value=_response(422, body)) as req:
            with pytest.raises(ShopifyAPIError) as exc:
                client.create_draft_order({"line_items": []})
        assert exc.value.status_code == 422
        assert exc.value.message == body.decode()
        assert req.call_count == 1

    def test_transport_error_has_no_status(self, settings):
        client = ShopifyClient(settings)
        with patch.object(client.session, "request", side_effect=requests.Timeout("slow")):
            with pytest.raises(ShopifyAPIError) as exc:
                client.create_draft_order({"line_items": []})
        assert exc.value.status_code is None

    def test_non_json_success_body(self, settings):
        client = ShopifyClient(settings)
        with patch.object(client.session, "request",
                          return_value=_response(200, b"<html>maintenance</html>")):
            with pytest.raises(ShopifyAPIError) as exc:
                client.create_draft_order({"line_items": []})
        assert exc.value.status_code == 502
        assert "<html>maintenance</html>" in exc.value.message

    def test_empty_success_body(self, settings):
        client = ShopifyClient(settings)
        with patch.object(client.session, "request", return_value=_response(200, b"  ")):
            assert client.create_draft_order({"line_items": []}) == {}

    def test_close(self, settings):
        client = ShopifyClient(settings)
        with patch.object(client.session, "close") as close:
            client.close()
        close.assert_called_once()
