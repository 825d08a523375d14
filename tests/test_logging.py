"""Per-request structlog context."""

from __future__ import annotations

import structlog

from tookan_relay.core.logging import bind_request_context


class TestBindRequestContext:
    def test_binds_method_path_and_id(self):
        request_id = bind_request_context("POST", "/order", "req-1")
        assert request_id == "req-1"
        assert structlog.contextvars.get_contextvars() == {
            "request_id": "req-1",
            "method": "POST",
            "path": "/order",
        }

    def test_generates_id_and_clears_previous(self):
        structlog.contextvars.bind_contextvars(stale="yes")
        request_id = bind_request_context("GET", "/health")
        ctx = structlog.contextvars.get_contextvars()
        assert len(request_id) == 16
        assert ctx["request_id"] == request_id
        assert "stale" not in ctx
