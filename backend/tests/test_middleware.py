"""
VaultChat Backend — Middleware Tests
=====================================

What:  Request ID assignment and echoing.
"""

import pytest

from vaultchat.middleware.request_id import resolve_request_id


class TestResolveRequestId:

    def test_plain_client_id_kept(self):
        assert resolve_request_id("frontend-42.a_b") == "frontend-42.a_b"

    @pytest.mark.parametrize("value", [None, "", "x" * 65, "abc\ninjected", "a b", "<script>"])
    def test_unsafe_or_missing_id_replaced(self, value):
        rid = resolve_request_id(value)

        assert rid != value
        assert len(rid) == 8
        assert all(c in "0123456789abcdef" for c in rid)


class TestRequestIdHeader:

    @pytest.mark.asyncio
    async def test_client_id_echoed(self, test_client):
        response = await test_client.get("/health", headers={"X-Request-ID": "trace-123"})

        assert response.headers["X-Request-ID"] == "trace-123"

    @pytest.mark.asyncio
    async def test_error_body_carries_generated_id(self, test_client):
        response = await test_client.get("/api/users")

        assert response.status_code == 401
        rid = response.headers["X-Request-ID"]
        assert len(rid) == 8
        assert response.json()["request_id"] == rid
