"""Tests for the httpx-backed transport."""

from __future__ import annotations

import json

import httpx
import pytest

from tars.exceptions import TransportError
from tars.transport import HttpxTransport, Transport, TransportResponse


@pytest.mark.unit
class TestHttpxTransport:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(HttpxTransport(), Transport)

    async def test_sends_json_and_headers(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"ok": True})

        transport = HttpxTransport(transport=httpx.MockTransport(handler))
        resp = await transport.request(
            "POST",
            "https://api.example.com/v1/chat/completions",
            headers={"Authorization": "Bearer k"},
            json={"model": "m"},
            timeout=5.0,
        )

        assert isinstance(resp, TransportResponse)
        assert resp.ok
        assert json.loads(resp.body) == {"ok": True}
        assert seen[0].method == "POST"
        assert seen[0].headers["authorization"] == "Bearer k"
        assert json.loads(seen[0].content) == {"model": "m"}

    async def test_error_status_is_returned_not_raised(self) -> None:
        transport = HttpxTransport(
            transport=httpx.MockTransport(lambda request: httpx.Response(503, text="busy"))
        )
        resp = await transport.request("POST", "https://api.example.com/x", json={})
        assert resp.status_code == 503
        assert not resp.ok
        assert resp.body == b"busy"

    async def test_network_error_wrapped(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        transport = HttpxTransport(transport=httpx.MockTransport(handler))
        with pytest.raises(TransportError) as exc_info:
            await transport.request("POST", "https://api.example.com/x", json={})

        assert exc_info.value.status_code is None
        assert exc_info.value.retriable
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    async def test_uses_injected_client(self) -> None:
        calls: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(str(request.url))
            return httpx.Response(200, json={})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            transport = HttpxTransport(client=client)
            await transport.request("POST", "https://api.example.com/a", json={})
            await transport.request("POST", "https://api.example.com/b", json={})
            assert not client.is_closed

        assert calls == ["https://api.example.com/a", "https://api.example.com/b"]
