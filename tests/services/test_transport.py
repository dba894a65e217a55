"""Unit tests covering the httpx-backed transport."""

from __future__ import annotations

import json

import httpx
import pytest

from ddg_search.config import Settings
from ddg_search.services.transport import HttpxTransport
from ddg_search.utils.errors import ErrorKind, TransportError


@pytest.mark.anyio
async def test_request_returns_status_headers_and_final_url(settings: Settings) -> None:
    """Redirects are followed and the final URL is reported."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/":
            assert request.url.params["q"] == "cat"
            assert request.headers["user-agent"] == settings.user_agent
            return httpx.Response(302, headers={"Location": "https://duckduckgo.com/500.html"})
        return httpx.Response(200, html="<p>oops</p>")

    transport = HttpxTransport(settings=settings, transport=httpx.MockTransport(handler))

    response = await transport.request("GET", "https://duckduckgo.com/", params={"q": "cat"})

    assert response.status_code == 200
    assert response.final_url == "https://duckduckgo.com/500.html"
    assert response.content_type.startswith("text/html")
    assert response.text == "<p>oops</p>"


@pytest.mark.anyio
async def test_request_sends_json_body(settings: Settings) -> None:
    """JSON bodies are serialised by the transport."""
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert json.loads(request.read()) == {"q": "cat"}
        return httpx.Response(200, json={"ok": True})

    transport = HttpxTransport(settings=settings, transport=httpx.MockTransport(handler))

    response = await transport.request("POST", "https://duckduckgo.com/x", json={"q": "cat"})

    assert response.content_type == "application/json"


@pytest.mark.anyio
async def test_status_418_is_tagged_as_bot_detection(settings: Settings) -> None:
    """HTTP 418 raises a ``BOT_DETECTED`` transport error."""
    transport = HttpxTransport(
        settings=settings,
        transport=httpx.MockTransport(lambda _: httpx.Response(418, text="teapot")),
    )

    with pytest.raises(TransportError) as exc_info:
        await transport.request("GET", "https://duckduckgo.com/")

    assert exc_info.value.kind is ErrorKind.BOT_DETECTED
    assert exc_info.value.status_code == 418


@pytest.mark.anyio
async def test_network_errors_are_tagged_as_transient(settings: Settings) -> None:
    """httpx failures are wrapped as transient transport errors."""
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    transport = HttpxTransport(settings=settings, transport=httpx.MockTransport(handler))

    with pytest.raises(TransportError) as exc_info:
        await transport.request("GET", "https://duckduckgo.com/")

    assert exc_info.value.kind is ErrorKind.TRANSIENT
    assert "boom" in exc_info.value.message
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
