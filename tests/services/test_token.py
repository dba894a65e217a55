"""Unit tests for vqd extraction and acquisition."""

from __future__ import annotations

import pytest

from ddg_search.config import Settings
from ddg_search.services.fetcher import ContentNegotiatingFetcher
from ddg_search.services.token import TokenAcquirer, extract_vqd
from ddg_search.utils.errors import ErrorKind, TransportError
from fakes import RecordingSleep, ScriptedTransport, html_response, json_response


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        ('<script>vqd="ABC123";</script>', "ABC123"),
        ("<a href='/?q=cat&vqd=4-1234&t=h_'>", "4-1234"),
        ('nvqd="first" vqd="second"', "first"),
        ("<p>no token here</p>", None),
        ('vqd="unterminated', None),
        # ``vqd=`` also prefixes the single-quoted form, so it wins before ``vqd='``.
        ("<script>vqd='4-1';</script><a href='/?kl=wt-wt&ia=web'>", "'4-1';</script><a href='/?kl=wt-wt"),
        ("<script>vqd='4-1';</script>", None),
    ],
)
def test_extract_vqd(body: str, expected: str | None) -> None:
    """The first start marker found decides which delimiter closes the token."""
    assert extract_vqd(body) == expected


def _acquirer(transport: ScriptedTransport) -> TokenAcquirer:
    fetcher = ContentNegotiatingFetcher(
        transport, settings=Settings(retry_delay_seconds=0.0), sleep=RecordingSleep()
    )
    return TokenAcquirer(fetcher, "https://duckduckgo.com")


@pytest.mark.anyio
async def test_acquire_probes_root_page_with_keywords() -> None:
    """The token is read from the root page fetched with the keywords."""
    transport = ScriptedTransport([html_response('vqd="X1"')])

    token = await _acquirer(transport).acquire("cat")

    assert token == "X1"
    assert transport.calls[0]["url"] == "https://duckduckgo.com"
    assert transport.calls[0]["params"] == {"q": "cat"}


@pytest.mark.anyio
async def test_acquire_returns_none_when_marker_missing() -> None:
    """A page without any marker yields no token."""
    transport = ScriptedTransport([html_response("<p>nothing</p>")])
    assert await _acquirer(transport).acquire("cat") is None


@pytest.mark.anyio
async def test_acquire_returns_none_for_non_html_payload() -> None:
    """Only HTML probe responses are scanned for the token."""
    transport = ScriptedTransport([json_response('{"vqd": "X1"}')])
    assert await _acquirer(transport).acquire("cat") is None


@pytest.mark.anyio
async def test_acquire_swallows_fetch_failures() -> None:
    """A fatal probe failure is reported as a missing token, not raised."""
    transport = ScriptedTransport(
        [TransportError("teapot", kind=ErrorKind.BOT_DETECTED, status_code=418)]
    )
    assert await _acquirer(transport).acquire("cat") is None
