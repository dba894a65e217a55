"""HTTP transport boundary used by the content negotiating fetcher."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Protocol

import httpx

from ddg_search.config import Settings, get_settings
from ddg_search.types import JSONDict
from ddg_search.utils.errors import ErrorKind, TransportError

BOT_DETECTED_STATUS = 418


@dataclass(slots=True)
class TransportResponse:
    """Outcome of a single HTTP exchange, after redirects were followed."""

    status_code: int
    final_url: str
    text: str
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def content_type(self) -> str:
        return self.headers.get("content-type", "")


class Transport(Protocol):
    """Protocol describing the single request the fetcher needs."""

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Mapping[str, str]] = None,
        json: Optional[JSONDict] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> TransportResponse:
        """Perform the request or raise :class:`TransportError`."""


class HttpxTransport:
    """Async httpx implementation of :class:`Transport`.

    Every request opens its own client so a call abandoned half way leaves no
    pooled connection behind. Failures are tagged with an :class:`ErrorKind`:
    HTTP 418 is the backend's bot detection answer, every other httpx error is
    considered transient.
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._transport = transport

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Mapping[str, str]] = None,
        json: Optional[JSONDict] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> TransportResponse:
        try:
            async with httpx.AsyncClient(
                timeout=self._settings.http_timeout,
                transport=self._transport,
                follow_redirects=True,
                headers={"User-Agent": self._settings.user_agent},
            ) as http_client:
                response = await http_client.request(
                    method,
                    url,
                    params=dict(params) if params else None,
                    json=json,
                    headers=dict(headers) if headers else None,
                )
        except httpx.HTTPError as exc:
            raise TransportError(
                f"{exc.__class__.__name__}: {exc}", kind=ErrorKind.TRANSIENT
            ) from exc
        if response.status_code == BOT_DETECTED_STATUS:
            raise TransportError(
                "Backend flagged the request as automated",
                kind=ErrorKind.BOT_DETECTED,
                status_code=response.status_code,
            )
        return TransportResponse(
            status_code=response.status_code,
            final_url=str(response.url),
            text=response.text,
            headers={key.lower(): value for key, value in response.headers.items()},
        )


__all__ = ["BOT_DETECTED_STATUS", "HttpxTransport", "Transport", "TransportResponse"]
