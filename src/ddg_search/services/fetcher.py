"""Retrying fetcher resolving backend responses into JSON or raw text."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Mapping, Optional, Union

from loguru import logger

from ddg_search.config import Settings, get_settings
from ddg_search.services.transport import Transport, TransportResponse
from ddg_search.types import JSONDict, JSONValue
from ddg_search.utils.errors import (
    ErrorKind,
    FatalHttpFailure,
    TransientHttpFailure,
    TransportError,
)

Sleeper = Callable[[float], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class StructuredPayload:
    """Parsed JSON body."""

    data: JSONValue


@dataclass(frozen=True, slots=True)
class RawPayload:
    """Text body of an HTML page."""

    text: str


ResponsePayload = Union[StructuredPayload, RawPayload]


class AttemptOutcome(str, Enum):
    """Result of one fetch attempt as reported in the logs."""

    SUCCESS = "success"
    NO_PAYLOAD = "no_payload"
    RETRYABLE = "retryable_failure"
    FATAL = "fatal_failure"


@dataclass(slots=True)
class FetchAttempt:
    """Transient record describing one HTTP call of a fetch."""

    method: str
    url: str
    params: Mapping[str, str]
    index: int
    outcome: AttemptOutcome | None = None

    def log_context(self) -> JSONDict:
        return {
            "method": self.method,
            "url": self.url,
            "attempt": self.index,
            "outcome": self.outcome.value if self.outcome else None,
        }


class ContentNegotiatingFetcher:
    """Wrap a :class:`Transport` with retries and content-type resolution.

    A fetch makes up to ``settings.retry_attempts`` attempts separated by a
    constant ``settings.retry_delay_seconds`` pause. Attempts that fail with a
    transient error or produce no usable payload are logged and retried. A
    bot detection error aborts immediately and the last attempt's error is
    surfaced, both as :class:`FatalHttpFailure`. When every attempt ends
    without a payload the fetch returns ``None``.
    """

    def __init__(
        self,
        transport: Transport,
        *,
        settings: Settings | None = None,
        sleep: Sleeper | None = None,
    ) -> None:
        self._transport = transport
        self._settings = settings or get_settings()
        self._sleep: Sleeper = sleep or asyncio.sleep

    async def fetch(
        self, method: str, url: str, params: Mapping[str, str]
    ) -> Optional[ResponsePayload]:
        """Return the payload served by ``url`` or ``None`` when nothing usable came back."""
        method = method.upper()
        attempts = self._settings.retry_attempts
        for index in range(attempts):
            attempt = FetchAttempt(method=method, url=url, params=params, index=index)
            try:
                response = await self._send(method, url, params)
                payload = self._resolve(response, attempt)
            except TransportError as exc:
                last_attempt = index >= attempts - 1
                fatal = exc.kind is ErrorKind.BOT_DETECTED or last_attempt
                attempt.outcome = AttemptOutcome.FATAL if fatal else AttemptOutcome.RETRYABLE
                logger.bind(
                    **attempt.log_context(),
                    kind=exc.kind.value,
                    status_code=exc.status_code,
                    error=exc.message,
                ).warning("fetch.attempt_failed")
                if fatal:
                    raise FatalHttpFailure(
                        f"Request to {url} failed: {exc.message}",
                        details={
                            "url": url,
                            "attempts": index + 1,
                            "kind": exc.kind.value,
                        },
                    ) from exc
            else:
                if payload is not None:
                    return payload
            if index < attempts - 1:
                await self._sleep(self._settings.retry_delay_seconds)
        return None

    async def _send(
        self, method: str, url: str, params: Mapping[str, str]
    ) -> TransportResponse:
        headers = {"Content-Type": "application/json"} if params.get("o") == "json" else None
        if method == "GET":
            return await self._transport.request(method, url, params=params, headers=headers)
        return await self._transport.request(method, url, json=dict(params), headers=headers)

    def _resolve(
        self, response: TransportResponse, attempt: FetchAttempt
    ) -> Optional[ResponsePayload]:
        """Classify ``response``; raise for soft blocks, ``None`` when unusable."""
        if "500" in response.final_url or response.status_code == 202:
            raise TransientHttpFailure(
                f"Soft block from backend (status {response.status_code})",
                status_code=response.status_code,
                details={"final_url": response.final_url},
            )
        if response.status_code != 200:
            attempt.outcome = AttemptOutcome.NO_PAYLOAD
            logger.bind(**attempt.log_context(), status_code=response.status_code).warning(
                "fetch.unexpected_status"
            )
            return None
        content_type = response.content_type.lower()
        if "text/html" in content_type:
            attempt.outcome = AttemptOutcome.SUCCESS
            return RawPayload(text=response.text)
        if "application/json" in content_type:
            try:
                data = json.loads(response.text)
            except ValueError:
                attempt.outcome = AttemptOutcome.NO_PAYLOAD
                logger.bind(**attempt.log_context()).warning("fetch.invalid_json")
                return None
            attempt.outcome = AttemptOutcome.SUCCESS
            return StructuredPayload(data=data)
        attempt.outcome = AttemptOutcome.NO_PAYLOAD
        logger.bind(**attempt.log_context(), content_type=content_type).warning(
            "fetch.unsupported_content_type"
        )
        return None


__all__ = [
    "AttemptOutcome",
    "ContentNegotiatingFetcher",
    "FetchAttempt",
    "RawPayload",
    "ResponsePayload",
    "StructuredPayload",
]
