"""Error hierarchy shared by the fetcher, token acquirer and paginators."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from ddg_search.types import JSONDict


class ErrorKind(str, Enum):
    """Classification attached by the transport to every failure it raises."""

    TRANSIENT = "transient"
    BOT_DETECTED = "bot_detected"


class SearchError(Exception):
    """Base client exception carrying a machine-friendly code."""

    code = "search_error"

    def __init__(
        self,
        message: str,
        *,
        details: Optional[JSONDict] = None,
        code: str | None = None,
    ) -> None:
        """Capture the human message, optional structured details and override code."""
        super().__init__(message)
        self.message = message
        self.details: JSONDict = details if details is not None else {}
        self.code = code or self.__class__.code

    def to_payload(self) -> JSONDict:
        """Return a JSON-friendly description of the error."""
        return {
            "error": {"code": self.code, "message": self.message},
            "details": self.details,
        }


class InvalidQuery(SearchError):
    """Raised when the caller supplies an unusable search query."""

    code = "invalid_query"


class MissingKeywords(InvalidQuery):
    """Raised before any network call when the keywords are empty."""

    code = "missing_keywords"


class TokenUnavailable(SearchError):
    """Raised when the vqd session token cannot be obtained."""

    code = "token_unavailable"


class TransportError(SearchError):
    """Failure raised by a transport, tagged with an :class:`ErrorKind`."""

    code = "transport_error"

    def __init__(
        self,
        message: str,
        *,
        kind: ErrorKind = ErrorKind.TRANSIENT,
        status_code: int | None = None,
        details: Optional[JSONDict] = None,
        code: str | None = None,
    ) -> None:
        merged: JSONDict = {"kind": kind.value}
        if status_code is not None:
            merged["status_code"] = status_code
        if details:
            merged.update(details)
        super().__init__(message, details=merged, code=code)
        self.kind = kind
        self.status_code = status_code


class TransientHttpFailure(TransportError):
    """Soft block (status 202) or a redirect onto the backend's 500 page."""

    code = "transient_http_failure"


class FatalHttpFailure(SearchError):
    """Bot detection or exhausted retries; terminates the running search."""

    code = "fatal_http_failure"


class MalformedResponse(SearchError):
    """Payload is present but lacks the fields a paginator expects."""

    code = "malformed_response"


__all__ = [
    "ErrorKind",
    "SearchError",
    "InvalidQuery",
    "MissingKeywords",
    "TokenUnavailable",
    "TransportError",
    "TransientHttpFailure",
    "FatalHttpFailure",
    "MalformedResponse",
]
