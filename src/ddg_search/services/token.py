"""Acquisition of the ``vqd`` session token gating every search call."""

from __future__ import annotations

from typing import Optional, Tuple

from loguru import logger

from ddg_search.schemas.query import ProbeParams
from ddg_search.services.fetcher import ContentNegotiatingFetcher, RawPayload
from ddg_search.utils.errors import SearchError

TOKEN_MARKERS: Tuple[Tuple[str, str], ...] = (
    ('vqd="', '"'),
    ("vqd=", "&"),
    ("vqd='", "'"),
)
"""Start/end delimiter pairs, tried in order."""


def extract_vqd(text: str) -> Optional[str]:
    """Return the token following the first start marker found in ``text``.

    The first marker present decides: its value runs up to the next paired end
    marker, and a missing end marker yields ``None`` rather than a retry with
    the remaining pairs.
    """
    for start_marker, end_marker in TOKEN_MARKERS:
        start = text.find(start_marker)
        if start == -1:
            continue
        start += len(start_marker)
        end = text.find(end_marker, start)
        if end == -1:
            return None
        return text[start:end]
    return None


class TokenAcquirer:
    """Probe the root page with the keywords and scan the HTML for the token."""

    def __init__(self, fetcher: ContentNegotiatingFetcher, base_url: str) -> None:
        self._fetcher = fetcher
        self._base_url = base_url

    async def acquire(self, keywords: str) -> Optional[str]:
        """Return the token for ``keywords`` or ``None`` when it is unavailable."""
        try:
            payload = await self._fetcher.fetch(
                "GET", self._base_url, ProbeParams(q=keywords).to_query()
            )
        except SearchError as exc:
            logger.bind(keywords=keywords, code=exc.code, error=exc.message).warning(
                "token.probe_failed"
            )
            return None
        if not isinstance(payload, RawPayload):
            logger.bind(keywords=keywords).warning("token.probe_not_html")
            return None
        token = extract_vqd(payload.text)
        if token is None:
            logger.bind(keywords=keywords).warning("token.not_found")
        return token


__all__ = ["TOKEN_MARKERS", "TokenAcquirer", "extract_vqd"]
