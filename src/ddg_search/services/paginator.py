"""Cursor pagination over the images and text endpoints.

Both paginators are async generators: a page is only requested when the
consumer asks for more results than the previous pages produced, so breaking
out of ``async for`` never triggers another request. Rows are converted and
yielded one at a time; a row with an unexpected shape ends the sequence after
the rows that preceded it were emitted. Every call keeps its own
:class:`PaginationState`; the paginator objects themselves are stateless and
can serve concurrent searches.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import AsyncIterator, List, Mapping, Optional, Set, Tuple

from loguru import logger

from ddg_search.schemas.query import ImagesParams, SearchQuery, TextParams
from ddg_search.schemas.results import ImageResult, TextResult
from ddg_search.services.fetcher import ContentNegotiatingFetcher, ResponsePayload, StructuredPayload
from ddg_search.utils.errors import MalformedResponse
from ddg_search.utils.normalize import normalize_text, normalize_url

TEXT_CURSORS: Tuple[str, ...] = ("0", "20", "70", "120")
"""Fixed ``s`` offsets requested from the text endpoint; nothing exists beyond."""

SENTINEL_TEMPLATE = "http://www.google.com/search?q={keywords}"
"""Placeholder row the text endpoint injects; never a genuine result."""


@dataclass
class PaginationState:
    """Mutable state of one paginated call: cursor, seen keys and round counter."""

    cursor: str = "0"
    seen: Set[str] = field(default_factory=set)
    rounds: int = 0

    def claim(self, key: str) -> bool:
        """Mark ``key`` as seen, returning ``False`` when it already was."""
        if key in self.seen:
            return False
        self.seen.add(key)
        return True


def _page_object(payload: ResponsePayload) -> Mapping[str, object]:
    if not isinstance(payload, StructuredPayload) or not isinstance(payload.data, dict):
        raise MalformedResponse("Expected a JSON object payload")
    return payload.data


def _result_rows(page: Mapping[str, object]) -> List[object]:
    """Return the ``results`` list of a decoded page."""
    rows = page.get("results")
    if not isinstance(rows, list):
        raise MalformedResponse("Payload carries no result list")
    return rows


def _row_mapping(row: object) -> Mapping[str, object]:
    if not isinstance(row, dict):
        raise MalformedResponse(f"Unexpected result row {row!r}")
    return row


def _cursor_from_next(next_url: str) -> str:
    """Extract the value between ``s=`` and the following ``&``."""
    if "s=" not in next_url:
        raise MalformedResponse(f"No cursor in next page link {next_url!r}")
    return next_url.split("s=", 1)[1].split("&", 1)[0]


def _dimension(value: object) -> int:
    """Return a pixel size, ``0`` when the backend sends something unusable."""
    try:
        return int(value) if value is not None else 0  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return 0


def _optional_str(value: object) -> Optional[str]:
    return None if value is None else str(value)


def _log_malformed(vertical: str, state: PaginationState, exc: MalformedResponse) -> None:
    logger.bind(vertical=vertical, round=state.rounds, error=exc.message).warning(
        "paginator.malformed_page"
    )


class ImagePaginator:
    """Follow the dynamic ``next`` cursor of the images endpoint."""

    def __init__(
        self, fetcher: ContentNegotiatingFetcher, url: str, *, max_rounds: int = 10
    ) -> None:
        self._fetcher = fetcher
        self._url = url
        self._max_rounds = max_rounds

    async def paginate(self, query: SearchQuery, vqd: str) -> AsyncIterator[ImageResult]:
        params = ImagesParams.from_query(query, vqd)
        state = PaginationState()
        while state.rounds < self._max_rounds:
            state.rounds += 1
            payload = await self._fetcher.fetch(
                "GET", self._url, params.model_copy(update={"s": state.cursor}).to_query()
            )
            if payload is None:
                return
            try:
                page = _page_object(payload)
                rows = _result_rows(page)
            except MalformedResponse as exc:
                _log_malformed("images", state, exc)
                return
            new_results = 0
            for row in rows:
                try:
                    record = self._parse_row(_row_mapping(row), state)
                except MalformedResponse as exc:
                    _log_malformed("images", state, exc)
                    return
                if record is None:
                    continue
                new_results += 1
                yield record
            logger.bind(
                vertical="images", round=state.rounds, cursor=state.cursor, new_results=new_results
            ).debug("paginator.round_completed")
            next_url = page.get("next")
            if not new_results or not next_url:
                return
            try:
                state.cursor = _cursor_from_next(str(next_url))
            except MalformedResponse as exc:
                _log_malformed("images", state, exc)
                return

    @staticmethod
    def _parse_row(row: Mapping[str, object], state: PaginationState) -> Optional[ImageResult]:
        """Return the record for ``row``, ``None`` when it has no new image URL."""
        image_url = row.get("image")
        if not image_url or not state.claim(str(image_url)):
            return None
        return ImageResult(
            title=str(row.get("title") or ""),
            image=normalize_url(str(image_url)),
            thumbnail=normalize_url(_optional_str(row.get("thumbnail"))),
            url=normalize_url(_optional_str(row.get("url"))),
            height=_dimension(row.get("height")),
            width=_dimension(row.get("width")),
            source=str(row.get("source") or ""),
        )


class TextPaginator:
    """Walk the fixed cursor positions of the text endpoint."""

    def __init__(self, fetcher: ContentNegotiatingFetcher, url: str) -> None:
        self._fetcher = fetcher
        self._url = url

    async def paginate(self, query: SearchQuery, vqd: str) -> AsyncIterator[TextResult]:
        params = TextParams.from_query(query, vqd)
        state = PaginationState()
        sentinel = SENTINEL_TEMPLATE.format(keywords=query.keywords)
        for cursor in TEXT_CURSORS:
            state.cursor = cursor
            state.rounds += 1
            payload = await self._fetcher.fetch(
                "GET", self._url, params.model_copy(update={"s": cursor}).to_query()
            )
            if payload is None:
                return
            try:
                rows = _result_rows(_page_object(payload))
            except MalformedResponse as exc:
                _log_malformed("text", state, exc)
                return
            new_results = 0
            for row in rows:
                try:
                    record = self._parse_row(_row_mapping(row), state, sentinel)
                except MalformedResponse as exc:
                    _log_malformed("text", state, exc)
                    return
                if record is None:
                    continue
                new_results += 1
                yield record
            logger.bind(
                vertical="text", round=state.rounds, cursor=cursor, new_results=new_results
            ).debug("paginator.round_completed")
            if not new_results:
                return

    @staticmethod
    def _parse_row(
        row: Mapping[str, object], state: PaginationState, sentinel: str
    ) -> Optional[TextResult]:
        href = row.get("u")
        if not href or href == sentinel or not state.claim(str(href)):
            return None
        body = normalize_text(_optional_str(row.get("a")))
        if not body:
            return None
        return TextResult(
            title=normalize_text(_optional_str(row.get("t"))),
            href=normalize_url(str(href)),
            body=body,
        )


__all__ = [
    "ImagePaginator",
    "PaginationState",
    "SENTINEL_TEMPLATE",
    "TEXT_CURSORS",
    "TextPaginator",
]
