"""Public entry point composing token acquisition, fetching and pagination."""

from __future__ import annotations

from contextlib import aclosing
from typing import AsyncIterator, Optional, Protocol, TypeVar

from ddg_search.config import Settings, get_settings
from ddg_search.schemas.query import SearchQuery
from ddg_search.schemas.results import ImageResult, TextResult
from ddg_search.services.fetcher import ContentNegotiatingFetcher, Sleeper
from ddg_search.services.paginator import ImagePaginator, TextPaginator
from ddg_search.services.token import TokenAcquirer
from ddg_search.services.transport import HttpxTransport, Transport
from ddg_search.utils.errors import TokenUnavailable
from ddg_search.utils.logging import log_stage

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class _Paginator(Protocol[T_co]):
    def paginate(self, query: SearchQuery, vqd: str) -> AsyncIterator[T_co]: ...


class SearchApi:
    """Image and text search against the backend's unofficial JSON endpoints.

    ``images`` and ``text`` validate their arguments when called, raising
    :class:`~ddg_search.utils.errors.MissingKeywords` before any request, and
    return async iterators. The token probe happens on the first pull; the
    following pages are fetched only as the consumer keeps iterating.

    The instance holds no per-search state, so one ``SearchApi`` may serve
    any number of concurrent searches.
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        transport: Transport | None = None,
        sleep: Sleeper | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._transport = transport or HttpxTransport(settings=self._settings)
        self._fetcher = ContentNegotiatingFetcher(
            self._transport, settings=self._settings, sleep=sleep
        )
        self._tokens = TokenAcquirer(self._fetcher, self._settings.base_url)
        self._images = ImagePaginator(
            self._fetcher,
            self._settings.images_url,
            max_rounds=self._settings.images_max_rounds,
        )
        self._text = TextPaginator(self._fetcher, self._settings.text_url)

    def images(
        self,
        keywords: str,
        region: str = "wt-wt",
        safesearch: str = "moderate",
        timelimit: Optional[str] = None,
        size: Optional[str] = None,
        color: Optional[str] = None,
        type_image: Optional[str] = None,
        layout: Optional[str] = None,
        license_image: Optional[str] = None,
    ) -> AsyncIterator[ImageResult]:
        """Return a lazy stream of image results for ``keywords``."""
        query = SearchQuery.create(
            keywords,
            region=region,
            safesearch=safesearch,
            timelimit=timelimit,
            size=size,
            color=color,
            type_image=type_image,
            layout=layout,
            license_image=license_image,
        )
        return self._run("images", query, self._images)

    def text(
        self,
        keywords: str,
        region: str = "wt-wt",
        safesearch: str = "moderate",
        timelimit: Optional[str] = None,
    ) -> AsyncIterator[TextResult]:
        """Return a lazy stream of web results for ``keywords``."""
        query = SearchQuery.create(
            keywords, region=region, safesearch=safesearch, timelimit=timelimit
        )
        return self._run("text", query, self._text)

    async def _run(
        self, vertical: str, query: SearchQuery, paginator: _Paginator[T]
    ) -> AsyncIterator[T]:
        with log_stage("token", vertical=vertical, keywords=query.keywords):
            vqd = await self._tokens.acquire(query.keywords)
            if not vqd:
                raise TokenUnavailable(
                    "Error in getting vqd", details={"keywords": query.keywords}
                )
        async with aclosing(paginator.paginate(query, vqd)) as results:
            async for result in results:
                yield result


__all__ = ["SearchApi"]
