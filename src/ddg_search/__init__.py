"""Async client for the DuckDuckGo image and text search endpoints."""

from __future__ import annotations

from typing import AsyncIterator, Optional

from ddg_search.schemas.results import ImageResult, TextResult
from ddg_search.services.search_api import SearchApi
from ddg_search.utils.errors import (
    FatalHttpFailure,
    InvalidQuery,
    MissingKeywords,
    SearchError,
    TokenUnavailable,
)

__version__ = "0.1.0"


def images(
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
    """Shortcut for ``SearchApi().images(...)`` using the environment settings."""
    return SearchApi().images(
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


def text(
    keywords: str,
    region: str = "wt-wt",
    safesearch: str = "moderate",
    timelimit: Optional[str] = None,
) -> AsyncIterator[TextResult]:
    """Shortcut for ``SearchApi().text(...)`` using the environment settings."""
    return SearchApi().text(keywords, region=region, safesearch=safesearch, timelimit=timelimit)


__all__ = [
    "FatalHttpFailure",
    "ImageResult",
    "InvalidQuery",
    "MissingKeywords",
    "SearchApi",
    "SearchError",
    "TextResult",
    "TokenUnavailable",
    "images",
    "text",
]
