"""Query, request parameter and result models."""

from .query import ImagesParams, ProbeParams, SafeSearch, SearchQuery, TextParams
from .results import ImageResult, TextResult

__all__ = [
    "ImageResult",
    "ImagesParams",
    "ProbeParams",
    "SafeSearch",
    "SearchQuery",
    "TextParams",
    "TextResult",
]
