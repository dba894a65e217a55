"""Request pipeline: transport, fetcher, token acquisition and pagination."""

from .fetcher import ContentNegotiatingFetcher, RawPayload, ResponsePayload, StructuredPayload
from .paginator import ImagePaginator, PaginationState, TextPaginator
from .search_api import SearchApi
from .token import TokenAcquirer, extract_vqd
from .transport import HttpxTransport, Transport, TransportResponse

__all__ = [
    "ContentNegotiatingFetcher",
    "HttpxTransport",
    "ImagePaginator",
    "PaginationState",
    "RawPayload",
    "ResponsePayload",
    "SearchApi",
    "StructuredPayload",
    "TextPaginator",
    "TokenAcquirer",
    "Transport",
    "TransportResponse",
    "extract_vqd",
]
