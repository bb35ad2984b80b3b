"""Core types: errors, stream phases and query helpers."""

from .enums import StreamPhase
from .exceptions import PageFetchError, PagingError, PagingUsageError
from .query import Query, derive_query, is_query_mapping, next_page_query, strip_control_fields

__all__ = [
    "StreamPhase",
    "PagingError",
    "PagingUsageError",
    "PageFetchError",
    "Query",
    "derive_query",
    "is_query_mapping",
    "next_page_query",
    "strip_control_fields",
]
