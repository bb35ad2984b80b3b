"""Laakhay Paging - stream and aggregate any page-plus-token operation."""

from .config import AUTO_PAGINATE_FLAGS, LIMIT_FIELDS, UNBOUNDED
from .core import (
    PageFetchError,
    PagingError,
    PagingUsageError,
    StreamPhase,
    derive_query,
    next_page_query,
)
from .core.protocols import PageCallback, PageFetchOperation
from .models import Page
from .runtime import (
    InvocationDescriptor,
    ResultStream,
    StreamState,
    buffer_results,
    collect_results,
    extend,
    from_coroutine,
    pages_from,
    paginate,
    paginated,
    parse_arguments,
    route,
)
from .utils import HTTPClient, HTTPPageSource

__version__ = "0.1.0"

__all__ = [
    # Extension API
    "extend",
    "paginate",
    "paginated",
    # Core components
    "parse_arguments",
    "route",
    "ResultStream",
    "buffer_results",
    "collect_results",
    # Types
    "InvocationDescriptor",
    "StreamState",
    "StreamPhase",
    "Page",
    "PageCallback",
    "PageFetchOperation",
    # Query helpers
    "derive_query",
    "next_page_query",
    # Collaborator adapters
    "from_coroutine",
    "pages_from",
    "HTTPClient",
    "HTTPPageSource",
    # Exceptions
    "PagingError",
    "PagingUsageError",
    "PageFetchError",
    # Constants
    "LIMIT_FIELDS",
    "AUTO_PAGINATE_FLAGS",
    "UNBOUNDED",
]
