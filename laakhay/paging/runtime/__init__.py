"""Runtime pagination components."""

from .adapters import from_coroutine, pages_from
from .arguments import parse_arguments
from .buffering import buffer_results, collect_results
from .definitions import InvocationDescriptor, StreamState
from .router import extend, paginate, paginated, route
from .stream import STREAM_EVENTS, ResultStream

__all__ = [
    "InvocationDescriptor",
    "StreamState",
    "ResultStream",
    "STREAM_EVENTS",
    "parse_arguments",
    "route",
    "extend",
    "paginate",
    "paginated",
    "buffer_results",
    "collect_results",
    "from_coroutine",
    "pages_from",
]
