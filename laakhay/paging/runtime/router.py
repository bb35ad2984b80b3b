"""Mode routing for paginated operations.

The router decides how one call to a paginated operation is executed:

| callback | auto_paginate | execution                                   |
|----------|---------------|---------------------------------------------|
| no       | -             | return a ResultStream                       |
| yes      | False         | call the page-fetch operation directly      |
| yes      | True          | drain a ResultStream, callback(None, items) |

Page-fetch operations are written once against the (query, callback)
contract and made pagination-aware with `extend`, `paginated` or
`paginate`:

    class DatasetClient:
        def list_datasets(self, query, callback):
            ...
            callback(None, datasets, next_query, response)

    extend(DatasetClient, ["list_datasets"])

    client.list_datasets().on("data", print)            # stream (reads on the running loop)
    client.list_datasets(lambda err, all_sets: ...)     # aggregate
    client.list_datasets({"maxResults": 5}, callback)   # one page
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Iterable
from functools import wraps
from typing import Any

from ..core.exceptions import PagingUsageError
from ..core.protocols import PageFetchOperation
from .arguments import parse_arguments
from .buffering import buffer_results
from .definitions import InvocationDescriptor
from .stream import ResultStream

logger = logging.getLogger(__name__)


def route(
    descriptor: InvocationDescriptor,
    fetch: PageFetchOperation,
    *,
    name: str | None = None,
) -> Any:
    """Execute one normalized call.

    Args:
        descriptor: Normalized invocation
        fetch: Page-fetch operation to run
        name: Operation name for logs

    Returns:
        ResultStream when no callback was given, the aggregation task in
        aggregate mode, otherwise whatever the page-fetch operation returns
    """
    if descriptor.callback is None:
        return ResultStream(descriptor, fetch, name=name)

    if not descriptor.auto_paginate:
        logger.debug(
            "Passing call through without pagination",
            extra={"operation": name, "max_results": descriptor.max_results},
        )
        return fetch(descriptor.query, descriptor.callback)

    stream = ResultStream(descriptor, fetch, name=name)
    return buffer_results(stream, descriptor.callback)


def paginate(fetch: PageFetchOperation, *, name: str | None = None) -> Callable[..., Any]:
    """Wrap a page-fetch callable so it accepts every paginated call shape.

    Args:
        fetch: Function or bound method following the (query, callback) contract
        name: Operation name for logs (defaults to the qualname)

    Returns:
        Callable taking ``(query?, callback?)``
    """
    operation_name = name or getattr(fetch, "__qualname__", type(fetch).__name__)

    @wraps(fetch)
    def wrapper(*args: Any) -> Any:
        return route(parse_arguments(args), fetch, name=operation_name)

    wrapper.__paginated__ = True  # type: ignore[attr-defined]
    return wrapper


def paginated(method: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator making a page-fetch method pagination-aware.

    Usage:
        class JobClient:
            @paginated
            def list_jobs(self, query, callback):
                ...
    """

    @wraps(method)
    def wrapper(self: Any, *args: Any) -> Any:
        return route(parse_arguments(args), method.__get__(self), name=method.__qualname__)

    wrapper.__paginated__ = True  # type: ignore[attr-defined]
    return wrapper


def extend(cls: type, method_names: str | Iterable[str]) -> type:
    """Replace the named methods of ``cls`` with pagination-aware wrappers.

    Args:
        cls: Class owning the page-fetch methods
        method_names: One method name or several

    Returns:
        ``cls``, so this also works as a plain call after the class body

    Raises:
        PagingUsageError: If a name is not a method of ``cls`` or is a
            classmethod
    """
    names = [method_names] if isinstance(method_names, str) else list(method_names)

    for method_name in names:
        original = inspect.getattr_static(cls, method_name, None)
        if isinstance(original, classmethod):
            raise PagingUsageError(
                f"{cls.__name__}.{method_name} is a classmethod; only instance and static "
                "methods can be paginated"
            )
        if isinstance(original, staticmethod):
            # No receiver to bind: wrap the plain function
            if not getattr(original.__func__, "__paginated__", False):
                setattr(cls, method_name, staticmethod(paginate(original.__func__)))
            continue
        if not callable(original):
            raise PagingUsageError(f"{cls.__name__} has no method {method_name!r}")
        if getattr(original, "__paginated__", False):
            continue
        setattr(cls, method_name, paginated(original))

    return cls
