"""Call normalization for paginated operations.

A paginated operation accepts any of these call shapes:

    op()                    -> stream
    op(query)               -> stream
    op(callback)            -> aggregate (or one page, see below)
    op(query, callback)     -> aggregate (or one page, see below)

`parse_arguments` resolves the raw positional arguments once into an
`InvocationDescriptor`; nothing downstream looks at raw arguments again.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from numbers import Real
from typing import Any

from ..config import AUTO_PAGINATE_FLAGS, LIMIT_FIELDS, UNBOUNDED
from ..core.exceptions import PagingUsageError
from .definitions import InvocationDescriptor


def parse_arguments(args: tuple[Any, ...] | list[Any]) -> InvocationDescriptor:
    """Parse positional arguments into an invocation descriptor.

    Args:
        args: Positional arguments the paginated operation received

    Returns:
        InvocationDescriptor for the call

    Raises:
        PagingUsageError: If the arguments match none of the supported shapes
    """
    if len(args) > 2:
        raise PagingUsageError(
            f"Expected at most (query, callback), got {len(args)} positional arguments"
        )

    query: Any = None
    callback = None

    if args:
        first = args[0]
        last = args[-1]

        if callable(first):
            callback = first
        else:
            query = first

        if callable(last):
            callback = last
        elif len(args) == 2 and last is not None:
            raise PagingUsageError(f"Callback must be callable, got {type(last).__name__}")

    if query is not None and not isinstance(query, (Mapping, str)):
        raise PagingUsageError(
            f"Query must be a mapping or a string, got {type(query).__name__}"
        )

    max_results = UNBOUNDED
    auto_paginate = True

    # String shorthand queries are passed through unexamined
    if isinstance(query, Mapping):
        max_results = _find_limit(query)

        if callback is not None and (
            max_results != UNBOUNDED  # caller asked for a bounded number of results
            or any(query.get(flag) is False for flag in AUTO_PAGINATE_FLAGS)
        ):
            auto_paginate = False

    return InvocationDescriptor(
        query=query if query is not None else {},
        callback=callback,
        auto_paginate=auto_paginate,
        max_results=max_results,
    )


def _find_limit(query: Mapping[str, Any]) -> int:
    """Return the first numeric limit field in precedence order, or -1."""
    for field_name in LIMIT_FIELDS:
        value = query.get(field_name)
        # bool is an int subclass but never a limit
        if isinstance(value, Real) and not isinstance(value, bool):
            # inf and nan carry no usable cap
            return int(value) if math.isfinite(value) else UNBOUNDED
    return UNBOUNDED
