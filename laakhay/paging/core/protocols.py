"""Protocols for page-fetch collaborators."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from .query import Query


@runtime_checkable
class PageCallback(Protocol):
    """Error-first completion callback for a single page.

    Manual-pagination callers receive all four arguments. Aggregate callers
    receive ``(None, items)`` on success or ``(error,)`` on failure.
    """

    def __call__(
        self,
        error: BaseException | None,
        items: Sequence[Any] | None = None,
        next_query: Query | None = None,
        raw_response: Any = None,
    ) -> Any: ...


@runtime_checkable
class PageFetchOperation(Protocol):
    """Fetch one page of ``query`` and report it through ``callback``.

    The callback must be invoked exactly once per call, either synchronously
    or later on the running event loop. ``next_query`` is None on the last
    page, otherwise a query that yields the following page.
    """

    def __call__(self, query: Query, callback: PageCallback) -> Any: ...
