"""Adapters from coroutine page sources to the page-fetch contract."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from functools import wraps
from typing import Any

from ..config import DEFAULT_PAGE_TOKEN_FIELD
from ..core.protocols import PageCallback, PageFetchOperation
from ..core.query import Query, is_query_mapping, next_page_query
from ..models import Page

# Strong references to in-flight page fetches
_pending_fetches: set[asyncio.Task[None]] = set()


def from_coroutine(fetch_page: Callable[[Query], Awaitable[Page]]) -> PageFetchOperation:
    """Turn ``async def fetch_page(query) -> Page`` into a page-fetch operation.

    The returned operation schedules ``fetch_page`` on the running loop and
    reports the outcome through the callback: ``(None, items, next_query,
    raw_response)`` on success, ``(error, None, None, None)`` on failure.

    Args:
        fetch_page: Coroutine function returning one Page

    Returns:
        Callable following the (query, callback) contract
    """

    async def run(query: Query, callback: PageCallback) -> None:
        try:
            page = await fetch_page(query)
        except Exception as e:
            callback(e, None, None, getattr(e, "response", None))
            return
        callback(None, page.items, page.next_query, page.raw_response)

    @wraps(fetch_page)
    def operation(query: Query, callback: PageCallback) -> None:
        task = asyncio.get_running_loop().create_task(run(query, callback))
        _pending_fetches.add(task)
        task.add_done_callback(_pending_fetches.discard)

    return operation


def pages_from(
    items: Sequence[Any],
    page_size: int,
    *,
    token_field: str = DEFAULT_PAGE_TOKEN_FIELD,
) -> Callable[[Query], Awaitable[Page]]:
    """Serve ``items`` in pages of ``page_size`` behind an offset token.

    Useful for exercising paginated operations without a network.
    """
    if page_size < 1:
        raise ValueError("page_size must be positive")

    async def fetch_page(query: Query) -> Page:
        base = query if is_query_mapping(query) else {}
        offset = int(base.get(token_field) or 0)
        end = offset + page_size
        token = str(end) if end < len(items) else None
        return Page(
            items=list(items[offset:end]),
            next_query=next_page_query(base, token, token_field=token_field),
            raw_response={"offset": offset, "total": len(items)},
        )

    return fetch_page
