"""Aggregate a result stream into a single callback.

The buffering adapter drains a ResultStream completely and reports every
item at once. Aggregation is all-or-nothing: on a fetch error the callback
receives only the error and items collected so far are dropped.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from ..core.exceptions import PagingUsageError
from ..core.protocols import PageCallback
from .stream import ResultStream
from .telemetry import log_aggregate_complete

logger = logging.getLogger(__name__)

# Strong references to running aggregations until they finish
_background_tasks: set[asyncio.Task[None]] = set()


def buffer_results(stream: ResultStream, callback: PageCallback) -> asyncio.Task[None]:
    """Drain ``stream`` on the running loop and call ``callback`` once.

    The callback is invoked as ``callback(None, items)`` after the stream
    ends normally, or as ``callback(error)`` as soon as a fetch fails. An
    exception raised by the callback is logged; the task still completes.

    Args:
        stream: Stream to drain (must not have been read yet)
        callback: Aggregate callback

    Returns:
        Task driving the aggregation

    Raises:
        PagingUsageError: If there is no running event loop
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError as e:
        raise PagingUsageError("Aggregating pages requires a running event loop") from e

    results: list[Any] = []

    def deliver(*args: Any) -> None:
        try:
            callback(*args)
        except Exception:
            logger.error(
                f"Aggregate callback for {stream.name} failed",
                exc_info=True,
                extra={"operation": stream.name},
            )

    def on_error(error: BaseException) -> None:
        deliver(error)

    def on_end() -> None:
        log_aggregate_complete(operation=stream.name, total_items=len(results))
        deliver(None, results)

    # Error first so a failure is reported without waiting for "end"
    stream.on("error", on_error).on("data", results.append).on("end", on_end)

    task = loop.create_task(stream.consume())
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)
    return task


async def collect_results(stream: ResultStream) -> list[Any]:
    """Awaitable counterpart of `buffer_results`; raises the fetch error."""
    results = await stream.collect()
    log_aggregate_complete(operation=stream.name, total_items=len(results))
    return results
