"""Result stream driving a page-fetch operation across all pages.

The ResultStream turns a callback-based "fetch one page" operation into a
lazily started async iterator of individual items.

Architecture:
    The stream is a small state machine owned by one traversal:

        IDLE -> FETCHING -> EMITTING -> (FETCHING -> EMITTING)* -> ENDED

    - IDLE: nothing fetched yet; the first read issues the first fetch
    - FETCHING: exactly one page fetch is in flight
    - EMITTING: a page resolved and its items are buffered for the reader;
      the continuation fetch is issued once the reader drains the page
    - ENDED: terminal, reachable from every phase

    Every transition to ENDED goes through `_request_end`, which is safe to
    call any number of times. Consumers stop early with `end()`.

Design Decisions:
    - Lazy start: a stream nobody reads never fetches
    - One fetch in flight: the next page is requested only after the
      previous page's callback fired and its items were handed out
    - Cap is authoritative: once `maxResults` items are buffered the stream
      ends even if the page carried a continuation query
    - Consumer end discards undelivered items and ignores any page that
      resolves afterwards; in-flight fetches are not aborted
    - Exactly one terminal notification: either "end" or "error"

Events:
    - "data": one call per delivered item, ``handler(item)``
    - "error": terminal, ``handler(error)``
    - "end": terminal, ``handler()``

See Also:
    - route: Chooses between streaming, aggregate and pass-through modes
    - buffer_results: Aggregates a stream into a single callback
"""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict, deque
from collections.abc import Callable
from typing import Any

from ..core.enums import StreamPhase
from ..core.exceptions import PageFetchError, PagingUsageError
from ..core.protocols import PageCallback, PageFetchOperation
from ..core.query import Query
from .definitions import InvocationDescriptor, StreamState
from .telemetry import log_page_error, log_page_received, log_page_requested, log_stream_ended

logger = logging.getLogger(__name__)

STREAM_EVENTS = frozenset({"data", "error", "end"})

# Strong references to streams draining in flowing mode
_flowing_tasks: set[asyncio.Task[None]] = set()


class ResultStream:
    """Lazily driven, cancellable stream of items across pages.

    Usage:
        async for dataset in client.list_datasets():
            if dataset["id"] == wanted:
                break

        # Registering a "data" handler starts reading on the running loop
        stream = client.list_jobs({"state": "done"})
        stream.on("data", handle_job).on("end", on_done)
        await stream.consume()  # optional: wait for the outcome
    """

    def __init__(
        self,
        descriptor: InvocationDescriptor,
        fetch: PageFetchOperation,
        *,
        name: str | None = None,
    ) -> None:
        """Initialize the stream. No fetch is issued until the first read.

        Args:
            descriptor: Normalized invocation (query and result cap are used)
            fetch: Page-fetch operation to drive
            name: Operation name for logs (defaults to the fetch's qualname)
        """
        self._fetch = fetch
        self._query: Query = descriptor.query
        self._name = name or getattr(fetch, "__qualname__", type(fetch).__name__)
        self._state = StreamState(remaining=descriptor.max_results)
        # Items accepted from resolved pages but not yet handed to the reader
        self._buffer: deque[Any] = deque()
        self._ready = asyncio.Event()
        self._listeners: dict[str, list[Callable[..., Any]]] = defaultdict(list)
        self._settled = False
        self._flowing: asyncio.Task[None] | None = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def phase(self) -> StreamPhase:
        return self._state.phase

    @property
    def ended(self) -> bool:
        return self._state.ended

    def on(self, event: str, handler: Callable[..., Any]) -> ResultStream:
        """Register an event handler.

        Registering the first "data" handler on an unread stream while an
        event loop is running starts reading in the background (flowing
        mode); other readers then wait on that task via `consume()`.

        Args:
            event: "data", "error" or "end"
            handler: Called synchronously when the event fires

        Returns:
            The stream, for chaining
        """
        if event not in STREAM_EVENTS:
            raise PagingUsageError(
                f"Unknown stream event {event!r}; expected one of {sorted(STREAM_EVENTS)}"
            )
        self._listeners[event].append(handler)
        if event == "data":
            self._start_flowing()
        return self

    def end(self) -> None:
        """Stop the stream early.

        Undelivered items are dropped, no further fetches are issued and a
        page that is still in flight is ignored when it resolves. Calling
        this on an ended stream has no further effect.
        """
        self._buffer.clear()
        self._request_end("consumer")
        self._settle()

    def __aiter__(self) -> ResultStream:
        return self

    async def __anext__(self) -> Any:
        if self._flowing is not None and asyncio.current_task() is not self._flowing:
            raise PagingUsageError(
                "Stream is flowing to its data handlers; await consume() instead"
            )
        while True:
            if self._buffer:
                item = self._buffer.popleft()
                self._state.items_emitted += 1
                self._emit("data", item)
                return item

            if self._settled:
                raise StopAsyncIteration

            if self._state.ended:
                self._settle()
                if self._state.error is not None:
                    raise self._state.error
                raise StopAsyncIteration

            phase = self._state.phase
            if phase is StreamPhase.IDLE:
                self._request_page(self._query)
            elif phase is StreamPhase.EMITTING:
                # Current page drained; continue with the held query
                self._request_page(self._state.next_query)
            else:
                self._ready.clear()
                await self._ready.wait()

    async def consume(self) -> None:
        """Read the stream to completion, firing events along the way.

        In flowing mode this waits for the background reader instead.

        Raises:
            Exception: The fetch error, unless an "error" handler received it
        """
        if self._flowing is not None and asyncio.current_task() is not self._flowing:
            await self._flowing
            return
        try:
            async for _ in self:
                pass
        except Exception as exc:
            if exc is not self._state.error or not self._listeners["error"]:
                raise

    async def collect(self) -> list[Any]:
        """Read the stream to completion and return every item in order."""
        return [item async for item in self]

    async def __aenter__(self) -> ResultStream:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.end()

    def __repr__(self) -> str:
        return (
            f"ResultStream(name={self._name!r}, phase={self._state.phase.value}, "
            f"pages_fetched={self._state.pages_fetched}, "
            f"items_emitted={self._state.items_emitted})"
        )

    def _start_flowing(self) -> None:
        """Drain the stream in a background task once, if a loop is running."""
        if self._flowing is not None or self._settled:
            return
        if self._state.phase is not StreamPhase.IDLE:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop yet: the caller drives reading with consume()
            return
        task = loop.create_task(self.consume())
        self._flowing = task
        _flowing_tasks.add(task)
        task.add_done_callback(self._on_flow_done)

    def _on_flow_done(self, task: asyncio.Task[None]) -> None:
        _flowing_tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(
                f"Stream {self._name} failed with no error handler: {error}",
                exc_info=error,
                extra={"operation": self._name},
            )

    def _request_page(self, query: Query) -> None:
        """Issue the single in-flight fetch for ``query``."""
        page_index = self._state.pages_fetched
        self._state.pages_fetched += 1
        self._state.phase = StreamPhase.FETCHING
        self._state.next_query = None

        log_page_requested(
            operation=self._name,
            page_index=page_index,
            remaining=self._state.remaining,
        )

        handler = self._page_handler(page_index)
        try:
            self._fetch(query, handler)
        except Exception as exc:
            # A fetch that raises instead of calling back is a fetch error
            handler(exc)

    def _page_handler(self, page_index: int) -> PageCallback:
        called = False

        def on_page(
            error: BaseException | None,
            items: Any = None,
            next_query: Query | None = None,
            raw_response: Any = None,
        ) -> None:
            nonlocal called
            if called:
                logger.warning(
                    "Page callback invoked more than once; ignoring",
                    extra={"operation": self._name, "page_index": page_index},
                )
                return
            called = True
            self._on_page(page_index, error, items, next_query)

        return on_page

    def _on_page(
        self,
        page_index: int,
        error: BaseException | None,
        items: Any,
        next_query: Query | None,
    ) -> None:
        if self._state.ended:
            # Consumer stopped while this page was in flight
            return

        if error is not None:
            fetch_error = PageFetchError.wrap(error)
            log_page_error(operation=self._name, page_index=page_index, error=fetch_error)
            self._state.error = fetch_error
            self._request_end("error")
            return

        self._state.phase = StreamPhase.EMITTING
        accepted = 0
        for item in items or ():
            if self._state.ended or self._state.cap_reached:
                break
            self._buffer.append(item)
            self._state.take_one()
            accepted += 1

        log_page_received(
            operation=self._name,
            page_index=page_index,
            items_buffered=accepted,
            has_next=bool(next_query),
        )

        if self._state.ended:
            return

        if self._state.cap_reached:
            self._request_end("cap_reached")
        elif next_query:
            self._state.next_query = next_query
            self._ready.set()
        else:
            self._request_end("exhausted")

    def _request_end(self, reason: str) -> None:
        """Single transition to ENDED; later calls are no-ops."""
        if self._state.ended:
            return
        self._state.ended = True
        self._state.phase = StreamPhase.ENDED
        self._state.next_query = None
        log_stream_ended(operation=self._name, state=self._state, reason=reason)
        self._ready.set()

    def _settle(self) -> None:
        """Fire the one terminal event, "error" or "end"."""
        if self._settled:
            return
        self._settled = True
        if self._state.error is not None:
            self._emit("error", self._state.error)
        else:
            self._emit("end")

    def _emit(self, event: str, *args: Any) -> None:
        for handler in list(self._listeners[event]):
            handler(*args)
