"""Invocation and stream state definitions.

This module defines the data structures passed between the call normalizer,
the mode router and the stream driver.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..config import UNBOUNDED
from ..core.enums import StreamPhase
from ..core.protocols import PageCallback
from ..core.query import Query


@dataclass(frozen=True)
class InvocationDescriptor:
    """Canonical form of one call to a paginated operation.

    Attributes:
        query: Query mapping, or string shorthand passed through unexamined
        callback: Completion callback (None means "produce a stream")
        auto_paginate: Whether a callback receives all pages aggregated
        max_results: Result cap across all pages (-1 = unbounded)
    """

    query: Query = field(default_factory=dict)
    callback: PageCallback | None = None
    auto_paginate: bool = True
    max_results: int = UNBOUNDED

    @property
    def wants_stream(self) -> bool:
        return self.callback is None

    @property
    def is_bounded(self) -> bool:
        return self.max_results != UNBOUNDED


@dataclass
class StreamState:
    """Mutable state owned by a single result stream.

    Attributes:
        remaining: Items left before the cap is hit (-1 = unbounded)
        ended: Set once by the single end transition; never reverts
        phase: Current lifecycle phase
        pages_fetched: Fetch calls issued so far
        items_emitted: Items handed to the consumer so far
        error: Fetch error that ended the stream, if any
        next_query: Continuation query held until the current page is drained
    """

    remaining: int = UNBOUNDED
    ended: bool = False
    phase: StreamPhase = StreamPhase.IDLE
    pages_fetched: int = 0
    items_emitted: int = 0
    error: BaseException | None = None
    next_query: Any = None

    @property
    def is_bounded(self) -> bool:
        return self.remaining != UNBOUNDED

    @property
    def cap_reached(self) -> bool:
        return self.remaining == 0

    def take_one(self) -> None:
        """Account for one buffered item against the cap."""
        if self.is_bounded:
            self.remaining -= 1
