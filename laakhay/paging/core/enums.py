"""Core enumerations."""

from __future__ import annotations

from enum import Enum


class StreamPhase(str, Enum):
    """Lifecycle phase of a result stream.

    IDLE -> FETCHING -> EMITTING -> (FETCHING -> EMITTING)* -> ENDED

    ENDED is terminal and reachable from every other phase.
    """

    IDLE = "idle"
    FETCHING = "fetching"
    EMITTING = "emitting"
    ENDED = "ended"

    @property
    def is_terminal(self) -> bool:
        return self is StreamPhase.ENDED
