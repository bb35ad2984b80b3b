"""Structured logging for pagination.

This module provides telemetry hooks for the stream driver and the
buffering adapter, emitting structured logs for observability.
"""

from __future__ import annotations

import logging

from .definitions import StreamState

logger = logging.getLogger(__name__)


def log_page_requested(*, operation: str, page_index: int, remaining: int) -> None:
    """Log a page fetch being issued.

    Args:
        operation: Name of the page-fetch operation
        page_index: Zero-based index of the page within the traversal
        remaining: Items left before the cap (-1 = unbounded)
    """
    logger.debug(
        "page_requested",
        extra={
            "operation": operation,
            "page_index": page_index,
            "remaining": remaining,
        },
    )


def log_page_received(
    *,
    operation: str,
    page_index: int,
    items_buffered: int,
    has_next: bool,
) -> None:
    """Log a page that resolved successfully.

    Args:
        operation: Name of the page-fetch operation
        page_index: Zero-based index of the page within the traversal
        items_buffered: Items from this page accepted under the cap
        has_next: Whether the page carried a continuation query
    """
    logger.debug(
        "page_received",
        extra={
            "operation": operation,
            "page_index": page_index,
            "items_buffered": items_buffered,
            "has_next": has_next,
        },
    )


def log_page_error(*, operation: str, page_index: int, error: BaseException) -> None:
    """Log a page fetch failure."""
    logger.warning(
        "page_error",
        extra={
            "operation": operation,
            "page_index": page_index,
            "error_type": type(error).__name__,
            "error_message": str(error),
        },
    )


def log_stream_ended(*, operation: str, state: StreamState, reason: str) -> None:
    """Log the single end transition of a stream.

    Args:
        operation: Name of the page-fetch operation
        state: Final stream state
        reason: One of "exhausted", "cap_reached", "consumer", "error"
    """
    logger.debug(
        "stream_ended",
        extra={
            "operation": operation,
            "reason": reason,
            "pages_fetched": state.pages_fetched,
            "items_emitted": state.items_emitted,
        },
    )


def log_aggregate_complete(*, operation: str, total_items: int) -> None:
    logger.info(
        "aggregate_complete",
        extra={"operation": operation, "total_items": total_items},
    )
