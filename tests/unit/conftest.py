"""Shared fixtures for unit tests."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest


class FakePageSource:
    """Page-fetch operation over pre-built pages.

    Every call is recorded. The source fails the test if a second fetch is
    issued while one is still in flight.
    """

    def __init__(
        self,
        pages: list[list[Any]],
        *,
        fail_on: int | None = None,
        error: BaseException | None = None,
        deferred: bool = False,
    ) -> None:
        """Initialize the fake source.

        Args:
            pages: Items of each page, in order
            fail_on: Zero-based page index that reports ``error``
            error: Error reported for ``fail_on``
            deferred: Answer on a later loop iteration instead of synchronously
        """
        self.pages = pages
        self.fail_on = fail_on
        self.error = error or RuntimeError("page fetch failed")
        self.deferred = deferred
        self.queries: list[Any] = []
        self.in_flight = 0
        self.max_in_flight = 0

    @property
    def calls(self) -> int:
        return len(self.queries)

    def __call__(self, query: Any, callback: Any) -> None:
        self.queries.append(query)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        assert self.in_flight == 1, "overlapping page fetches"

        if self.deferred:
            asyncio.get_running_loop().call_soon(self._respond, query, callback)
        else:
            self._respond(query, callback)

    def _respond(self, query: Any, callback: Any) -> None:
        index = query.get("pageToken", 0) if isinstance(query, dict) else 0
        self.in_flight -= 1

        if index == self.fail_on:
            callback(self.error, None, None, {"page": index})
            return

        next_query = None
        if index + 1 < len(self.pages):
            next_query = {**query, "pageToken": index + 1}
        callback(None, list(self.pages[index]), next_query, {"page": index})


def make_pages(page_count: int, page_size: int) -> list[list[str]]:
    """Build ``page_count`` pages of ``page_size`` labelled items."""
    return [[f"item-{p}-{i}" for i in range(page_size)] for p in range(page_count)]


@pytest.fixture
def page_source():
    """Factory for FakePageSource."""

    def factory(pages: list[list[Any]], **kwargs: Any) -> FakePageSource:
        return FakePageSource(pages, **kwargs)

    return factory


@pytest.fixture
def pages():
    """Factory for labelled pages: ``pages(page_count, page_size)``."""
    return make_pages
