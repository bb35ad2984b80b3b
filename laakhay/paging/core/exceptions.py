"""Custom exception hierarchy."""

from __future__ import annotations

from typing import Any


class PagingError(Exception):
    """Base exception for all library errors."""

    pass


class PagingUsageError(PagingError, TypeError):
    """Invalid combination of arguments passed to a paginated operation.

    Raised synchronously to the caller, never through a stream.
    """

    pass


class PageFetchError(PagingError):
    """A page fetch reported failure.

    Fetch errors are terminal for the stream or aggregation that issued the
    fetch. They are never retried here.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response = response

    @classmethod
    def wrap(cls, error: Any) -> BaseException:
        """Return ``error`` unchanged if it is an exception, else wrap it."""
        if isinstance(error, BaseException):
            return error
        return cls(str(error), response=error)
