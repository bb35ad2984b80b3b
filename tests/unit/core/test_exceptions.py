"""Precise unit tests for exception hierarchy.

Tests focus on meaningful behavior, not just field access.
"""

from laakhay.paging.core import PageFetchError, PagingError, PagingUsageError


def test_usage_error_is_type_error():
    """Misuse errors can be caught as TypeError."""
    error = PagingUsageError("bad arguments")
    assert isinstance(error, PagingError)
    assert isinstance(error, TypeError)


def test_page_fetch_error_with_status_code():
    error = PageFetchError("failed", status_code=503, response="unavailable")
    assert str(error) == "failed"
    assert error.status_code == 503
    assert error.response == "unavailable"
    assert isinstance(error, PagingError)


def test_wrap_returns_exceptions_unchanged():
    original = ValueError("boom")
    assert PageFetchError.wrap(original) is original


def test_wrap_non_exception_value():
    wrapped = PageFetchError.wrap({"reason": "quota"})
    assert isinstance(wrapped, PageFetchError)
    assert wrapped.response == {"reason": "quota"}
    assert "quota" in str(wrapped)
