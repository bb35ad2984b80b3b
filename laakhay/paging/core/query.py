"""Query helpers.

A query is either a mapping of filter/pagination parameters or, for
operations that accept it, a plain string shorthand. Continuation queries are
always derived into a new dict; the query a caller passed in is never
mutated.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeAlias

from ..config import AUTO_PAGINATE_FLAGS, DEFAULT_PAGE_TOKEN_FIELD

Query: TypeAlias = Mapping[str, Any] | str


def is_query_mapping(query: Any) -> bool:
    """Whether ``query`` is an associative query (as opposed to shorthand text)."""
    return isinstance(query, Mapping)


def derive_query(
    query: Mapping[str, Any] | None,
    overrides: Mapping[str, Any] | None = None,
    /,
    **fields: Any,
) -> dict[str, Any]:
    """Return a new query with ``overrides`` merged over ``query``.

    Args:
        query: Base query (left untouched)
        overrides: Fields to add or overwrite
        **fields: More fields to add or overwrite

    Returns:
        New dict; nested values are shared, the top level is not.

    Examples:
        >>> base = {"filter": "done=true"}
        >>> derive_query(base, pageToken="abc")
        {'filter': 'done=true', 'pageToken': 'abc'}
        >>> base
        {'filter': 'done=true'}
    """
    derived: dict[str, Any] = dict(query or {})
    if overrides:
        derived.update(overrides)
    derived.update(fields)
    return derived


def next_page_query(
    query: Mapping[str, Any] | None,
    token: str | None,
    *,
    token_field: str = DEFAULT_PAGE_TOKEN_FIELD,
) -> dict[str, Any] | None:
    """Build the continuation query for ``token``, or None when exhausted."""
    if not token:
        return None
    return derive_query(query, {token_field: token})


def strip_control_fields(query: Mapping[str, Any]) -> dict[str, Any]:
    """Drop the auto-pagination flags, which only mean something to the router."""
    return {key: value for key, value in query.items() if key not in AUTO_PAGINATE_FLAGS}
