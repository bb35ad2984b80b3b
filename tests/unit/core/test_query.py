"""Unit tests for query helpers."""

from __future__ import annotations

from types import MappingProxyType

from laakhay.paging.core.query import (
    derive_query,
    is_query_mapping,
    next_page_query,
    strip_control_fields,
)


def test_derive_query_does_not_mutate_input():
    base = {"filter": "done=true", "pageToken": "a"}
    derived = derive_query(base, {"pageToken": "b"})

    assert derived == {"filter": "done=true", "pageToken": "b"}
    assert base == {"filter": "done=true", "pageToken": "a"}
    assert derived is not base


def test_derive_query_keyword_overrides_win():
    derived = derive_query({"a": 1}, {"b": 2}, b=3, c=4)
    assert derived == {"a": 1, "b": 3, "c": 4}


def test_derive_query_from_none_and_read_only_mapping():
    assert derive_query(None, pageToken="t") == {"pageToken": "t"}
    assert derive_query(MappingProxyType({"a": 1})) == {"a": 1}


def test_repeated_derivations_do_not_alias():
    base = {"a": 1}
    first = derive_query(base, pageToken="1")
    second = derive_query(base, pageToken="2")

    first["extra"] = True
    assert "extra" not in second
    assert "extra" not in base


def test_next_page_query():
    assert next_page_query({"a": 1}, "tok") == {"a": 1, "pageToken": "tok"}
    assert next_page_query({"a": 1}, "tok", token_field="cursor") == {"a": 1, "cursor": "tok"}
    assert next_page_query({"a": 1}, None) is None
    assert next_page_query({"a": 1}, "") is None


def test_strip_control_fields():
    query = {"autoPaginate": False, "autoPaginateVal": True, "maxResults": 5}
    assert strip_control_fields(query) == {"maxResults": 5}


def test_is_query_mapping():
    assert is_query_mapping({})
    assert not is_query_mapping("SELECT 1")
    assert not is_query_mapping(None)
