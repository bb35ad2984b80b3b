"""Unit tests for core enums."""

from laakhay.paging.core.enums import StreamPhase


def test_stream_phase_values():
    assert [phase.value for phase in StreamPhase] == ["idle", "fetching", "emitting", "ended"]


def test_only_ended_is_terminal():
    assert StreamPhase.ENDED.is_terminal
    assert not any(phase.is_terminal for phase in StreamPhase if phase is not StreamPhase.ENDED)


def test_string_comparison():
    assert StreamPhase("fetching") is StreamPhase.FETCHING
    assert StreamPhase.IDLE == "idle"
