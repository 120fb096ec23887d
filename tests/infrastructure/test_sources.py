"""Tests for the concrete key/value sources."""

from __future__ import annotations

import pytest

from envbind.domain.source import Source
from envbind.infrastructure.sources import ChainSource, EnvironSource, MappingSource


class TestEnvironSource:
    def test_reads_process_environment_at_lookup(self, monkeypatch: pytest.MonkeyPatch) -> None:
        source = EnvironSource()
        monkeypatch.setenv("ENVBIND_TEST_LATE", "set-later")
        assert source.lookup("ENVBIND_TEST_LATE") == "set-later"

    def test_missing_key_is_none(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ENVBIND_TEST_ABSENT", raising=False)
        assert EnvironSource().lookup("ENVBIND_TEST_ABSENT") is None

    def test_empty_value_is_present(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVBIND_TEST_EMPTY", "")
        assert EnvironSource().lookup("ENVBIND_TEST_EMPTY") == ""

    def test_explicit_mapping(self) -> None:
        assert EnvironSource({"A": "1"}).lookup("A") == "1"

    def test_snapshot_ignores_later_changes(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVBIND_TEST_SNAP", "before")
        source = EnvironSource.snapshot()
        monkeypatch.setenv("ENVBIND_TEST_SNAP", "after")
        assert source.lookup("ENVBIND_TEST_SNAP") == "before"


class TestMappingSource:
    def test_values_and_kwargs_merge(self) -> None:
        source = MappingSource({"A": "1", "B": "2"}, B="3")
        assert source.lookup("A") == "1"
        assert source.lookup("B") == "3"
        assert source.lookup("C") is None

    def test_copies_input(self) -> None:
        values = {"A": "1"}
        source = MappingSource(values)
        values["A"] = "changed"
        assert source.lookup("A") == "1"

    def test_repr_lists_keys_only(self) -> None:
        assert repr(MappingSource(SECRET="hunter2")) == "MappingSource(['SECRET'])"


class TestChainSource:
    def test_first_match_wins(self) -> None:
        chain = ChainSource([MappingSource(A="first"), MappingSource(A="second", B="b")])
        assert chain.lookup("A") == "first"
        assert chain.lookup("B") == "b"
        assert chain.lookup("C") is None

    def test_empty_string_counts_as_present(self) -> None:
        chain = ChainSource([MappingSource(A=""), MappingSource(A="fallback")])
        assert chain.lookup("A") == ""

    def test_empty_chain(self) -> None:
        assert ChainSource([]).lookup("A") is None


@pytest.mark.parametrize(
    "source",
    [EnvironSource({}), MappingSource(), ChainSource([])],
    ids=["environ", "mapping", "chain"],
)
def test_sources_satisfy_protocol(source: object) -> None:
    assert isinstance(source, Source)
