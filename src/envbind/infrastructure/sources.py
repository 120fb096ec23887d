"""Concrete key/value sources.

All sources satisfy :class:`envbind.domain.source.Source`. The binder only
ever calls ``lookup``, so any object with that method can stand in.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping

from envbind.domain.source import Source


class EnvironSource:
    """Process environment variables, read at lookup time."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = os.environ if environ is None else environ

    def lookup(self, key: str) -> str | None:
        return self._environ.get(key)

    @classmethod
    def snapshot(cls) -> EnvironSource:
        """A source frozen to the environment as it is right now."""
        return cls(dict(os.environ))


class MappingSource:
    """In-memory mapping, chiefly for tests and programmatic config."""

    def __init__(self, values: Mapping[str, str] | None = None, **kwargs: str) -> None:
        self._values: dict[str, str] = {**(values or {}), **kwargs}

    def lookup(self, key: str) -> str | None:
        return self._values.get(key)

    def __repr__(self) -> str:
        return f"MappingSource({sorted(self._values)})"


class ChainSource:
    """First source that knows a key wins."""

    def __init__(self, sources: Iterable[Source]) -> None:
        self._sources = tuple(sources)

    def lookup(self, key: str) -> str | None:
        for source in self._sources:
            value = source.lookup(key)
            if value is not None:
                return value
        return None
