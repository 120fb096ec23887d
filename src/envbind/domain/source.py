"""Collaborator protocols for binding."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Source(Protocol):
    """Flat string key/value lookup. Returns None when the key is absent."""

    def lookup(self, key: str) -> str | None: ...


@runtime_checkable
class Setter(Protocol):
    """Opt-out of built-in coercion.

    A field whose type implements ``set_from_string`` is instantiated with no
    arguments and handed the raw string. Failures are signalled by raising.
    """

    def set_from_string(self, raw: str) -> None: ...
