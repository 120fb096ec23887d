"""Pluggy hook specifications for envbind.

One setup-time hook lets plugins contribute coercion rules for types that
have no built-in rule and do not implement ``set_from_string``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pluggy

hookspec = pluggy.HookspecMarker("envbind")
hookimpl = pluggy.HookimplMarker("envbind")


class EnvbindHookSpec:
    """Hook specifications for the envbind plugin system."""

    @hookspec
    def register_coercers(self) -> dict[Any, Callable[[str], Any]] | None:
        """Return type -> coercer mappings to extend the coercer registry."""
