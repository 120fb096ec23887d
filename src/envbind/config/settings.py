"""Unified settings: CLI flags and env vars in one object.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags passed by Click
  2. Env vars: ``ENVBIND_*`` prefix
  3. Code defaults

Uses Pydantic Settings v2. Records being bound are never configured here;
these settings only steer the ``envbind`` CLI itself.
"""

from __future__ import annotations

from typing import Any

from pydantic_settings import BaseSettings


class EnvbindSettings(BaseSettings):
    """Settings for the envbind CLI.

    Frozen after construction and stored on the Click context.

    Attributes:
        prefix: Key prefix applied by ``envbind bind`` when ``--prefix``
            is not given.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "ENVBIND_",
    }

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    prefix: str = ""

    @classmethod
    def from_cli(cls, **cli_flags: Any) -> EnvbindSettings:
        """Construct settings from a CLI invocation.

        Flags left at ``None`` or ``False`` are dropped so that ``ENVBIND_*``
        variables can still supply them.
        """
        overrides = {k: v for k, v in cli_flags.items() if v is not None and v is not False}
        return cls(**overrides)
