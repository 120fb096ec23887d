"""Output mode selection for ServiceResult.

Machines get ``--json`` (the model dump), scripts get ``--quiet`` status
lines, humans get the Rich renderers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from envbind.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from envbind.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Output flags lifted from EnvbindSettings."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display in the requested mode."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
