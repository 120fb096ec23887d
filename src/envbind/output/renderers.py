"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`; unknown
ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from envbind.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from envbind.services.result import ServiceResult


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    return f"OK: {result.op}"


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="envbind.ok"), Text(f"  {result.op}", style="envbind.op"))


def _render_shape(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    console.print(Text(f"  record: {result.data.get('record', '')}", style="envbind.key"))

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Field", style="envbind.field", no_wrap=True)
    table.add_column("Type", style="envbind.type")
    table.add_column("Env", style="envbind.env")
    table.add_column("Required")
    table.add_column("Default")
    table.add_column("Delimiter")
    table.add_column("Writable")

    for spec in result.data.get("fields", []):
        # Text cells keep bracketed type names like list[str] out of markup.
        table.add_row(
            Text(str(spec["name"])),
            Text(str(spec["type"])),
            Text(spec["key"]) if spec["key"] else Text("-", style="envbind.unset"),
            Text(spec["required"] or ""),
            Text(spec["default"] if spec["default"] is not None else ""),
            Text(repr(spec["delimiter"])),
            "yes" if spec["writable"] else "no",
        )
    console.print(table)


def _render_bind(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    prefix = result.data.get("prefix")
    if prefix:
        console.print(Text(f"  prefix: {prefix}", style="envbind.key"))
    for name, value in result.data.get("values", {}).items():
        shown = Text("<unset>", style="envbind.unset") if value is None else Text(_show(value))
        console.print(Text(f"  {name}: ", style="envbind.key"), shown, sep="")


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="envbind.error"),
        Text(f"  {result.op}", style="envbind.op"),
        Text(" — "),
        Text(msg),
    )

    if verbose and err:
        console.print(Text(f"  code: {err.code}", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"  {k}: {v}", style="dim"))


def _render_generic(result: ServiceResult, console: Console) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        console.print(Text(f"  {key}: ", style="envbind.key"), Text(_show(value)), sep="")


def _show(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


_OP_RENDERERS: dict[str, Any] = {
    "shape": _render_shape,
    "bind": _render_bind,
}
