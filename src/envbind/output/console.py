"""Rich Console factory and theme for envbind output.

Consoles render into a StringIO buffer so renderers keep a plain
``-> str`` contract. Rich drops color codes on its own when the buffer is
not a terminal (tests, pipes).
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

ENVBIND_THEME = Theme(
    {
        "envbind.ok": "bold green",
        "envbind.error": "bold red",
        "envbind.op": "bold cyan",
        "envbind.key": "dim",
        "envbind.field": "bold",
        "envbind.env": "bold blue",
        "envbind.type": "magenta",
        "envbind.unset": "dim italic",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=ENVBIND_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
