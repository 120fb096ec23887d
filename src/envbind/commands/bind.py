"""Command: bind a record type against the process environment."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from envbind.commands._base import EnvbindCommand

if TYPE_CHECKING:
    from envbind.commands._context import AppContext


@click.command(
    cls=EnvbindCommand,
    examples="""\
  envbind bind myapp.config:Config
  envbind bind myapp.config:Config --prefix APP_
  ENVBIND_PREFIX=APP_ envbind --json bind myapp.config:Config""",
)
@click.argument("record")
@click.option(
    "--prefix",
    default=None,
    help="Prepend to every lookup key (defaults to ENVBIND_PREFIX).",
)
@click.pass_obj
def bind(app: AppContext, record: str, prefix: str | None) -> None:
    """Instantiate RECORD (module:Name), bind it, and print the values."""
    from envbind.services.shape import ShapeService

    resolved = app.settings.prefix if prefix is None else prefix
    app.load_plugins()
    app.emit(ShapeService().bind(record, prefix=resolved))
