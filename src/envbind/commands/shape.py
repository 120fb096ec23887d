"""Command: show a record type's bindable fields."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from envbind.commands._base import EnvbindCommand

if TYPE_CHECKING:
    from envbind.commands._context import AppContext


@click.command(
    cls=EnvbindCommand,
    examples="""\
  envbind shape myapp.config:Config
  envbind --json shape myapp.config:Config""",
)
@click.argument("record")
@click.pass_obj
def shape(app: AppContext, record: str) -> None:
    """List the fields of RECORD (module:Name) and their tags."""
    from envbind.services.shape import ShapeService

    app.emit(ShapeService().describe(record))
