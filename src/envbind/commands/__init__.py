"""Subcommand modules for envbind.

Provides register_commands() which uses deferred imports to keep
``envbind --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from envbind.commands.bind import bind
    from envbind.commands.shape import shape

    cli.add_command(shape)
    cli.add_command(bind)
