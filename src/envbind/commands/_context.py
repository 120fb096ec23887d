"""AppContext: shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``. Owns logging setup, lazy plugin loading, and result
emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from envbind.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from envbind.config.settings import EnvbindSettings
    from envbind.plugins.manager import PluginManager
    from envbind.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Plugins are loaded on first use so ``--help`` and ``--version`` never
    import third-party entry points.
    """

    def __init__(self, settings: EnvbindSettings) -> None:
        self.settings = settings
        self._plugins: PluginManager | None = None

        from envbind.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def load_plugins(self) -> PluginManager:
        """Load entry-point plugins once and return the manager."""
        if self._plugins is None:
            from envbind.plugins.manager import PluginManager

            self._plugins = PluginManager()
            self._plugins.discover_and_load()
        return self._plugins

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: stdout, warnings to stderr (outside JSON mode).
        * Failure: stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
