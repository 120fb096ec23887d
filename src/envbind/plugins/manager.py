"""Plugin discovery and loading.

Discovery: entry_points (pip-installed) in the ``envbind.plugins`` group via
pluggy's setuptools entrypoint loader, plus direct registration.
Capabilities: extra coercion rules through ``register_coercers``.
"""

from __future__ import annotations

import inspect
import logging

import pluggy

from envbind.plugins.hookspecs import EnvbindHookSpec

PROJECT_NAME = "envbind"
ENTRY_POINT_GROUP = "envbind.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and coercer registration."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(EnvbindHookSpec)
        self._loaded: bool = False

    def discover_and_load(self) -> list[str]:
        """Load entry-point plugins and register the coercers they expose.

        Returns a list of loaded plugin names.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        for plugin in self._pm.get_plugins():
            plugin_name = self._pm.get_name(plugin) or plugin.__class__.__name__
            self._register_plugin_coercers(plugin, plugin_name)
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly.

        Coercers are collected immediately when discovery has already run,
        otherwise on the next :meth:`discover_and_load`.
        """
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        if self._loaded:
            self._register_plugin_coercers(plugin, resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        """Unregister a plugin instance. Coercers it registered stay in place."""
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry points may name a class rather than an instance; hook calls on
        a class would leave ``self`` unbound.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)

    @staticmethod
    def _register_plugin_coercers(plugin: object, plugin_name: str) -> None:
        """Register coercers exposed by a single plugin instance."""
        from envbind.domain.coercion import register_coercer

        hook = getattr(plugin, "register_coercers", None)
        if hook is None:
            return

        try:
            coercers = hook()
        except Exception:
            logger.warning(
                "Failed to collect coercers from plugin %s",
                plugin_name,
                exc_info=True,
            )
            return

        if coercers is None:
            return
        if not isinstance(coercers, dict):
            logger.warning("Plugin %s returned non-dict coercer registrations", plugin_name)
            return

        for tp, fn in coercers.items():
            try:
                register_coercer(tp, fn)
            except (TypeError, ValueError):
                logger.warning(
                    "Skipping coercer registration %r from plugin %s",
                    tp,
                    plugin_name,
                    exc_info=True,
                )
