"""Tests for PluginManager: discovery, registration, and coercer collection."""

from __future__ import annotations

from decimal import Decimal
from fractions import Fraction

import pluggy
import pytest

from envbind.domain.coercion import convert, get_coercer
from envbind.plugins.manager import PluginManager

hookimpl = pluggy.HookimplMarker("envbind")


class _DummyPlugin:
    """Plugin that implements no hooks."""


class _DecimalPlugin:
    @hookimpl
    def register_coercers(self) -> dict[type, object]:
        return {Decimal: Decimal}


class _BuiltinOverridePlugin:
    @hookimpl
    def register_coercers(self) -> dict[type, object]:
        return {int: float, Fraction: Fraction}


class _BrokenPlugin:
    @hookimpl
    def register_coercers(self) -> dict[type, object]:
        raise RuntimeError("boom")


class _ListPlugin:
    @hookimpl
    def register_coercers(self) -> list[object]:
        return [Decimal]


class _ClassPlugin:
    """Registered as a class, the way an entry point may name it."""

    @hookimpl
    def register_coercers(self) -> dict[type, object]:
        return {Fraction: Fraction}


class TestPluginManager:
    """Tests for the PluginManager class."""

    def test_hook_relay_accessible(self) -> None:
        assert hasattr(PluginManager().hook, "register_coercers")

    def test_register_plugin(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_DummyPlugin(), name="dummy")
        assert "dummy" in pm.list_plugin_names()

    def test_register_plugin_default_name(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_DummyPlugin())
        assert "_DummyPlugin" in pm.list_plugin_names()

    def test_unregister_plugin(self) -> None:
        pm = PluginManager()
        plugin = _DummyPlugin()
        pm.register_plugin(plugin, name="dummy")
        pm.unregister(plugin)
        assert "dummy" not in pm.list_plugin_names()

    def test_is_loaded_false_before_discover(self) -> None:
        assert PluginManager().is_loaded is False

    def test_discover_marks_loaded(self, clean_registry: dict) -> None:
        pm = PluginManager()
        pm.discover_and_load()
        assert pm.is_loaded is True


class TestCoercerRegistration:
    def test_discover_registers_plugin_coercers(self, clean_registry: dict) -> None:
        pm = PluginManager()
        pm.register_plugin(_DecimalPlugin(), name="decimal")
        assert Decimal not in clean_registry

        pm.discover_and_load()
        assert get_coercer(Decimal) is Decimal
        assert convert("rate", Decimal, "0.25") == Decimal("0.25")

    def test_register_after_load_registers_immediately(self, clean_registry: dict) -> None:
        pm = PluginManager()
        pm.discover_and_load()
        pm.register_plugin(_DecimalPlugin(), name="runtime-decimal")
        assert get_coercer(Decimal) is Decimal

    def test_builtin_override_warns_and_skips(
        self, clean_registry: dict, caplog: pytest.LogCaptureFixture
    ) -> None:
        pm = PluginManager()
        pm.register_plugin(_BuiltinOverridePlugin(), name="override")
        with caplog.at_level("WARNING", logger="envbind"):
            pm.discover_and_load()
        assert get_coercer(int) is not float
        assert get_coercer(Fraction) is Fraction
        assert "Skipping coercer registration" in caplog.text

    def test_failing_hook_is_logged(
        self, clean_registry: dict, caplog: pytest.LogCaptureFixture
    ) -> None:
        pm = PluginManager()
        pm.register_plugin(_BrokenPlugin(), name="broken")
        with caplog.at_level("WARNING", logger="envbind"):
            names = pm.discover_and_load()
        assert "broken" in names
        assert "Failed to collect coercers from plugin broken" in caplog.text

    def test_non_dict_result_is_logged(
        self, clean_registry: dict, caplog: pytest.LogCaptureFixture
    ) -> None:
        pm = PluginManager()
        pm.register_plugin(_ListPlugin(), name="listy")
        with caplog.at_level("WARNING", logger="envbind"):
            pm.discover_and_load()
        assert Decimal not in clean_registry
        assert "non-dict coercer registrations" in caplog.text

    def test_class_plugins_are_instantiated(self, clean_registry: dict) -> None:
        pm = PluginManager()
        pm.register_plugin(_ClassPlugin, name="by-class")
        pm.discover_and_load()
        assert "by-class" in pm.list_plugin_names()
        assert get_coercer(Fraction) is Fraction
