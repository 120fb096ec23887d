"""Shared pytest fixtures and test helpers for envbind tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from typing import Any

import pytest
from click.testing import CliRunner

from envbind.config.logging import LOGGER_NAME
from envbind.domain.coercion import COERCER_REGISTRY
from envbind.infrastructure.sources import MappingSource
from envbind.services.binder import bind


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo configure_logging() calls made by CLI invocations."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    envbind_logger = logging.getLogger(LOGGER_NAME)
    envbind_level = envbind_logger.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    envbind_logger.setLevel(envbind_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def clean_registry() -> Generator[dict[object, Any]]:
    """Snapshot the coercer registry and restore it after the test."""
    saved = dict(COERCER_REGISTRY)
    try:
        yield COERCER_REGISTRY
    finally:
        COERCER_REGISTRY.clear()
        COERCER_REGISTRY.update(saved)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def bind_from(record: Any, prefix: str = "", **values: str) -> Any:
    """Bind *record* against an in-memory source built from *values*."""
    return bind(record, MappingSource(values), prefix=prefix)
