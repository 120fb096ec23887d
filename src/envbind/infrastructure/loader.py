"""Resolve ``module.path:ClassName`` references to record types."""

from __future__ import annotations

import importlib
import logging

logger = logging.getLogger(__name__)


class RecordLoadError(Exception):
    """A record reference could not be imported or is not a class."""


def load_record_type(reference: str) -> type:
    """Import and return the class named by *reference*.

    The reference has the form ``package.module:Name``; ``Name`` may be
    dotted to reach a nested class (``module:Outer.Inner``).

    Raises:
        RecordLoadError: Malformed reference, failed import, missing
            attribute, or the target is not a class.
    """
    module_name, sep, attr_path = reference.partition(":")
    if not sep or not module_name or not attr_path:
        msg = f"Invalid record reference {reference!r}; expected 'module:Name'"
        raise RecordLoadError(msg)

    try:
        target: object = importlib.import_module(module_name)
    except ImportError as exc:
        msg = f"Cannot import module {module_name!r}: {exc}"
        raise RecordLoadError(msg) from exc

    for part in attr_path.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            msg = f"{reference!r} has no attribute {part!r}"
            raise RecordLoadError(msg) from exc

    if not isinstance(target, type):
        msg = f"{reference!r} is not a class"
        raise RecordLoadError(msg)

    logger.debug("Loaded record type %s", reference)
    return target
