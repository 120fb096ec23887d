"""Binder: populate a record's tagged fields from a key/value source.

Fields are visited in declaration order. Each tagged field is looked up as
``prefix + key``; a missing key falls back to the ``default`` tag, then to
the ``required`` policy. The first failing field aborts the call and fields
bound before it keep their new values.

Usage::

    @dataclass
    class Config:
        port: Int16 = env_field("PORT", required="true", value=0)
        timeout: timedelta = env_field("TIMEOUT", default="1s500ms", value=timedelta())

    config = bind(Config(), MappingSource(PORT="8080"))
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypeVar

from envbind.domain.coercion import convert, parse_bool
from envbind.domain.errors import (
    InvalidRequiredTagError,
    MissingRequiredValueError,
    NotAddressableError,
    UnwritableFieldError,
)
from envbind.domain.tags import has_fields, record_shape
from envbind.infrastructure.sources import EnvironSource

if TYPE_CHECKING:
    from envbind.domain.source import Source
    from envbind.domain.tags import FieldSpec

logger = logging.getLogger(__name__)

R = TypeVar("R")


class Binder:
    """Binds records against one source under one key prefix."""

    def __init__(self, source: Source | None = None, *, prefix: str = "") -> None:
        self._source = source if source is not None else EnvironSource()
        self._prefix = prefix

    @property
    def prefix(self) -> str:
        return self._prefix

    def bind(self, record: R) -> R:
        """Populate *record* in place and return it.

        Raises:
            NotAddressableError: *record* is None, a class, a tuple, or declares
                no fields.
            BindError: The first field that could not be bound.
        """
        if (
            record is None
            or isinstance(record, (type, tuple))
            or not has_fields(type(record))
        ):
            raise NotAddressableError(_kind(record))

        for spec in record_shape(type(record)):
            self._bind_field(record, spec)
        return record

    def _bind_field(self, record: object, spec: FieldSpec) -> None:
        if spec.lookup_key is None:
            return
        if not spec.writable:
            raise UnwritableFieldError(spec.name)

        key = self._prefix + spec.lookup_key
        raw = self._source.lookup(key)
        if raw is None:
            if spec.default is None:
                self._check_missing(spec, key)
                logger.debug("Left %s unset; %s not found", spec.name, key)
                return
            raw = spec.default
            logger.debug("Binding %s from default; %s not found", spec.name, key)
        else:
            logger.debug("Binding %s from %s", spec.name, key)

        value = convert(spec.name, spec.declared_type, raw, delimiter=spec.delimiter)
        try:
            setattr(record, spec.name, value)
        except AttributeError as exc:
            # Slotted classes and descriptors can refuse assignment at runtime.
            raise UnwritableFieldError(spec.name) from exc

    @staticmethod
    def _check_missing(spec: FieldSpec, key: str) -> None:
        """Raise if a missing key is required (or the tag is malformed)."""
        if spec.required is None:
            return
        try:
            required = parse_bool(spec.required)
        except ValueError as exc:
            raise InvalidRequiredTagError(spec.required) from exc
        if required:
            raise MissingRequiredValueError(key)


def bind(record: R, source: Source | None = None, prefix: str = "") -> R:
    """Populate *record* from *source* (process environment by default)."""
    return Binder(source, prefix=prefix).bind(record)


def _kind(record: object) -> str:
    if record is None:
        return "None"
    if isinstance(record, type):
        return f"class {record.__name__}"
    return type(record).__name__
