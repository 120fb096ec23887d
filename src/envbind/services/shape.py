"""ShapeService: inspect and bind record types referenced by name.

Backs the ``envbind shape`` and ``envbind bind`` commands. Every method
returns a ServiceResult; binding and loading failures become structured
errors rather than exceptions.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from envbind.domain.durations import format_duration
from envbind.domain.errors import BindError, NotAddressableError
from envbind.domain.tags import has_fields, record_shape
from envbind.domain.types import type_name
from envbind.infrastructure.loader import RecordLoadError, load_record_type
from envbind.infrastructure.sources import EnvironSource
from envbind.services.binder import Binder
from envbind.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from envbind.domain.source import Source

logger = logging.getLogger(__name__)


class ShapeService:
    """Operations over a record type named as ``module:Name``."""

    def __init__(self, source: Source | None = None) -> None:
        self._source = source

    def describe(self, reference: str) -> ServiceResult:
        """List the fields of the record type and their tags."""
        op = "shape"
        try:
            cls = load_record_type(reference)
        except RecordLoadError as exc:
            return _load_failed(op, exc)

        if not has_fields(cls):
            return _failed(op, NotAddressableError(cls.__name__))

        try:
            shape = record_shape(cls)
        except BindError as exc:
            return _failed(op, exc)

        fields = [
            {
                "name": spec.name,
                "type": type_name(spec.declared_type),
                "key": spec.lookup_key,
                "required": spec.required,
                "default": spec.default,
                "delimiter": spec.delimiter,
                "writable": spec.writable,
            }
            for spec in shape
        ]
        return ServiceResult(
            ok=True,
            op=op,
            data={"record": reference, "fields": fields, "count": len(fields)},
        )

    def bind(self, reference: str, *, prefix: str = "") -> ServiceResult:
        """Instantiate the record type with no arguments and bind it."""
        op = "bind"
        try:
            cls = load_record_type(reference)
        except RecordLoadError as exc:
            return _load_failed(op, exc)

        try:
            record = cls()
        except Exception as exc:
            logger.debug("Could not instantiate %s", reference, exc_info=True)
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="INSTANTIATE_FAILED",
                    message=f"Cannot instantiate {reference} without arguments: {exc}",
                    detail={"record": reference},
                ),
            )

        source = self._source if self._source is not None else EnvironSource()
        try:
            Binder(source, prefix=prefix).bind(record)
        except BindError as exc:
            return _failed(op, exc)

        bound = [spec for spec in record_shape(cls) if spec.bindable]
        values = {spec.name: render_value(getattr(record, spec.name, None)) for spec in bound}
        warnings = [
            f"{prefix}{spec.lookup_key} is not set; {spec.name} keeps its initial value"
            for spec in bound
            if spec.default is None and source.lookup(f"{prefix}{spec.lookup_key}") is None
        ]
        return ServiceResult(
            ok=True,
            op=op,
            data={"record": reference, "prefix": prefix, "values": values},
            warnings=warnings,
        )


def render_value(value: Any) -> Any:
    """Convert a bound value into something JSON can carry."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, timedelta):
        return format_duration(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, (list, tuple)):
        return [render_value(item) for item in value]
    return str(value)


def _failed(op: str, exc: BindError) -> ServiceResult:
    return ServiceResult(ok=False, op=op, error=ServiceError.from_bind_error(exc))


def _load_failed(op: str, exc: RecordLoadError) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code="LOAD_FAILED", message=str(exc)),
    )
