"""Text-to-value coercion for declared field types.

Built-in rules cover bool, the integer and float families, str, bytes,
durations and sequences of those. Types with no built-in rule can either
implement :class:`~envbind.domain.source.Setter` or be given a rule through
:func:`register_coercer` (plugins do this via the ``register_coercers`` hook).

INVARIANT: A custom setter always wins over any other rule for its type.
"""

from __future__ import annotations

import struct
import types
from collections.abc import Callable
from datetime import timedelta
from typing import Any, Union, get_args, get_origin

from envbind.domain.durations import parse_duration
from envbind.domain.errors import CustomSetterError, FieldConversionError, UnsupportedTypeError
from envbind.domain.source import Setter
from envbind.domain.types import FLOAT32_MAX, INT_RANGES, Float32, type_name

Coercer = Callable[[str], Any]

TRUE_STRINGS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
FALSE_STRINGS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

# Exceptions a coercer may raise to signal unparseable input.
CONVERSION_ERRORS = (ValueError, TypeError, ArithmeticError)


def parse_bool(raw: str) -> bool:
    """Parse a boolean using the ``1/t/true`` and ``0/f/false`` spellings."""
    if raw in TRUE_STRINGS:
        return True
    if raw in FALSE_STRINGS:
        return False
    msg = f"invalid boolean {raw!r}"
    raise ValueError(msg)


def _parse_int(raw: str) -> int:
    return int(raw, 0)


def _bounded_int(tp: object, low: int, high: int) -> Coercer:
    name = type_name(tp)

    def coerce(raw: str) -> int:
        value = int(raw, 0)
        if not low <= value <= high:
            msg = f"value {value} out of range for {name} [{low}, {high}]"
            raise ValueError(msg)
        return value

    return coerce


def _parse_float32(raw: str) -> float:
    value = float(raw)
    if abs(value) > FLOAT32_MAX and value not in (float("inf"), float("-inf")):
        msg = f"value {raw!r} out of range for Float32"
        raise ValueError(msg)
    return struct.unpack("f", struct.pack("f", value))[0]


def _identity(raw: str) -> str:
    return raw


def _parse_bytes(raw: str) -> bytes:
    return raw.encode("utf-8")


def _parse_bytearray(raw: str) -> bytearray:
    return bytearray(raw, "utf-8")


def _builtin_coercers() -> dict[object, Coercer]:
    coercers: dict[object, Coercer] = {
        bool: parse_bool,
        int: _parse_int,
        float: float,
        Float32: _parse_float32,
        str: _identity,
        bytes: _parse_bytes,
        bytearray: _parse_bytearray,
        timedelta: parse_duration,
    }
    for tp, (low, high) in INT_RANGES.items():
        coercers[tp] = _bounded_int(tp, low, high)
    return coercers


BUILTIN_COERCERS: dict[object, Coercer] = _builtin_coercers()

COERCER_REGISTRY: dict[object, Coercer] = {}


def register_coercer(tp: object, fn: Coercer) -> None:
    """Register a coercion rule for a type with no built-in rule.

    Built-in types are reserved. Re-registering the same function is a
    no-op; registering a different one for a known type is rejected.
    """
    if not callable(fn):
        msg = f"Coercer for {type_name(tp)} must be callable"
        raise TypeError(msg)

    if tp in BUILTIN_COERCERS:
        msg = f"Coercer for {type_name(tp)} conflicts with a built-in rule"
        raise ValueError(msg)

    existing = COERCER_REGISTRY.get(tp)
    if existing is not None and existing is not fn:
        msg = f"Coercer for {type_name(tp)} is already registered"
        raise ValueError(msg)

    COERCER_REGISTRY[tp] = fn


def get_coercer(tp: object) -> Coercer | None:
    """Return the built-in or registered rule for *tp*, if any."""
    return BUILTIN_COERCERS.get(tp) or COERCER_REGISTRY.get(tp)


def unwrap_optional(tp: Any) -> Any:
    """``T | None`` and ``Optional[T]`` become ``T``; other types pass through."""
    origin = get_origin(tp)
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in get_args(tp) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp


def is_setter(tp: Any) -> bool:
    """Whether *tp* implements the custom-setter capability."""
    return isinstance(tp, type) and issubclass(tp, Setter)


def split(raw: str, delimiter: str) -> list[str]:
    """Split *raw* on *delimiter*, trimming whitespace around each part.

    An empty string yields no parts.
    """
    if raw == "":
        return []
    parts = list(raw) if delimiter == "" else raw.split(delimiter)
    return [part.strip() for part in parts]


def convert(field_name: str, declared_type: Any, raw: str, *, delimiter: str = ",") -> Any:
    """Coerce *raw* into *declared_type*.

    Raises:
        UnsupportedTypeError: No rule exists for the type (or sequence element).
        FieldConversionError: The text does not parse.
        CustomSetterError: A custom setter raised.
    """
    tp = unwrap_optional(declared_type)
    if is_setter(tp):
        return _apply_setter(field_name, tp, raw)

    sequence = _sequence_parts(tp)
    if sequence is not None:
        container, element = sequence
        coerce = _scalar_coercer(field_name, element, tp)
        return container(coerce(part) for part in split(raw, delimiter))

    return _scalar_coercer(field_name, tp, tp)(raw)


def _sequence_parts(tp: Any) -> tuple[type, Any] | None:
    """Return ``(container, element_type)`` for list/tuple annotations."""
    if tp is list or tp is tuple:
        return tp, str
    origin = get_origin(tp)
    args = get_args(tp)
    if origin is list:
        return list, args[0] if args else str
    if origin is tuple and len(args) == 2 and args[1] is Ellipsis:
        return tuple, args[0]
    return None


def _scalar_coercer(field_name: str, tp: Any, reported: Any) -> Coercer:
    """Resolve the rule for a scalar (or sequence element) type up front.

    *reported* is the type named in UnsupportedTypeError.
    """
    tp = unwrap_optional(tp)
    if is_setter(tp):
        return lambda raw: _apply_setter(field_name, tp, raw)

    fn = get_coercer(tp)
    if fn is None:
        raise UnsupportedTypeError(type_name(reported), field_name)

    def coerce(raw: str) -> Any:
        try:
            return fn(raw)
        except CONVERSION_ERRORS as exc:
            raise FieldConversionError(field_name, exc) from exc

    return coerce


def _apply_setter(field_name: str, tp: type, raw: str) -> Any:
    try:
        instance = tp()
        instance.set_from_string(raw)
    except Exception as exc:
        raise CustomSetterError(field_name, exc) from exc
    return instance
