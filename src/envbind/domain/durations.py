"""Duration strings: ``1h2m3s``, ``500ms``, ``-1.5h``.

Grammar: an optional sign followed by one or more ``<decimal><unit>`` groups,
or the bare literal ``0``. Units are ``ns``, ``us`` (also ``µs``/``μs``),
``ms``, ``s``, ``m`` and ``h``; decimals may carry a fraction.

Values are ``datetime.timedelta``, so anything below a microsecond is rounded.
"""

from __future__ import annotations

import re
from datetime import timedelta
from decimal import Decimal, InvalidOperation

# Nanoseconds per unit.
UNIT_NANOS: dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # micro sign
    "μs": 1_000,  # greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_GROUP = re.compile(r"(\d*\.?\d*)([^\d.]+)")

_FORMAT_UNITS: tuple[tuple[str, int], ...] = (
    ("h", UNIT_NANOS["h"]),
    ("m", UNIT_NANOS["m"]),
)


def parse_duration(raw: str) -> timedelta:
    """Parse a duration string into a ``timedelta``.

    Raises:
        ValueError: If the string is empty, malformed, or uses an unknown unit.
    """
    text = raw
    negative = False
    if text[:1] in ("+", "-"):
        negative = text[0] == "-"
        text = text[1:]

    if text == "0":
        return timedelta(0)
    if not text:
        msg = f"invalid duration {raw!r}"
        raise ValueError(msg)

    total = Decimal(0)
    pos = 0
    while pos < len(text):
        match = _GROUP.match(text, pos)
        if match is None:
            msg = f"invalid duration {raw!r}"
            raise ValueError(msg)
        number, unit = match.groups()
        if number in ("", "."):
            msg = f"invalid duration {raw!r}"
            raise ValueError(msg)
        if unit not in UNIT_NANOS:
            msg = f"unknown unit {unit!r} in duration {raw!r}"
            raise ValueError(msg)
        try:
            total += Decimal(number) * UNIT_NANOS[unit]
        except InvalidOperation as exc:
            msg = f"invalid duration {raw!r}"
            raise ValueError(msg) from exc
        pos = match.end()

    micros = int((total / 1000).to_integral_value())
    if negative:
        micros = -micros
    try:
        return timedelta(microseconds=micros)
    except OverflowError as exc:
        msg = f"invalid duration {raw!r}"
        raise ValueError(msg) from exc


def format_duration(value: timedelta) -> str:
    """Render a ``timedelta`` in the canonical duration form.

    Whole-second-or-longer values use ``h``/``m``/``s`` groups with a
    fractional seconds part (``1h2m3.5s``); shorter values use the largest
    sub-second unit that keeps an integer or short fraction (``500ms``).
    """
    nanos = (value.days * 86_400 + value.seconds) * 1_000_000_000 + value.microseconds * 1_000
    if nanos == 0:
        return "0s"

    sign = "-" if nanos < 0 else ""
    nanos = abs(nanos)

    if nanos < UNIT_NANOS["s"]:
        for unit in ("ms", "us"):
            if nanos >= UNIT_NANOS[unit]:
                return f"{sign}{_trim(Decimal(nanos) / UNIT_NANOS[unit])}{unit}"
        return f"{sign}{nanos}ns"

    parts: list[str] = []
    for unit, size in _FORMAT_UNITS:
        count, nanos = divmod(nanos, size)
        if count or parts:
            parts.append(f"{count}{unit}")
    parts.append(f"{_trim(Decimal(nanos) / UNIT_NANOS['s'])}s")
    return sign + "".join(parts)


def _trim(number: Decimal) -> str:
    text = format(number, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
