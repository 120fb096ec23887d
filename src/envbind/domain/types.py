"""Fixed-width numeric marker types.

Python numbers are unbounded, so fields that must fit a machine width are
annotated with one of these ``NewType`` markers. At runtime the values are
plain ``int`` / ``float``; the binder range-checks them on the way in.

``int`` itself is treated as unbounded and ``float`` as 64-bit.
"""

from __future__ import annotations

from typing import NewType

Int8 = NewType("Int8", int)
Int16 = NewType("Int16", int)
Int32 = NewType("Int32", int)
Int64 = NewType("Int64", int)

Uint = NewType("Uint", int)
Uint8 = NewType("Uint8", int)
Uint16 = NewType("Uint16", int)
Uint32 = NewType("Uint32", int)
Uint64 = NewType("Uint64", int)

Float32 = NewType("Float32", float)

INT_RANGES: dict[object, tuple[int, int]] = {
    Int8: (-(2**7), 2**7 - 1),
    Int16: (-(2**15), 2**15 - 1),
    Int32: (-(2**31), 2**31 - 1),
    Int64: (-(2**63), 2**63 - 1),
    Uint: (0, 2**64 - 1),
    Uint8: (0, 2**8 - 1),
    Uint16: (0, 2**16 - 1),
    Uint32: (0, 2**32 - 1),
    Uint64: (0, 2**64 - 1),
}

FLOAT32_MAX = 3.4028234663852886e38


def type_name(tp: object) -> str:
    """Human-readable name for an annotation (``Int16``, ``list[int]``, ...)."""
    if getattr(tp, "__args__", None):
        return str(tp).replace("typing.", "")
    name = getattr(tp, "__name__", None)
    return str(name) if name else str(tp)
