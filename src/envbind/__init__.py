"""envbind: populate record fields from environment variables.

Fields opt in with an ``env`` tag and may add ``required``, ``default`` and
``delimiter`` tags; :func:`bind` reads each key from a source (the process
environment unless another is injected) and converts the text to the
field's declared type.
"""

from envbind.domain.coercion import register_coercer
from envbind.domain.durations import format_duration, parse_duration
from envbind.domain.errors import (
    BindError,
    CustomSetterError,
    FieldConversionError,
    InvalidRequiredTagError,
    MissingRequiredValueError,
    NotAddressableError,
    UnsupportedTypeError,
    UnwritableFieldError,
)
from envbind.domain.source import Setter, Source
from envbind.domain.tags import FieldSpec, Tags, env_field, record_shape
from envbind.domain.types import (
    Float32,
    Int8,
    Int16,
    Int32,
    Int64,
    Uint,
    Uint8,
    Uint16,
    Uint32,
    Uint64,
)
from envbind.infrastructure.sources import ChainSource, EnvironSource, MappingSource
from envbind.services.binder import Binder, bind

__version__ = "0.3.0"

__all__ = [
    "BindError",
    "Binder",
    "ChainSource",
    "CustomSetterError",
    "EnvironSource",
    "FieldConversionError",
    "FieldSpec",
    "Float32",
    "Int16",
    "Int32",
    "Int64",
    "Int8",
    "InvalidRequiredTagError",
    "MappingSource",
    "MissingRequiredValueError",
    "NotAddressableError",
    "Setter",
    "Source",
    "Tags",
    "Uint",
    "Uint16",
    "Uint32",
    "Uint64",
    "Uint8",
    "UnsupportedTypeError",
    "UnwritableFieldError",
    "bind",
    "env_field",
    "format_duration",
    "parse_duration",
    "record_shape",
    "register_coercer",
]
