"""Field tags and record shapes.

A record declares its bindable fields through tags, either in dataclass
field metadata::

    @dataclass
    class Config:
        port: Int16 = env_field("PORT", required="true", value=0)

or through ``Annotated`` on any annotated class::

    class Config:
        port: Annotated[Int16, Tags(env="PORT", required="true")] = 0

Tag values are raw strings, mirroring what a user would write in a config
declaration: ``required`` is parsed as a boolean only when it is needed and
``default`` is coerced exactly like a value read from the source.
"""

from __future__ import annotations

import dataclasses
import functools
import inspect
import re
from collections.abc import Iterator, Mapping
from typing import Annotated, Any, ClassVar, get_args, get_origin, get_type_hints

from pydantic import BaseModel

from envbind.domain.errors import UnsupportedTypeError

ENV_TAG = "env"
REQUIRED_TAG = "required"
DEFAULT_TAG = "default"
DELIMITER_TAG = "delimiter"

TAG_NAMES = (ENV_TAG, REQUIRED_TAG, DEFAULT_TAG, DELIMITER_TAG)
DEFAULT_DELIMITER = ","


class Tags(Mapping[str, str]):
    """Immutable, hashable tag bag for use inside ``Annotated[...]``."""

    __slots__ = ("_items",)

    def __init__(self, **tags: str) -> None:
        self._items = tuple(sorted(tags.items()))

    def __getitem__(self, key: str) -> str:
        for name, value in self._items:
            if name == key:
                return value
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        inner = ", ".join(f"{name}={value!r}" for name, value in self._items)
        return f"Tags({inner})"


def env_field(
    key: str,
    *,
    required: str | None = None,
    default: str | None = None,
    delimiter: str | None = None,
    value: Any = dataclasses.MISSING,
    factory: Any = dataclasses.MISSING,
) -> Any:
    """Build a dataclass ``field`` carrying binding tags.

    *value* / *factory* become the dataclass default / default_factory, i.e.
    the value a field keeps when nothing is bound. *default* is the raw tag
    string used when the key is absent from the source.
    """
    metadata: dict[str, str] = {ENV_TAG: key}
    if required is not None:
        metadata[REQUIRED_TAG] = required
    if default is not None:
        metadata[DEFAULT_TAG] = default
    if delimiter is not None:
        metadata[DELIMITER_TAG] = delimiter
    return dataclasses.field(default=value, default_factory=factory, metadata=metadata)


class FieldSpec(BaseModel):
    """One declared field of a record, with its resolved tags."""

    model_config = {"frozen": True}

    name: str
    declared_type: Any
    lookup_key: str | None = None
    required: str | None = None
    default: str | None = None
    delimiter: str = DEFAULT_DELIMITER
    writable: bool = True

    @property
    def bindable(self) -> bool:
        """Whether the field carries a lookup key at all."""
        return self.lookup_key is not None


def has_fields(cls: type) -> bool:
    """Whether *cls* declares any fields a shape can be derived from."""
    if dataclasses.is_dataclass(cls):
        return True
    return any(inspect.get_annotations(klass) for klass in cls.__mro__ if klass is not object)


@functools.lru_cache(maxsize=256)
def record_shape(cls: type) -> tuple[FieldSpec, ...]:
    """Derive the ordered field specs of *cls*.

    Dataclasses contribute their fields (inherited ones first); other classes
    contribute every non-``ClassVar`` annotation along the MRO.

    Raises:
        UnsupportedTypeError: An annotation names a type that cannot be
            resolved from the module globals (e.g. a class local to a function).
    """
    hints = _resolve_hints(cls)

    if dataclasses.is_dataclass(cls):
        declared = [(f.name, f.metadata) for f in dataclasses.fields(cls)]
    else:
        declared = [
            (name, {})
            for name, hint in hints.items()
            if get_origin(hint) is not ClassVar and hint is not ClassVar
        ]

    frozen = _is_frozen(cls)
    specs: list[FieldSpec] = []
    for name, metadata in declared:
        hint = hints.get(name, Any)
        declared_type, annotated_tags = _split_annotated(hint)
        tags = {**annotated_tags, **{k: v for k, v in metadata.items() if k in TAG_NAMES}}
        specs.append(
            FieldSpec(
                name=name,
                declared_type=declared_type,
                lookup_key=tags.get(ENV_TAG),
                required=tags.get(REQUIRED_TAG),
                default=tags.get(DEFAULT_TAG),
                delimiter=tags.get(DELIMITER_TAG, DEFAULT_DELIMITER),
                writable=not frozen and _is_writable(cls, name),
            )
        )
    return tuple(specs)


def _resolve_hints(cls: type) -> dict[str, Any]:
    try:
        return get_type_hints(cls, include_extras=True)
    except NameError as exc:
        field_name, annotation = _unresolved_annotation(cls, exc.name or "")
        raise UnsupportedTypeError(annotation, field_name) from exc


def _unresolved_annotation(cls: type, missing: str) -> tuple[str | None, str]:
    """Find the field whose string annotation mentions *missing*."""
    if not missing:
        return None, "unresolved annotation"
    pattern = re.compile(rf"\b{re.escape(missing)}\b")
    for klass in cls.__mro__:
        try:
            annotations = inspect.get_annotations(klass)
        except NameError:
            continue
        for name, annotation in annotations.items():
            if isinstance(annotation, str) and pattern.search(annotation):
                return name, annotation
    return None, missing


def _split_annotated(hint: Any) -> tuple[Any, dict[str, str]]:
    """Strip ``Annotated`` and collect any tag mappings it carries."""
    if get_origin(hint) is not Annotated:
        return hint, {}
    inner, *extras = get_args(hint)
    tags: dict[str, str] = {}
    for extra in extras:
        if isinstance(extra, Mapping):
            tags.update({k: v for k, v in extra.items() if k in TAG_NAMES})
    return inner, tags


def _is_frozen(cls: type) -> bool:
    if issubclass(cls, tuple):
        return True
    params = getattr(cls, "__dataclass_params__", None)
    if params is not None and params.frozen:
        return True
    if issubclass(cls, BaseModel):
        return bool(cls.model_config.get("frozen"))
    return False


def _is_writable(cls: type, name: str) -> bool:
    # Private names are the Python analogue of unexported fields.
    if name.startswith("_"):
        return False
    attr = inspect.getattr_static(cls, name, None)
    if isinstance(attr, property):
        return attr.fset is not None
    return True
