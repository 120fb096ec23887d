"""Binding failures.

Every failure is terminal to the current bind call. Each exception carries a
stable ``code`` so the service layer can fold it into a ServiceError without
string matching.
"""

from __future__ import annotations

from typing import Any


class BindError(Exception):
    """Base class for all binding failures."""

    code = "BIND_FAILED"

    def detail(self) -> dict[str, Any]:
        """Structured attributes for machine-readable output."""
        return {}


class NotAddressableError(BindError):
    """The bind target is not a mutable record instance."""

    code = "NOT_ADDRESSABLE"

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"{kind} is not a mutable record instance")

    def detail(self) -> dict[str, Any]:
        return {"kind": self.kind}


class UnwritableFieldError(BindError):
    """A tagged field cannot be assigned."""

    code = "UNWRITABLE_FIELD"

    def __init__(self, field_name: str) -> None:
        self.field_name = field_name
        super().__init__(f"field '{field_name}' cannot be set")

    def detail(self) -> dict[str, Any]:
        return {"field": self.field_name}


class InvalidRequiredTagError(BindError):
    """The ``required`` tag is present but is not a boolean."""

    code = "INVALID_REQUIRED_TAG"

    def __init__(self, raw_value: str) -> None:
        self.raw_value = raw_value
        super().__init__(f"invalid required tag '{raw_value}'")

    def detail(self) -> dict[str, Any]:
        return {"required": self.raw_value}


class MissingRequiredValueError(BindError):
    """A required key is absent from the source and has no default."""

    code = "MISSING_REQUIRED_VALUE"

    def __init__(self, lookup_key: str) -> None:
        self.lookup_key = lookup_key
        super().__init__(f"{lookup_key} environment configuration was missing")

    def detail(self) -> dict[str, Any]:
        return {"key": self.lookup_key}


class UnsupportedTypeError(BindError):
    """No coercion rule or custom setter exists for the declared type."""

    code = "UNSUPPORTED_TYPE"

    def __init__(self, type_name: str, field_name: str | None = None) -> None:
        self.type_name = type_name
        self.field_name = field_name
        if field_name:
            super().__init__(f"error setting {field_name}: {type_name} is not supported")
        else:
            super().__init__(f"{type_name} is not supported")

    def detail(self) -> dict[str, Any]:
        return {"type": self.type_name, "field": self.field_name}


class FieldConversionError(BindError):
    """The raw string could not be parsed into the declared type."""

    code = "FIELD_CONVERSION"

    def __init__(self, field_name: str, cause: Exception) -> None:
        self.field_name = field_name
        self.cause = cause
        super().__init__(f"error setting {field_name}: {cause}")

    def detail(self) -> dict[str, Any]:
        return {"field": self.field_name, "cause": str(self.cause)}


class CustomSetterError(BindError):
    """A field's ``set_from_string`` raised."""

    code = "CUSTOM_SETTER"

    def __init__(self, field_name: str, cause: Exception) -> None:
        self.field_name = field_name
        self.cause = cause
        super().__init__(f"error in custom setter for {field_name}: {cause}")

    def detail(self) -> dict[str, Any]:
        return {"field": self.field_name, "cause": str(self.cause)}
