"""Tests for coercion rules, the coercer registry, and sequence splitting."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
from typing import Optional

import pytest

from envbind.domain.coercion import (
    BUILTIN_COERCERS,
    convert,
    get_coercer,
    is_setter,
    parse_bool,
    register_coercer,
    split,
    unwrap_optional,
)
from envbind.domain.errors import FieldConversionError, UnsupportedTypeError
from envbind.domain.types import Int16


class _Color:
    def __init__(self, name: str = "") -> None:
        self.name = name

    def __eq__(self, other: object) -> bool:
        return isinstance(other, _Color) and other.name == self.name


def _parse_color(raw: str) -> _Color:
    if raw not in ("red", "green"):
        msg = f"unknown color {raw!r}"
        raise ValueError(msg)
    return _Color(raw)


class _WithSetter:
    def set_from_string(self, raw: str) -> None:
        self.raw = raw


class TestParseBool:
    @pytest.mark.parametrize("raw", ["1", "t", "T", "TRUE", "true", "True"])
    def test_true_spellings(self, raw: str) -> None:
        assert parse_bool(raw) is True

    @pytest.mark.parametrize("raw", ["0", "f", "F", "FALSE", "false", "False"])
    def test_false_spellings(self, raw: str) -> None:
        assert parse_bool(raw) is False

    @pytest.mark.parametrize("raw", ["", "yes", "tRuE", " true", "2"])
    def test_rejects_others(self, raw: str) -> None:
        with pytest.raises(ValueError):
            parse_bool(raw)


class TestSplit:
    def test_trims_whitespace(self) -> None:
        assert split(" a ,b,  c ", ",") == ["a", "b", "c"]

    def test_empty_string_has_no_parts(self) -> None:
        assert split("", ",") == []

    def test_keeps_empty_inner_parts(self) -> None:
        assert split("a,,b", ",") == ["a", "", "b"]

    def test_multi_character_delimiter(self) -> None:
        assert split("a::b", "::") == ["a", "b"]

    def test_empty_delimiter_splits_characters(self) -> None:
        assert split("abc", "") == ["a", "b", "c"]


class TestUnwrapOptional:
    def test_pipe_union(self) -> None:
        assert unwrap_optional(int | None) is int

    def test_typing_optional(self) -> None:
        assert unwrap_optional(Optional[str]) is str  # noqa: UP045

    def test_multi_member_union_untouched(self) -> None:
        tp = int | str | None
        assert unwrap_optional(tp) == tp

    def test_plain_type_untouched(self) -> None:
        assert unwrap_optional(float) is float


class TestConvert:
    def test_scalar(self) -> None:
        assert convert("port", Int16, "80") == 80

    def test_sequence_of_durations(self) -> None:
        assert convert("waits", list[timedelta], "1s;2s", delimiter=";") == [
            timedelta(seconds=1),
            timedelta(seconds=2),
        ]

    def test_bare_list_is_strings(self) -> None:
        assert convert("items", list, "a, b") == ["a", "b"]

    def test_heterogeneous_tuple_unsupported(self) -> None:
        with pytest.raises(UnsupportedTypeError):
            convert("pair", tuple[int, str], "1,a")

    def test_conversion_error_carries_field(self) -> None:
        with pytest.raises(FieldConversionError) as exc_info:
            convert("ratio", float, "abc")
        assert exc_info.value.field_name == "ratio"
        assert exc_info.value.detail() == {"field": "ratio", "cause": str(exc_info.value.cause)}

    def test_setter_detection(self) -> None:
        assert is_setter(_WithSetter) is True
        assert is_setter(str) is False
        assert is_setter(list[int]) is False


class TestRegistry:
    def test_registered_coercer_is_used(self, clean_registry: dict) -> None:
        register_coercer(_Color, _parse_color)
        assert get_coercer(_Color) is _parse_color
        assert convert("color", _Color, "red") == _Color("red")
        assert convert("colors", list[_Color], "red, green") == [_Color("red"), _Color("green")]

    def test_registered_coercer_failure_is_conversion_error(self, clean_registry: dict) -> None:
        register_coercer(_Color, _parse_color)
        with pytest.raises(FieldConversionError):
            convert("color", _Color, "blue")

    def test_builtin_types_reserved(self, clean_registry: dict) -> None:
        with pytest.raises(ValueError, match="built-in"):
            register_coercer(int, int)

    def test_conflicting_registration_rejected(self, clean_registry: dict) -> None:
        register_coercer(Decimal, Decimal)
        register_coercer(Decimal, Decimal)  # same function is fine
        with pytest.raises(ValueError, match="already registered"):
            register_coercer(Decimal, lambda raw: Decimal(raw))

    def test_non_callable_rejected(self, clean_registry: dict) -> None:
        with pytest.raises(TypeError):
            register_coercer(Decimal, "not callable")  # type: ignore[arg-type]

    def test_builtins_cover_widths(self) -> None:
        assert Int16 in BUILTIN_COERCERS
        assert timedelta in BUILTIN_COERCERS
