"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from envbind.domain.errors import MissingRequiredValueError, UnsupportedTypeError
from envbind.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="bind", data={"values": {"port": 80}})
        assert result.ok is True
        assert result.op == "bind"
        assert result.data == {"values": {"port": 80}}
        assert result.warnings == []
        assert result.error is None

    def test_error_construction(self) -> None:
        error = ServiceError(code="LOAD_FAILED", message="Cannot import module")
        result = ServiceResult(ok=False, op="shape", error=error)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "LOAD_FAILED"

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="shape", data={"count": 2}, warnings=["w"])
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["op"] == "shape"
        assert parsed["data"]["count"] == 2
        assert parsed["warnings"] == ["w"]
        assert parsed["error"] is None

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="bind")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]


class TestServiceError:
    def test_default_detail(self) -> None:
        error = ServiceError(code="E001", message="bad")
        assert error.detail == {}

    def test_from_bind_error(self) -> None:
        error = ServiceError.from_bind_error(MissingRequiredValueError("APP_PORT"))
        assert error.code == "MISSING_REQUIRED_VALUE"
        assert error.message == "APP_PORT environment configuration was missing"
        assert error.detail == {"key": "APP_PORT"}

    def test_from_bind_error_with_field(self) -> None:
        error = ServiceError.from_bind_error(UnsupportedTypeError("Queue", field_name="q"))
        assert error.code == "UNSUPPORTED_TYPE"
        assert error.message == "error setting q: Queue is not supported"
