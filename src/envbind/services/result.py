"""ServiceResult and ServiceError: the contract between services and the CLI.

INVARIANT: Service operations never raise BindError to the caller; they fold
it into a failed ServiceResult. The library entry point ``bind()`` raises.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from envbind.domain.errors import BindError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_bind_error(cls, exc: BindError) -> ServiceError:
        return cls(code=exc.code, message=str(exc), detail=exc.detail())


class ServiceResult(BaseModel):
    """Return type for service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (``"shape"``, ``"bind"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
