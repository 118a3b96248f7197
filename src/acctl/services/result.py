"""ServiceResult and ServiceError: what every command hands to the output layer.

Handlers never print directly: they produce a ServiceResult and
``AppContext.emit()`` decides the stream, the format and the exit code.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one command.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"create_account"``).
        data: Operation-specific payload on success.  A ``message`` key is
            the human-readable success line.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def success(cls, op: str, message: str, **data: Any) -> ServiceResult:
        return cls(ok=True, op=op, data={"message": message, **data})

    @classmethod
    def failure(cls, op: str, code: str, message: str, **detail: Any) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))
