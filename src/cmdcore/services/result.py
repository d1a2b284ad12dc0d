"""ServiceResult and ServiceError — the dispatch contract.

INVARIANT: ``Dispatcher.run`` always returns a ServiceResult; interpreter
errors never escape it as exceptions. The CLI and any embedding host
consume this type.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from cmdcore.domain.errors import CommandError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult.

    ``code`` is the error kind (e.g. ``"ArgumentMismatch"``) and
    ``message`` the rendered ``"<ErrorKind>: <detail>"`` text.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: CommandError) -> ServiceError:
        return cls(code=str(exc.kind), message=str(exc), detail=dict(exc.context))


class ServiceResult(BaseModel):
    """Universal return type for interpreter operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"run"`` or ``"compile"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (input line, token counts, etc.).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        exc: CommandError,
        *,
        meta: dict[str, Any] | None = None,
    ) -> ServiceResult:
        """Build a failed result from an interpreter error."""
        return cls(ok=False, op=op, error=ServiceError.from_exception(exc), meta=meta)
