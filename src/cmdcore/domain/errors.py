"""Error taxonomy for template compilation, binding, and dispatch.

Every failure the interpreter reports is one of six kinds. Each is
terminal for the current input line; the dispatcher converts them into
a failed :class:`~cmdcore.services.result.ServiceResult`.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, ClassVar


class ErrorKind(StrEnum):
    """Stable error codes, also used as ``ServiceError.code``."""

    INVALID_TEMPLATE = "InvalidTemplate"
    ARGUMENT_MISMATCH = "ArgumentMismatch"
    TYPE_CONVERSION_FAILED = "TypeConversionFailed"
    INVALID_EXPRESSION = "InvalidExpression"
    COMMAND_NOT_FOUND = "CommandNotFound"
    INVALID_INPUT_FORMAT = "InvalidInputFormat"


class CommandError(Exception):
    """Base class for all interpreter errors.

    ``str(err)`` renders as ``"<ErrorKind>: <detail>"``.
    """

    kind: ClassVar[ErrorKind]

    def __init__(self, detail: str, **context: Any) -> None:
        self.detail = detail
        self.context = context
        super().__init__(detail)

    def __str__(self) -> str:
        return f"{self.kind}: {self.detail}"


class InvalidTemplate(CommandError):
    kind = ErrorKind.INVALID_TEMPLATE


class ArgumentMismatch(CommandError):
    kind = ErrorKind.ARGUMENT_MISMATCH


class TypeConversionFailed(CommandError):
    kind = ErrorKind.TYPE_CONVERSION_FAILED


class InvalidExpression(CommandError):
    kind = ErrorKind.INVALID_EXPRESSION


class CommandNotFound(CommandError):
    kind = ErrorKind.COMMAND_NOT_FOUND


class InvalidInputFormat(CommandError):
    kind = ErrorKind.INVALID_INPUT_FORMAT
