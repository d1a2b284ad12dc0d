"""cmdcore — a miniature command interpreter with typed argument templates.

Quick start::

    from cmdcore import CommandRegistry, Dispatcher

    registry = CommandRegistry()
    registry.register("list", "List items", "&int n &array<n,string> items", print)
    result = Dispatcher(registry).run("list:2 a b")
"""

from __future__ import annotations

from cmdcore.domain.convert import convert
from cmdcore.domain.errors import (
    ArgumentMismatch,
    CommandError,
    CommandNotFound,
    ErrorKind,
    InvalidExpression,
    InvalidInputFormat,
    InvalidTemplate,
    TypeConversionFailed,
)
from cmdcore.domain.expression import evaluate_size
from cmdcore.domain.template import compile_template
from cmdcore.domain.types import (
    ArgumentDefinition,
    ArrayKind,
    Char,
    PrimitiveType,
    SimpleKind,
)
from cmdcore.services.binder import BindOutcome, bind
from cmdcore.services.dispatcher import Dispatcher, split_input
from cmdcore.services.registry import Command, CommandRegistry
from cmdcore.services.result import ServiceError, ServiceResult

__version__ = "0.1.0"

__all__ = [
    "ArgumentDefinition",
    "ArgumentMismatch",
    "ArrayKind",
    "BindOutcome",
    "Char",
    "Command",
    "CommandError",
    "CommandNotFound",
    "CommandRegistry",
    "Dispatcher",
    "ErrorKind",
    "InvalidExpression",
    "InvalidInputFormat",
    "InvalidTemplate",
    "PrimitiveType",
    "ServiceError",
    "ServiceResult",
    "SimpleKind",
    "TypeConversionFailed",
    "__version__",
    "bind",
    "compile_template",
    "convert",
    "evaluate_size",
    "split_input",
]
