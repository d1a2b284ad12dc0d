"""Argument binder — match raw tokens to compiled definitions.

Definitions are processed in template order with a cursor into the token
list. Bindings accumulated so far are visible to later array size
expressions, which is what lets ``&int n &array<n> items`` work.

INVARIANT: A failed bind never returns partial bindings.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from cmdcore.domain.convert import convert
from cmdcore.domain.errors import ArgumentMismatch
from cmdcore.domain.expression import evaluate_size
from cmdcore.domain.types import (
    ArgumentBindings,
    ArgumentDefinition,
    ArrayKind,
    BoundValue,
    SimpleKind,
)

logger = logging.getLogger(__name__)


@dataclass
class BindOutcome:
    """Successful bind: the bindings plus non-fatal findings."""

    bindings: ArgumentBindings
    consumed: int
    trailing: int = 0
    warnings: list[str] = field(default_factory=list)


def bind(definitions: Sequence[ArgumentDefinition], tokens: Sequence[str]) -> BindOutcome:
    """Bind *tokens* to *definitions* in order.

    Raises:
        ArgumentMismatch: A simple argument has no token left, or an
            array's resolved size exceeds the remaining tokens.
        TypeConversionFailed: A token does not parse as its declared type.
        InvalidExpression: An array size expression cannot be evaluated.
    """
    bindings: ArgumentBindings = {}
    cursor = 0

    for definition in definitions:
        name = definition.name
        match definition.kind:
            case SimpleKind(type=ptype):
                if cursor >= len(tokens):
                    raise ArgumentMismatch(
                        f"Missing argument for '{name}'.",
                        argument=name,
                        position=cursor,
                    )
                bindings[name] = convert(tokens[cursor], ptype, name)
                cursor += 1

            case ArrayKind(size_expression=expression, element_type=etype):
                size = evaluate_size(expression, bindings, name)
                available = len(tokens) - cursor
                if size > available:
                    raise ArgumentMismatch(
                        f"Not enough arguments for array '{name}'. "
                        f"Expected {size}, found {available}.",
                        argument=name,
                        expected=size,
                        found=available,
                    )
                chunk = tokens[cursor : cursor + size]
                values: list[BoundValue]
                if etype is None:
                    values = list(chunk)
                else:
                    values = [convert(token, etype, name) for token in chunk]
                bindings[name] = values
                cursor += size

    outcome = BindOutcome(bindings=bindings, consumed=cursor)
    if cursor < len(tokens):
        outcome.trailing = len(tokens) - cursor
        message = f"{outcome.trailing} trailing argument(s) were ignored."
        outcome.warnings.append(message)
        logger.warning(
            "Ignored %d trailing argument(s): %s", outcome.trailing, list(tokens[cursor:])
        )
    return outcome
