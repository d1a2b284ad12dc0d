"""Argument types and compiled-template structures.

A template compiles into an ordered tuple of :class:`ArgumentDefinition`.
Each definition is either a :class:`SimpleKind` (one token, one primitive)
or an :class:`ArrayKind` whose length is a size expression evaluated at
bind time.

INVARIANT: Definitions are immutable once compiled.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class PrimitiveType(StrEnum):
    """Primitive kinds a single token can be converted to."""

    STRING = "string"
    INT = "int"
    FLOAT = "float"
    CHAR = "char"


ARRAY_TYPE_NAME = "array"


class Char(str):
    """A string holding exactly one code point."""

    __slots__ = ()

    def __new__(cls, value: str) -> Char:
        if len(value) != 1:
            msg = f"Char requires exactly one character, got {len(value)}"
            raise ValueError(msg)
        return super().__new__(cls, value)

    def __repr__(self) -> str:
        return f"Char({str.__repr__(self)})"


type BoundValue = str | int | float | Char | list[BoundValue]
type ArgumentBindings = dict[str, BoundValue]


@dataclass(frozen=True)
class SimpleKind:
    """One token converted to ``type``."""

    type: PrimitiveType


@dataclass(frozen=True)
class ArrayKind:
    """``size_expression`` tokens, converted to ``element_type`` when set.

    Without an element type the raw token strings are kept.
    """

    size_expression: str
    element_type: PrimitiveType | None = None


type ArgumentKind = SimpleKind | ArrayKind


@dataclass(frozen=True)
class ArgumentDefinition:
    """A named slot in a compiled template."""

    name: str
    kind: ArgumentKind

    @property
    def is_array(self) -> bool:
        return isinstance(self.kind, ArrayKind)

    def describe(self) -> dict[str, Any]:
        """Plain-dict view used by output renderers and ``--json``."""
        match self.kind:
            case SimpleKind(type=ptype):
                return {"name": self.name, "kind": "simple", "type": str(ptype)}
            case ArrayKind(size_expression=size, element_type=etype):
                return {
                    "name": self.name,
                    "kind": "array",
                    "size": size,
                    "element_type": str(etype) if etype else None,
                }


type CompiledTemplate = tuple[ArgumentDefinition, ...]


def is_numeric(value: object) -> bool:
    """True for bound ``int``/``float`` values (``bool`` excluded)."""
    return isinstance(value, int | float) and not isinstance(value, bool)


def type_name_of(value: BoundValue) -> str:
    """Template type name describing a bound value."""
    match value:
        case Char():
            return PrimitiveType.CHAR.value
        case str():
            return PrimitiveType.STRING.value
        case bool():
            raise TypeError("bool is not a bindable value")
        case int():
            return PrimitiveType.INT.value
        case float():
            return PrimitiveType.FLOAT.value
        case list():
            return ARRAY_TYPE_NAME
    raise TypeError(f"Unsupported bound value: {value!r}")
