"""Token-to-value conversion for the four primitive types."""

from __future__ import annotations

import math
import re

from cmdcore.domain.errors import TypeConversionFailed
from cmdcore.domain.types import BoundValue, Char, PrimitiveType

_INT_RE = re.compile(r"[+-]?[0-9]+")
INT_MIN, INT_MAX = -(2**63), 2**63 - 1
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


def convert(token: str, ptype: PrimitiveType, name: str = "") -> BoundValue:
    """Convert one raw *token* to *ptype*.

    *name* is the argument being bound and only appears in error detail.

    Examples:
        >>> convert("42", PrimitiveType.INT)
        42
        >>> convert("-1.5e2", PrimitiveType.FLOAT)
        -150.0
        >>> convert("x", PrimitiveType.CHAR)
        Char('x')

    Raises:
        TypeConversionFailed: *token* is not a valid literal for *ptype*,
            or an ``int`` outside the signed 64-bit range.
    """
    match ptype:
        case PrimitiveType.STRING:
            return token
        case PrimitiveType.INT:
            if _INT_RE.fullmatch(token) is None:
                raise _failure(token, "Int", name)
            try:
                value = int(token)
            except ValueError:
                # Past the interpreter's digit limit; far outside 64 bits anyway.
                raise _failure(token, "Int", name) from None
            if not INT_MIN <= value <= INT_MAX:
                raise _failure(token, "Int", name)
            return value
        case PrimitiveType.FLOAT:
            if _FLOAT_RE.fullmatch(token) is None:
                raise _failure(token, "Float", name)
            fvalue = float(token)
            if math.isinf(fvalue) and "inf" not in token.lower():
                # Finite literal that overflows a double.
                raise _failure(token, "Float", name)
            return fvalue
        case PrimitiveType.CHAR:
            if len(token) != 1:
                raise _failure(token, "Char", name, " Must be a single character.")
            return Char(token)


def _failure(token: str, label: str, name: str, hint: str = "") -> TypeConversionFailed:
    target = f" for '{name}'" if name else ""
    return TypeConversionFailed(
        f"Cannot convert '{token}' to {label}{target}.{hint}",
        token=token,
        type=label.lower(),
        argument=name,
    )
