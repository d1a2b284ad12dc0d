"""Array size expressions — integer literals or arithmetic over bound numbers.

Grammar (lowest to highest precedence)::

    expr   := term (("+" | "-") term)*
    term   := unary (("*" | "/" | "%") unary)*
    unary  := ("+" | "-") unary | power
    power  := atom ("**" unary)?
    atom   := NUMBER | NAME | "(" expr ")"

Names resolve only against bound ``int``/``float`` arguments. Strings,
chars and arrays are never offered as variables.
"""

from __future__ import annotations

import functools
import logging
import math
import operator
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from cmdcore.domain.errors import ArgumentMismatch, InvalidExpression
from cmdcore.domain.types import BoundValue, is_numeric

logger = logging.getLogger(__name__)

type Number = int | float

_INT_LITERAL = re.compile(r"[+-]?[0-9]+")

_TOKEN_SPEC: list[tuple[str, str]] = [
    ("NUMBER", r"(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"),
    ("NAME", r"[A-Za-z_][A-Za-z0-9_]*"),
    ("POW", r"\*\*"),
    ("OP", r"[+\-*/%]"),
    ("LPAREN", r"\("),
    ("RPAREN", r"\)"),
    ("WS", r"\s+"),
    ("MISMATCH", r"."),
]
_TOKEN_RE = re.compile("|".join(f"(?P<{kind}>{pattern})" for kind, pattern in _TOKEN_SPEC))


class ExpressionError(ValueError):
    """Malformed or unevaluable expression (internal; surfaced as InvalidExpression)."""


@dataclass(frozen=True)
class _Token:
    kind: str
    value: str
    pos: int


def tokenize(source: str) -> list[_Token]:
    """Split *source* into expression tokens, dropping whitespace."""
    tokens: list[_Token] = []
    for m in _TOKEN_RE.finditer(source):
        kind = m.lastgroup or "MISMATCH"
        if kind == "WS":
            continue
        if kind == "MISMATCH":
            msg = f"unexpected character {m.group()!r} at position {m.start()}"
            raise ExpressionError(msg)
        tokens.append(_Token(kind, m.group(), m.start()))
    return tokens


# ── AST ───────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class NumberLiteral:
    value: Number

    def evaluate(self, variables: Mapping[str, Number]) -> Number:
        return self.value

    def names(self) -> frozenset[str]:
        return frozenset()


@dataclass(frozen=True)
class NameRef:
    name: str

    def evaluate(self, variables: Mapping[str, Number]) -> Number:
        try:
            return variables[self.name]
        except KeyError:
            msg = f"unknown numeric variable '{self.name}'"
            raise ExpressionError(msg) from None

    def names(self) -> frozenset[str]:
        return frozenset({self.name})


@dataclass(frozen=True)
class UnaryExpr:
    op: str
    operand: Node

    def evaluate(self, variables: Mapping[str, Number]) -> Number:
        value = self.operand.evaluate(variables)
        return -value if self.op == "-" else value

    def names(self) -> frozenset[str]:
        return self.operand.names()


def _power(base: Number, exponent: Number) -> Number:
    # Evaluated in floating point so huge exponents overflow instead of hanging.
    result = math.pow(base, exponent)
    if isinstance(base, int) and isinstance(exponent, int) and exponent >= 0:
        return int(result)
    return result


_BINARY_OPS: dict[str, Callable[[Number, Number], Number]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
    "%": operator.mod,
    "**": _power,
}


@dataclass(frozen=True)
class BinaryExpr:
    op: str
    left: Node
    right: Node

    def evaluate(self, variables: Mapping[str, Number]) -> Number:
        lhs = self.left.evaluate(variables)
        rhs = self.right.evaluate(variables)
        try:
            return _BINARY_OPS[self.op](lhs, rhs)
        except ZeroDivisionError:
            msg = f"division by zero in '{self.op}'"
            raise ExpressionError(msg) from None
        except (OverflowError, ValueError) as exc:
            msg = f"arithmetic error in '{self.op}': {exc}"
            raise ExpressionError(msg) from None

    def names(self) -> frozenset[str]:
        return self.left.names() | self.right.names()


type Node = NumberLiteral | NameRef | UnaryExpr | BinaryExpr


# ── Parser ────────────────────────────────────────────────────────────


class _Parser:
    """Recursive-descent parser over a token list."""

    def __init__(self, tokens: list[_Token]) -> None:
        self.tokens = tokens
        self.i = 0

    def peek(self) -> _Token | None:
        return self.tokens[self.i] if self.i < len(self.tokens) else None

    def advance(self) -> _Token:
        tok = self.tokens[self.i]
        self.i += 1
        return tok

    def at(self, kind: str, *values: str) -> bool:
        tok = self.peek()
        return tok is not None and tok.kind == kind and (not values or tok.value in values)

    def parse(self) -> Node:
        if not self.tokens:
            raise ExpressionError("empty expression")
        node = self.parse_expr()
        tok = self.peek()
        if tok is not None:
            msg = f"unexpected {tok.value!r} at position {tok.pos}"
            raise ExpressionError(msg)
        return node

    def parse_expr(self) -> Node:
        node = self.parse_term()
        while self.at("OP", "+", "-"):
            op = self.advance().value
            node = BinaryExpr(op, node, self.parse_term())
        return node

    def parse_term(self) -> Node:
        node = self.parse_unary()
        while self.at("OP", "*", "/", "%"):
            op = self.advance().value
            node = BinaryExpr(op, node, self.parse_unary())
        return node

    def parse_unary(self) -> Node:
        if self.at("OP", "+", "-"):
            op = self.advance().value
            return UnaryExpr(op, self.parse_unary())
        return self.parse_power()

    def parse_power(self) -> Node:
        node = self.parse_atom()
        if self.at("POW"):
            self.advance()
            node = BinaryExpr("**", node, self.parse_unary())
        return node

    def parse_atom(self) -> Node:
        tok = self.peek()
        if tok is None:
            raise ExpressionError("unexpected end of expression")
        if tok.kind == "NUMBER":
            self.advance()
            text = tok.value
            is_float = any(c in text for c in ".eE")
            try:
                return NumberLiteral(float(text) if is_float else int(text))
            except ValueError:
                msg = f"number literal at position {tok.pos} is too long"
                raise ExpressionError(msg) from None
        if tok.kind == "NAME":
            self.advance()
            return NameRef(tok.value)
        if tok.kind == "LPAREN":
            self.advance()
            node = self.parse_expr()
            if not self.at("RPAREN"):
                raise ExpressionError(f"missing ')' for '(' at position {tok.pos}")
            self.advance()
            return node
        msg = f"unexpected {tok.value!r} at position {tok.pos}"
        raise ExpressionError(msg)


@functools.lru_cache(maxsize=256)
def parse_expression(source: str) -> Node:
    """Parse *source* into an expression tree.

    Raises:
        ExpressionError: *source* is not a well-formed arithmetic expression.
    """
    return _Parser(tokenize(source)).parse()


def referenced_names(source: str) -> frozenset[str]:
    """Variable names used by *source*; empty for literals and unparsable text."""
    if _INT_LITERAL.fullmatch(source.strip()):
        return frozenset()
    try:
        return parse_expression(source.strip()).names()
    except ExpressionError:
        return frozenset()


def evaluate_size(
    expression: str,
    bound: Mapping[str, BoundValue],
    array_name: str,
) -> int:
    """Resolve an array's size against the arguments bound so far.

    Integer literals take a fast path with no variable lookup. Anything
    else is parsed and evaluated with the bound ``int``/``float`` values
    as variables; fractional results truncate toward zero.

    Raises:
        InvalidExpression: The expression cannot be evaluated to a number.
        ArgumentMismatch: The resulting size is negative.
    """
    source = expression.strip()
    if _INT_LITERAL.fullmatch(source):
        try:
            size = int(source)
        except ValueError:
            raise _not_a_size(expression, array_name) from None
    else:
        variables = {name: value for name, value in bound.items() if is_numeric(value)}
        try:
            value = parse_expression(source).evaluate(variables)
        except ExpressionError as exc:
            raise InvalidExpression(
                f"Could not evaluate array size '{expression}' for '{array_name}'. "
                f"Ensure all variables are numbers ({exc}).",
                expression=expression,
                argument=array_name,
            ) from exc
        try:
            finite = math.isfinite(value)
        except OverflowError:
            # Integer arithmetic past the range of a double.
            finite = False
        if not finite:
            raise _not_a_size(expression, array_name)
        size = int(value)
        logger.debug("Evaluated size %r for %s -> %d", expression, array_name, size)

    if size < 0:
        raise ArgumentMismatch(
            f"Calculated array size for '{array_name}' is negative ({size}).",
            argument=array_name,
            size=size,
        )
    return size


def _not_a_size(expression: str, array_name: str) -> InvalidExpression:
    return InvalidExpression(
        f"Array size '{expression}' for '{array_name}' is not a finite number.",
        expression=expression,
        argument=array_name,
    )
