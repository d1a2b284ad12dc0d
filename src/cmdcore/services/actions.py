"""Built-in actions for commands declared in ``cmdcore.toml``.

A ``[commands.<keyword>]`` section names one of these by its ``action``
key. Embedding hosts register their own callables instead.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from cmdcore.domain.types import ArgumentBindings, BoundValue, is_numeric
from cmdcore.services.registry import Action


def _flatten(values: Any) -> Iterator[BoundValue]:
    for value in values:
        if isinstance(value, list):
            yield from _flatten(value)
        else:
            yield value


def echo(args: ArgumentBindings) -> ArgumentBindings:
    """Return the bindings unchanged."""
    return dict(args)


def total(args: ArgumentBindings) -> int | float:
    """Sum every numeric value, including array elements."""
    return sum(v for v in _flatten(args.values()) if is_numeric(v))


def count(args: ArgumentBindings) -> int:
    """Count bound values; arrays count their elements."""
    return sum(1 for _ in _flatten(args.values()))


BUILTIN_ACTIONS: dict[str, Action] = {
    "echo": echo,
    "sum": total,
    "count": count,
}


def resolve_action(name: str) -> Action:
    """Look up a built-in action by name.

    Raises:
        KeyError: *name* is not a built-in action.
    """
    try:
        return BUILTIN_ACTIONS[name]
    except KeyError:
        choices = ", ".join(sorted(BUILTIN_ACTIONS))
        msg = f"Unknown action '{name}'. Choose from: {choices}"
        raise KeyError(msg) from None
