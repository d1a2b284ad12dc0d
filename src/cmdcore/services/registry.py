"""Command and CommandRegistry — keyword to command lookup.

The registry is an explicit value handed to the
:class:`~cmdcore.services.dispatcher.Dispatcher`, never module-level
state. Registration and lookup share a re-entrant lock so a registry may
be populated while other threads dispatch.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

from cmdcore.domain.template import compile_template
from cmdcore.domain.types import ArgumentBindings, CompiledTemplate

logger = logging.getLogger(__name__)

type Action = Callable[[ArgumentBindings], Any]


@dataclass(frozen=True)
class Command:
    """A named command with its argument template and action.

    Attributes:
        keyword: The word typed before ``:`` to run the command.
        description: A short explanation for listings.
        template: Argument grammar, e.g. ``"&string name &int age"``.
        action: Called with the bound arguments on a successful parse.
    """

    keyword: str
    description: str
    template: str
    action: Action

    def compile(self) -> CompiledTemplate:
        """Compile this command's template (memoised per template text)."""
        return compile_template(self.template)


class CommandRegistry:
    """Thread-safe mapping of keyword to :class:`Command`.

    Usage::

        registry = CommandRegistry()
        registry.register("greet", "Say hello", "&string name", greet)

        @registry.command("sum", "&array<2,int> pair", description="Add two ints")
        def add(args):
            return sum(args["pair"])
    """

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}
        self._lock = threading.RLock()

    def add(self, command: Command) -> Command:
        """Register *command*; an existing command with the same keyword is replaced."""
        with self._lock:
            if command.keyword in self._commands:
                logger.debug("Replacing command %r", command.keyword)
            self._commands[command.keyword] = command
        return command

    def register(self, keyword: str, description: str, template: str, action: Action) -> Command:
        """Build and register a :class:`Command`."""
        return self.add(Command(keyword, description, template, action))

    def command(
        self,
        keyword: str,
        template: str = "",
        *,
        description: str = "",
    ) -> Callable[[Action], Action]:
        """Decorator form of :meth:`register`; returns the function unchanged."""

        def decorator(action: Action) -> Action:
            doc = description or (action.__doc__ or "").strip().split("\n")[0]
            self.register(keyword, doc, template, action)
            return action

        return decorator

    def get(self, keyword: str) -> Command | None:
        with self._lock:
            return self._commands.get(keyword)

    def keywords(self) -> list[str]:
        """Registered keywords in sorted order."""
        with self._lock:
            return sorted(self._commands)

    def __contains__(self, keyword: object) -> bool:
        with self._lock:
            return keyword in self._commands

    def __len__(self) -> int:
        with self._lock:
            return len(self._commands)

    def __iter__(self) -> Iterator[Command]:
        with self._lock:
            commands = list(self._commands.values())
        return iter(commands)
