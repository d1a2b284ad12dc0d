"""Dispatcher — one input line through tokenize, compile, bind, invoke.

Each :meth:`Dispatcher.run` is a stateless pipeline. Any interpreter
error short-circuits it and comes back as a failed ServiceResult; the
command's action only runs after a successful bind.
"""

from __future__ import annotations

import logging
from typing import Any

from cmdcore.domain.errors import CommandError, CommandNotFound, InvalidInputFormat
from cmdcore.domain.template import compile_template
from cmdcore.domain.types import CompiledTemplate
from cmdcore.services.base import BaseService
from cmdcore.services.binder import bind
from cmdcore.services.result import ServiceResult

logger = logging.getLogger(__name__)

SEPARATOR = ":"


def split_input(line: str) -> tuple[str, list[str]]:
    """Split ``"keyword:a b c"`` into ``("keyword", ["a", "b", "c"])``.

    Only the first ``:`` separates; later colons belong to the tokens.
    The keyword is taken verbatim.

    Raises:
        InvalidInputFormat: *line* has no ``:``.
    """
    keyword, sep, args_text = line.partition(SEPARATOR)
    if not sep:
        raise InvalidInputFormat(
            "Missing ':' separator. Use 'keyword:args'.",
            line=line,
        )
    return keyword, args_text.split()


class Dispatcher(BaseService):
    """Runs input lines against the commands in an injected registry."""

    def run(self, line: str) -> ServiceResult:
        """Parse and execute one input line.

        On success ``data`` holds ``keyword``, ``bindings`` and, when the
        action returned something, ``output``. Trailing-token warnings
        are carried on ``warnings`` when enabled.
        """
        op = "run"
        meta: dict[str, Any] = {"line": line}
        try:
            keyword, tokens = split_input(line)
            meta["keyword"] = keyword
            meta["tokens"] = len(tokens)

            command = self._registry.get(keyword)
            if command is None:
                raise CommandNotFound(
                    f"Command '{keyword}' not found.",
                    keyword=keyword,
                )

            definitions = command.compile()
            outcome = bind(definitions, tokens)
        except CommandError as exc:
            logger.debug("Dispatch failed for %r: %s", line, exc)
            return ServiceResult.failure(op, exc, meta=meta)

        output = command.action(outcome.bindings)

        data: dict[str, Any] = {"keyword": keyword, "bindings": outcome.bindings}
        if output is not None:
            data["output"] = output
        warnings = outcome.warnings if self._warn_trailing else []
        meta["consumed"] = outcome.consumed
        logger.debug("Ran %r with %d binding(s)", keyword, len(outcome.bindings))
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings, meta=meta)

    def compile(self, template: str) -> ServiceResult:
        """Compile *template* and describe its definitions."""
        op = "compile"
        try:
            definitions: CompiledTemplate = compile_template(template)
        except CommandError as exc:
            return ServiceResult.failure(op, exc, meta={"template": template})
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "template": template,
                "count": len(definitions),
                "definitions": [d.describe() for d in definitions],
            },
        )
