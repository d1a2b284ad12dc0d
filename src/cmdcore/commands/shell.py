"""Command: read input lines and dispatch each one."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click
import structlog

from cmdcore.commands._base import CmdCommand

if TYPE_CHECKING:
    from cmdcore.commands._context import AppContext

COMMENT_PREFIX = "#"


@click.command(
    cls=CmdCommand,
    examples="""\
  printf 'greet:30\\nsum:3 4\\n' | cmdcore shell
  cmdcore shell session.txt
  cmdcore --json shell < session.txt""",
)
@click.argument("source", type=click.File("r"), default="-")
@click.option("--stop-on-error", is_flag=True, help="Stop at the first failing line.")
@click.pass_obj
def shell(app: AppContext, source: TextIO, stop_on_error: bool) -> None:
    """Dispatch every line of SOURCE (default: stdin).

    Blank lines and lines starting with '#' are skipped. A failing line
    is reported and the next line is read; the exit code is 1 if any
    line failed.
    """
    dispatcher = app.dispatcher
    failures = 0

    for lineno, raw in enumerate(source, start=1):
        line = raw.strip()
        if not line or line.startswith(COMMENT_PREFIX):
            continue
        with structlog.contextvars.bound_contextvars(lineno=lineno):
            ok = app.emit(dispatcher.run(line), exit_on_error=False)
        if not ok:
            failures += 1
            if stop_on_error:
                break

    if failures:
        raise SystemExit(1)
