"""Command: dispatch a single input line."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cmdcore.commands._base import CmdCommand

if TYPE_CHECKING:
    from cmdcore.commands._context import AppContext


@click.command(
    cls=CmdCommand,
    examples="""\
  cmdcore run greet:30
  cmdcore run 'list:2 apples pears'
  cmdcore --json run sum:3 4
  cmdcore -q run sum:3 4""",
)
@click.argument("line", nargs=-1, required=True)
@click.pass_obj
def run(app: AppContext, line: tuple[str, ...]) -> None:
    """Run LINE ("keyword:args") against the configured commands.

    Unquoted words are joined with single spaces before dispatch.
    """
    app.emit(app.dispatcher.run(" ".join(line)))
