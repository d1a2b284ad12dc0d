"""Command: compile an argument template and show its definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cmdcore.commands._base import CmdCommand

if TYPE_CHECKING:
    from cmdcore.commands._context import AppContext


@click.command(
    "compile",
    cls=CmdCommand,
    examples="""\
  cmdcore compile '&string name &int age'
  cmdcore compile '&int n &array<n*2,float> points'
  cmdcore --json compile '&array<3> words'""",
)
@click.argument("template")
@click.pass_obj
def compile_cmd(app: AppContext, template: str) -> None:
    """Compile TEMPLATE and list its argument definitions."""
    app.emit(app.dispatcher.compile(template))
