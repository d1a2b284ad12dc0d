"""Subcommand modules for cmdcore.

Provides register_commands(), which imports command modules lazily so
``cmdcore --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from cmdcore.commands.compile_cmd import compile_cmd
    from cmdcore.commands.run import run
    from cmdcore.commands.shell import shell

    cli.add_command(run)
    cli.add_command(shell)
    cli.add_command(compile_cmd)
