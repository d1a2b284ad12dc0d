"""Root CLI group for cmdcore with global flags and command registration."""

from __future__ import annotations

import click

from cmdcore import __version__
from cmdcore.commands import register_commands
from cmdcore.commands._base import CmdGroup
from cmdcore.commands._context import AppContext
from cmdcore.config.settings import CmdSettings


@click.group(
    cls=CmdGroup,
    invoke_without_command=True,
    examples="""\
  cmdcore compile '&int n &array<n,string> items'
  cmdcore run list:2 a b
  cmdcore -c ./cmdcore.toml shell session.txt""",
)
@click.version_option(version=__version__, prog_name="cmdcore")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """cmdcore — typed command-line interpreter driven by argument templates."""
    settings = CmdSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
