"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``. Builds the command registry from the configured
``[commands.*]`` tables on first use and centralizes result emission
(stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cmdcore.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from cmdcore.config.settings import CmdSettings
    from cmdcore.services.dispatcher import Dispatcher
    from cmdcore.services.registry import CommandRegistry
    from cmdcore.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The registry is built lazily so ``--help`` and ``--version`` never
    touch command configuration.
    """

    def __init__(self, settings: CmdSettings) -> None:
        self.settings = settings
        self._registry: CommandRegistry | None = None

        from cmdcore.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def registry(self) -> CommandRegistry:
        """Registry populated from ``[commands.<keyword>]`` config tables."""
        if self._registry is None:
            from cmdcore.services.actions import resolve_action
            from cmdcore.services.registry import CommandRegistry

            registry = CommandRegistry()
            for keyword, spec in self.settings.commands.items():
                try:
                    action = resolve_action(spec.action)
                except KeyError as exc:
                    msg = f"[commands.{keyword}] {exc.args[0]}"
                    raise click.ClickException(msg) from exc
                registry.register(keyword, spec.description, spec.template, action)
            self._registry = registry
        return self._registry

    @property
    def dispatcher(self) -> Dispatcher:
        from cmdcore.services.dispatcher import Dispatcher

        return Dispatcher(
            self.registry,
            warn_trailing=self.settings.interpreter.warn_trailing,
        )

    def emit(self, result: ServiceResult, *, exit_on_error: bool = True) -> bool:
        """Format and output a ServiceResult; return ``result.ok``.

        * Success: writes to stdout. Warnings go to stderr so they don't
          pollute piped output.
        * Failure: writes to stderr and exits with code 1, unless
          *exit_on_error* is False (the shell keeps reading lines).
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
            return True
        click.echo(output, err=True)
        if exit_on_error:
            raise SystemExit(1)
        return False
