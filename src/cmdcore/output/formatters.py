"""Output mode selection for ServiceResult.

Results are rendered for humans (Rich tables), for scripts (``--quiet``),
or for machines (``--json``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from cmdcore.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from cmdcore.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Output flags pulled from CmdSettings."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(
    result: ServiceResult,
    *,
    settings: OutputSettings | None = None,
) -> str:
    """Format a ServiceResult for display.

    ``--json`` wins over ``--quiet``, which wins over the default Rich view.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
