"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from cmdcore.domain.types import type_name_of
from cmdcore.output.console import create_console, get_output, style_for_type

if TYPE_CHECKING:
    from rich.console import Console

    from cmdcore.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    if "output" in result.data:
        return format_value(result.data["output"])
    return f"OK: {result.op}"


def format_value(value: Any) -> str:
    """Compact display form: strings bare, arrays bracketed."""
    if isinstance(value, list):
        return "[" + ", ".join(format_value(v) for v in value) + "]"
    if isinstance(value, dict):
        return ", ".join(f"{k}={format_value(v)}" for k, v in value.items())
    return str(value)


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult, detail: str = "") -> None:
    label = Text("OK", style="cmd.ok")
    op = Text(f"  {result.op}", style="cmd.op")
    if detail:
        op.append(f"  {detail}", style="cmd.keyword")
    console.print(label, op, end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(Text(f"    {k}: {v}", style="dim"))


# ── Op renderers ──────────────────────────────────────────────────────


def _render_run(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result, result.data.get("keyword", ""))

    bindings: dict[str, Any] = result.data.get("bindings", {})
    if bindings:
        table = Table(show_edge=False, pad_edge=False, box=None, padding=(0, 2))
        table.add_column("  argument", style="cmd.key")
        table.add_column("type")
        table.add_column("value")
        for name, value in bindings.items():
            type_name = type_name_of(value)
            table.add_row(
                f"  {name}",
                Text(type_name, style=style_for_type(type_name)),
                Text(format_value(value)),
            )
        console.print(table)

    if "output" in result.data:
        output = format_value(result.data["output"])
        console.print(Text.assemble(("  output: ", "cmd.key"), output))

    if verbose:
        _render_meta(console, result)


def _render_compile(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result, f"{result.data.get('count', 0)} argument(s)")

    definitions: list[dict[str, Any]] = result.data.get("definitions", [])
    if not definitions:
        return
    table = Table(show_edge=False, pad_edge=False, box=None, padding=(0, 2))
    table.add_column("  #", style="dim", justify="right")
    table.add_column("argument", style="cmd.key")
    table.add_column("type")
    table.add_column("size")
    for i, definition in enumerate(definitions, start=1):
        if definition["kind"] == "array":
            element = definition.get("element_type") or "string"
            type_cell = Text(f"array<{element}>", style=style_for_type("array"))
            size = Text(str(definition["size"]))
        else:
            type_cell = Text(definition["type"], style=style_for_type(definition["type"]))
            size = Text("")
        table.add_row(f"  {i}", definition["name"], type_cell, size)
    console.print(table)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        console.print(Text.assemble((f"  {key}: ", "cmd.key"), format_value(value)))
    if verbose:
        _render_meta(console, result)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    label = Text("ERROR", style="cmd.error")
    op = Text(f"  {result.op}", style="cmd.op")
    console.print(label, op, end="")
    console.print()
    if result.error:
        console.print(Text(f"  {result.error.message}", style="cmd.code"))
        if verbose:
            for k, v in result.error.detail.items():
                console.print(Text(f"    {k}: {v}", style="dim"))
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS = {
    "run": _render_run,
    "compile": _render_compile,
}
