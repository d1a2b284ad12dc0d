"""Rich Console factory and theme for cmdcore output.

Consoles render into a StringIO buffer so formatters keep a plain
``-> str`` contract. In non-TTY environments (tests, pipes) Rich drops
color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

CMD_THEME = Theme(
    {
        "cmd.ok": "bold green",
        "cmd.error": "bold red",
        "cmd.code": "red",
        "cmd.op": "bold cyan",
        "cmd.key": "dim",
        "cmd.keyword": "bold blue",
        "cmd.type.string": "green",
        "cmd.type.int": "cyan",
        "cmd.type.float": "magenta",
        "cmd.type.char": "yellow",
        "cmd.type.array": "bold",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=CMD_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_type(type_name: str | None) -> str:
    """Rich style for a primitive type name (``"array"`` included)."""
    style = f"cmd.type.{type_name}"
    return style if type_name and style in CMD_THEME.styles else ""
