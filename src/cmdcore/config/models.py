"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, cmdcore.toml only contains
overrides and the command declarations.
"""

from __future__ import annotations

from pydantic import BaseModel

# --- cmdcore.toml sections ---


class InterpreterConfig(BaseModel):
    """[interpreter] section."""

    model_config = {"frozen": True}

    warn_trailing: bool = True


class CommandConfig(BaseModel):
    """One ``[commands.<keyword>]`` table."""

    model_config = {"frozen": True}

    description: str = ""
    template: str = ""
    action: str = "echo"

