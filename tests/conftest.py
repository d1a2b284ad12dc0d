"""Shared pytest fixtures and test helpers for cmdcore tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from cmdcore.domain.template import compile_template
from cmdcore.domain.types import ArgumentBindings
from cmdcore.services.dispatcher import Dispatcher
from cmdcore.services.registry import CommandRegistry

SAMPLE_TOML = """\
[commands.greet]
description = "Greet someone by age"
template = "&int age"

[commands.sum]
description = "Add two integers"
template = "&array<2,int> pair"
action = "sum"

[commands.list]
description = "List n items"
template = "&int n &array<n,string> items"
action = "count"
"""


class Recorder:
    """Action double that records every bindings map it receives."""

    def __init__(self, result: Any = None) -> None:
        self.calls: list[ArgumentBindings] = []
        self.result = result

    def __call__(self, args: ArgumentBindings) -> Any:
        self.calls.append(args)
        return self.result


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo configure_logging() side effects between tests."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("cmdcore")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)


@pytest.fixture(autouse=True)
def _fresh_caches(monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate tests from compile caches and the caller's environment."""
    compile_template.cache_clear()
    monkeypatch.delenv("CMDCORE_CONFIG", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def registry(recorder: Recorder) -> CommandRegistry:
    """Registry with the reference commands, all wired to *recorder*."""
    reg = CommandRegistry()
    reg.register("greet", "Greet someone by age", "&int age", recorder)
    reg.register("sum", "Add two integers", "&array<2,int> pair", recorder)
    reg.register("list", "List n items", "&int n &array<n,string> items", recorder)
    return reg


@pytest.fixture
def dispatcher(registry: CommandRegistry) -> Dispatcher:
    return Dispatcher(registry)


@pytest.fixture
def config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """CWD set to a temp directory holding the sample cmdcore.toml.

    Use via ``@pytest.mark.usefixtures("config_dir")`` on CLI test classes.
    """
    (tmp_path / "cmdcore.toml").write_text(SAMPLE_TOML, encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path
