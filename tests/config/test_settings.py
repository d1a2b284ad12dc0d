"""Tests for CmdSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from cmdcore.config.settings import CmdSettings


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = CmdSettings.from_cli(start=tmp_path)
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.verbose is False
        assert settings.interpreter.warn_trailing is True
        assert settings.commands == {}

    def test_frozen(self, tmp_path: Path) -> None:
        settings = CmdSettings.from_cli(start=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_commands(self, tmp_path: Path) -> None:
        toml = tmp_path / "cmdcore.toml"
        toml.write_text(
            '[commands.greet]\ndescription = "Hi"\ntemplate = "&int age"\n'
            '[commands.sum]\ntemplate = "&array<2,int> pair"\naction = "sum"\n'
        )
        settings = CmdSettings.from_cli(start=tmp_path)
        assert settings.config_path == toml.resolve()
        assert settings.commands["greet"].template == "&int age"
        assert settings.commands["greet"].action == "echo"
        assert settings.commands["sum"].action == "sum"
        assert settings.commands["sum"].description == ""

    def test_sparse_override(self, tmp_path: Path) -> None:
        (tmp_path / "cmdcore.toml").write_text("[interpreter]\nwarn_trailing = false\n")
        settings = CmdSettings.from_cli(start=tmp_path)
        assert settings.interpreter.warn_trailing is False
        assert settings.commands == {}

    def test_discovered_from_subdirectory(self, tmp_path: Path) -> None:
        (tmp_path / "cmdcore.toml").write_text("quiet = true\n")
        deep = tmp_path / "a" / "b"
        deep.mkdir(parents=True)
        settings = CmdSettings.from_cli(start=deep)
        assert settings.quiet is True

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('[commands.x]\ntemplate = "&char c"\n')
        settings = CmdSettings.from_cli(config_path=str(custom), start=tmp_path)
        assert settings.config_path == custom
        assert "x" in settings.commands

    def test_missing_explicit_path_ignored(self, tmp_path: Path) -> None:
        settings = CmdSettings.from_cli(config_path=str(tmp_path / "none.toml"), start=tmp_path)
        assert settings.config_path is None

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "cmdcore.toml").write_text("[commands\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            CmdSettings.from_cli(start=tmp_path)


class TestPriority:
    def test_cli_flags_override_toml(self, tmp_path: Path) -> None:
        (tmp_path / "cmdcore.toml").write_text("verbose = true\n")
        settings = CmdSettings.from_cli(start=tmp_path, verbose=False)
        assert settings.verbose is False

    def test_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CMDCORE_QUIET", "true")
        settings = CmdSettings.from_cli(start=tmp_path)
        assert settings.quiet is True

    def test_nested_env_var_beats_toml(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "cmdcore.toml").write_text("[interpreter]\nwarn_trailing = true\n")
        monkeypatch.setenv("CMDCORE_INTERPRETER__WARN_TRAILING", "false")
        settings = CmdSettings.from_cli(start=tmp_path)
        assert settings.interpreter.warn_trailing is False
