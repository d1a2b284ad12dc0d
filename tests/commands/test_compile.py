"""Tests for the compile CLI command."""

from __future__ import annotations

import json

from click.testing import CliRunner

from cmdcore.cli import cli


class TestCompileCommand:
    def test_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "compile", "&int n &array<n,string> items"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["op"] == "compile"
        assert [d["name"] for d in data["data"]["definitions"]] == ["n", "items"]

    def test_human(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["compile", "&string s &array<3,float> xs"])
        assert result.exit_code == 0
        assert "2 argument(s)" in result.output
        assert "array<float>" in result.output

    def test_invalid_template(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "compile", "&bool flag"])
        assert result.exit_code == 1
        assert "InvalidTemplate: Unknown data type 'bool' for argument 'flag'." in result.output

    def test_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["compile", "--examples"])
        assert result.exit_code == 0
        assert "Examples for" in result.output
        assert "&array<3> words" in result.output
