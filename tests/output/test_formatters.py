"""Tests for format_result and OutputSettings."""

import json

from cmdcore.domain.errors import CommandNotFound
from cmdcore.output.formatters import OutputSettings, format_result
from cmdcore.services.result import ServiceResult


def _ok(**data: object) -> ServiceResult:
    return ServiceResult(ok=True, op="run", data=dict(data))


def _err() -> ServiceResult:
    return ServiceResult.failure("run", CommandNotFound("Command 'x' not found.", keyword="x"))


class TestOutputSettings:
    def test_defaults(self) -> None:
        s = OutputSettings()
        assert s.json_output is False
        assert s.quiet is False
        assert s.verbose is False


class TestJson:
    def test_success(self) -> None:
        output = format_result(
            _ok(keyword="greet", bindings={"age": 30}),
            settings=OutputSettings(json_output=True),
        )
        data = json.loads(output)
        assert data["ok"] is True
        assert data["data"]["bindings"] == {"age": 30}

    def test_error(self) -> None:
        data = json.loads(format_result(_err(), settings=OutputSettings(json_output=True)))
        assert data["ok"] is False
        assert data["error"]["code"] == "CommandNotFound"

    def test_json_beats_quiet(self) -> None:
        output = format_result(_ok(), settings=OutputSettings(json_output=True, quiet=True))
        assert output.startswith("{")


class TestQuiet:
    def test_success_without_output(self) -> None:
        assert format_result(_ok(), settings=OutputSettings(quiet=True)) == "OK: run"

    def test_success_prints_output_only(self) -> None:
        output = format_result(_ok(output=[1, 2]), settings=OutputSettings(quiet=True))
        assert output == "[1, 2]"

    def test_error(self) -> None:
        output = format_result(_err(), settings=OutputSettings(quiet=True))
        assert output == "ERROR: run — CommandNotFound: Command 'x' not found."


class TestDefault:
    def test_success(self) -> None:
        output = format_result(_ok(keyword="greet", bindings={"age": 30}))
        assert "OK" in output
        assert "greet" in output

    def test_error(self) -> None:
        output = format_result(_err())
        assert "ERROR" in output
        assert "Command 'x' not found." in output
