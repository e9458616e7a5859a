"""Tests for the check command group."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from archctl.cli import cli


def invoke(cli_runner: CliRunner, go_project: Path, *args: str):
    return cli_runner.invoke(cli, ["-C", str(go_project), *args])


@pytest.mark.usefixtures("patched_runner")
class TestCheckCommands:
    def test_layer_pass(self, cli_runner: CliRunner, go_project: Path) -> None:
        result = invoke(cli_runner, go_project, "check", "layer", "domain", "user")
        assert result.exit_code == 0
        assert "✅ domain layer in user has no illegal dependencies" in result.stdout

    def test_layer_violation_exits_1(
        self, cli_runner: CliRunner, go_project: Path, patched_runner
    ) -> None:
        patched_runner.returncode = 1
        patched_runner.output = "--- FAIL: TestLayerDependencies"
        result = invoke(cli_runner, go_project, "check", "layer", "domain", "order")
        assert result.exit_code == 1
        assert "❌ domain layer violations found:" in result.stdout
        assert "--- FAIL: TestLayerDependencies" in result.stdout

    def test_invalid_layer_is_error(
        self, cli_runner: CliRunner, go_project: Path, patched_runner
    ) -> None:
        result = invoke(cli_runner, go_project, "check", "layer", "admin", "user")
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "layer must be one of {domain, application, infrastructure}" in result.stderr
        assert patched_runner.calls == []

    def test_isolation(self, cli_runner: CliRunner, go_project: Path, patched_runner) -> None:
        result = invoke(cli_runner, go_project, "check", "isolation", "order", "user")
        assert result.exit_code == 0
        assert "order domain is properly isolated from user" in result.stdout
        assert patched_runner.calls[0].cwd == go_project.resolve()

    def test_naming_json(self, cli_runner: CliRunner, go_project: Path) -> None:
        result = invoke(cli_runner, go_project, "--json", "check", "naming", "repository")
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["op"] == "check_naming_conventions"
        assert data["is_error"] is False
        assert data["data"]["passed"] is True

    def test_all(self, cli_runner: CliRunner, go_project: Path, patched_runner) -> None:
        result = invoke(cli_runner, go_project, "check", "all")
        assert result.exit_code == 0
        assert "All architecture tests passed" in result.stdout
        assert patched_runner.calls[0].argv[-1] == "./test/architecture/..."

    def test_timeout_from_config(
        self, cli_runner: CliRunner, go_project: Path, patched_runner
    ) -> None:
        (go_project / "archctl.toml").write_text("[runner]\ntimeout_seconds = 7\n")
        invoke(cli_runner, go_project, "check", "naming", "handler")
        assert patched_runner.calls[0].timeout == 7
