"""Tests for help, version and --examples output."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from gqltypes import __version__
from gqltypes.cli import cli


@pytest.mark.usefixtures("project_root")
class TestHelp:
    def test_root_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for name in ("check", "sdl", "graph"):
            assert name in result.output

    def test_no_subcommand_prints_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "Usage:" in result.output

    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    @pytest.mark.parametrize("command", ["check", "sdl", "graph"])
    def test_examples(self, cli_runner: CliRunner, command: str) -> None:
        result = cli_runner.invoke(cli, [command, "--examples"])
        assert result.exit_code == 0
        assert f"Examples for 'cli {command}'" in result.output
        assert f"gqltypes {command}" in result.output

    def test_missing_config_flag(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--config", "nope.toml", "check"])
        assert result.exit_code == 1
        assert "Config file not found" in result.output
