"""CLI smoke tests."""

from click.testing import CliRunner
from record_bridge.cli import cli


def test_cli_displays_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    for command in ("generate-config", "generate", "describe", "hydrate"):
        assert command in result.output
    assert "--verbose" in result.output


def test_hydrate_help_lists_its_options() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["hydrate", "-h"])

    assert result.exit_code == 0
    for option in ("--config", "--type", "--input", "--module"):
        assert option in result.output
