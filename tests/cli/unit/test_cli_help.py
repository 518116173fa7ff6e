"""CLI smoke tests."""

from click.testing import CliRunner
from universal_test_engine.cli import cli


def test_cli_displays_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    for command in ("generate-config", "validate", "run", "boundaries"):
        assert command in result.output


def test_run_help_lists_suite_and_tag_options() -> None:
    result = CliRunner().invoke(cli, ["run", "--help"])

    assert result.exit_code == 0
    assert "--api-suite" in result.output
    assert "--ui-suite" in result.output
    assert "--tag" in result.output
    assert "--output-dir" in result.output
