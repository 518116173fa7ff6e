"""Command line interface entry point."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

import click

from universal_test_engine.configuration import (
    DEFAULT_CONFIG_FILENAME,
    write_placeholder_configuration,
)
from universal_test_engine.document_values import MISSING, to_jsonable
from universal_test_engine.results_writing import CaseStatus
from universal_test_engine.run_execution import RunExecutionError, RunRequest, execute_suite_run
from universal_test_engine.schema_management import SuiteKind
from universal_test_engine.suite_ingestion import (
    SuiteValidationError,
    discover_suite_files,
    load_suite_document,
)
from universal_test_engine.test_data_generation import (
    BoundaryCase,
    FieldSpecError,
    generate_boundary_cases,
    generate_negative_payloads,
    load_field_specs,
)


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="universal-test-engine")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Declarative API and UI test engine."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML environment configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML environment configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="validate")
@click.option(
    "--api-suite",
    "api_suites",
    multiple=True,
    type=click.Path(path_type=str),
    help="API suite file or directory of *.json suites (repeatable)",
)
@click.option(
    "--ui-suite",
    "ui_suites",
    multiple=True,
    type=click.Path(path_type=str),
    help="UI suite file or directory of *.json suites (repeatable)",
)
@click.pass_context
def validate(ctx: click.Context, api_suites: tuple[str, ...], ui_suites: tuple[str, ...]) -> None:
    """Validate suite documents against their schemas without running them."""
    if not api_suites and not ui_suites:
        raise CliError("Provide at least one --api-suite or --ui-suite path.")
    failures = 0
    for kind, paths in ((SuiteKind.API, api_suites), (SuiteKind.UI, ui_suites)):
        for path in paths:
            failures += _validate_path(path, kind)
    if failures:
        ctx.exit(1)


@cli.command(name="run")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Environment configuration file, or a directory selected through TEST_ENV",
)
@click.option(
    "--api-suite",
    "api_suites",
    multiple=True,
    type=click.Path(path_type=str),
    help="API suite file or directory of *.json suites (repeatable)",
)
@click.option(
    "--ui-suite",
    "ui_suites",
    multiple=True,
    type=click.Path(path_type=str),
    help="UI suite file or directory of *.json suites (repeatable)",
)
@click.option(
    "--tag",
    "tags",
    multiple=True,
    help="Only run tests declaring this tag (repeatable, any tag matches)",
)
@click.option(
    "--output-dir",
    "output_dir",
    required=False,
    type=click.Path(path_type=str),
    help="Directory for the results workbook, summary.json and attachments",
)
@click.pass_context
def run_tests(
    ctx: click.Context,
    config_path: str,
    api_suites: tuple[str, ...],
    ui_suites: tuple[str, ...],
    tags: tuple[str, ...],
    output_dir: str | None,
) -> None:
    """Execute the declared API and UI suites."""
    try:
        outcome = execute_suite_run(
            RunRequest(
                config_path=config_path,
                api_suite_paths=api_suites,
                ui_suite_paths=ui_suites,
                tags=tags,
                output_dir=output_dir,
            )
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    click.echo(
        ", ".join(f"{status.value.lower()}: {outcome.totals[status]}" for status in CaseStatus),
        err=True,
    )
    click.echo(str(outcome.output_path))
    if outcome.has_failures:
        ctx.exit(1)


@cli.command(name="boundaries")
@click.option(
    "--fields",
    "fields_path",
    required=True,
    type=click.Path(path_type=str),
    help="YAML/JSON list of field specs",
)
@click.option(
    "--payload",
    "payload_path",
    required=False,
    type=click.Path(path_type=str),
    help="JSON file with a valid payload; prints negative payloads derived from it",
)
def boundaries(fields_path: str, payload_path: str | None) -> None:
    """Print boundary values per field, or negative payloads, as JSON."""
    try:
        specs = load_field_specs(fields_path)
        if payload_path is None:
            output: list[dict[str, object]] = [
                _boundary_case_entry(case)
                for spec in specs
                for case in generate_boundary_cases(spec)
            ]
        else:
            payload = _read_payload(payload_path)
            output = [
                {
                    "description": negative.description,
                    "field": negative.field,
                    "payload": to_jsonable(negative.payload),
                }
                for negative in generate_negative_payloads(payload, specs)
            ]
    except (FieldSpecError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(json.dumps(output, indent=2, ensure_ascii=False, allow_nan=False))


def _validate_path(path: str, kind: SuiteKind) -> int:
    failures = 0
    suite_files: Sequence[Path] = discover_suite_files(path)
    if not suite_files:
        click.echo(f"FAILED {path}\n  no *.json suite files found")
        return 1
    for suite_file in suite_files:
        try:
            load_suite_document(suite_file, kind)
        except SuiteValidationError as exc:
            failures += 1
            click.echo(f"FAILED {suite_file}")
            for issue in exc.issues:
                click.echo(f"  {issue.render()}")
            continue
        click.echo(f"OK {suite_file}")
    return failures


def _boundary_case_entry(case: BoundaryCase) -> dict[str, object]:
    entry: dict[str, object] = {
        "description": case.description,
        "field": case.field,
        "value": to_jsonable(case.value),
        "expectValid": case.expect_valid,
    }
    if case.value is MISSING:
        entry["omitted"] = True
    return entry


def _read_payload(payload_path: str) -> dict:
    text = Path(payload_path).read_text(encoding="utf-8")
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CliError(f"Payload file is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise CliError("Payload file must contain a JSON object.")
    return payload


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        exit_code = cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return exit_code if isinstance(exit_code, int) else 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
