"""Run execution use-case service."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from universal_test_engine.configuration import (
    Configuration,
    ConfigurationError,
    load_configuration,
)
from universal_test_engine.host_capabilities import (
    HttpClientFactory,
    HttpxClientFactory,
    PageSessionFactory,
    PlaywrightSessionFactory,
)
from universal_test_engine.results_writing import (
    RunMetadata,
    SuiteResult,
    build_run_summary,
    status_totals,
    write_case_attachments,
    write_results_workbook,
    write_run_summary,
)
from universal_test_engine.schema_management import SuiteKind
from universal_test_engine.suite_ingestion import (
    ApiSuite,
    SuiteValidationError,
    UiSuite,
    load_suites_from_path,
)

from .api_suite_runner import ApiSuiteRunner
from .run_contracts import RunArtifacts, RunOutcome, RunRequest
from .ui_suite_runner import UiSuiteRunner

LOGGER = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = "test-results"


class RunExecutionError(Exception):
    """Raised when a run use case cannot be completed."""


def execute_suite_run(
    request: RunRequest,
    *,
    http_client_factory: HttpClientFactory | None = None,
    page_session_factory: PageSessionFactory | None = None,
) -> RunOutcome:
    """Execute every requested suite and write the run outputs."""
    artifacts = _load_run_artifacts(request)
    configuration = artifacts.configuration
    output_dir = Path(request.output_dir or DEFAULT_OUTPUT_DIR)

    run_start = datetime.now(UTC)
    started = time.perf_counter()
    suite_results: list[SuiteResult] = []

    if artifacts.api_suites:
        api_runner = ApiSuiteRunner(
            configuration=configuration,
            client_factory=http_client_factory or HttpxClientFactory(),
            requested_tags=request.tags,
        )
        suite_results.extend(api_runner.run(suite) for suite in artifacts.api_suites)

    if artifacts.ui_suites:
        ui_runner = UiSuiteRunner(
            configuration=configuration,
            session_factory=page_session_factory or _default_session_factory(configuration),
            screenshots_dir=output_dir / "screenshots",
            requested_tags=request.tags,
        )
        suite_results.extend(ui_runner.run(suite) for suite in artifacts.ui_suites)

    duration_ms = (time.perf_counter() - started) * 1000
    output_path = _resolve_output_path(output_dir, run_start)
    run_metadata = RunMetadata(
        run_start=run_start,
        environment=configuration.environment.name,
        api_base_url=configuration.environment.api_base_url,
        ui_base_url=configuration.environment.ui_base_url,
        output_path=output_path.resolve(),
        duration_ms=duration_ms,
    )
    try:
        write_results_workbook(output_path, suite_results, run_metadata)
        summary_path = write_run_summary(
            output_dir,
            build_run_summary(configuration.environment.name, suite_results, duration_ms),
        )
        attachment_count = write_case_attachments(output_dir, suite_results)
    except OSError as exc:
        raise RunExecutionError(f"Failed to write run outputs: {exc}") from exc
    LOGGER.info("Wrote %d attachments under %s", attachment_count, output_dir)

    return RunOutcome(
        output_path=output_path.resolve(),
        summary_path=summary_path,
        suite_results=tuple(suite_results),
        totals=status_totals(suite_results),
    )


def _resolve_output_path(output_dir: Path, run_start: datetime) -> Path:
    timestamp = run_start.strftime("%Y%m%d-%H%M%S")
    return output_dir / f"results-{timestamp}.xlsx"


def _default_session_factory(configuration: Configuration) -> PageSessionFactory:
    return PlaywrightSessionFactory(
        browser_name=configuration.browser.name,
        headless=configuration.browser.headless,
        action_timeout_ms=configuration.execution.action_timeout_ms,
        navigation_timeout_ms=configuration.execution.navigation_timeout_ms,
    )


def _load_run_artifacts(request: RunRequest) -> RunArtifacts:
    if not request.api_suite_paths and not request.ui_suite_paths:
        raise RunExecutionError("At least one API or UI suite path is required.")
    try:
        configuration = load_configuration(request.config_path)
        api_suites = _load_suites(request.api_suite_paths, SuiteKind.API)
        ui_suites = _load_suites(request.ui_suite_paths, SuiteKind.UI)
    except (ConfigurationError, SuiteValidationError, OSError) as exc:
        raise RunExecutionError(str(exc)) from exc

    if api_suites and not configuration.environment.api_base_url:
        raise RunExecutionError("API suites require environment.api_base_url.")
    if ui_suites and not configuration.environment.ui_base_url:
        raise RunExecutionError("UI suites require environment.ui_base_url.")
    return RunArtifacts(
        configuration=configuration,
        api_suites=tuple(api_suites),  # type: ignore[arg-type]
        ui_suites=tuple(ui_suites),  # type: ignore[arg-type]
    )


def _load_suites(paths: Iterable[str], kind: SuiteKind) -> list[ApiSuite | UiSuite]:
    suites: list[ApiSuite | UiSuite] = []
    for path in paths:
        suites.extend(load_suites_from_path(path, kind))
    return suites
