"""Execution of UI suites against a page capability.

Every case attempt opens its own page session, runs the suite setup action,
navigates, performs its steps, checks its snapshot and finally runs the suite
teardown action before the session is closed.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from pathlib import Path

from universal_test_engine.configuration import Configuration
from universal_test_engine.document_values import interpolate, merge_variables
from universal_test_engine.host_capabilities import PageCapability, PageSessionFactory
from universal_test_engine.results_writing import CaseDiagnostics, CaseResult, SuiteResult
from universal_test_engine.suite_ingestion import (
    UiSuite,
    UiTestCase,
    filter_by_tags,
    select_runnable,
)
from universal_test_engine.ui_dispatch import (
    DispatchContext,
    execute_action,
    run_steps,
    verify_snapshot,
)

from .case_outcomes import (
    AttemptOutcome,
    describe_failure,
    run_attempts,
    run_cases_in_parallel,
    skipped_result,
)

LOGGER = logging.getLogger(__name__)

FAILURE_SCREENSHOT_NAME = "failure-screenshot"


class UiSuiteRunner:  # pylint: disable=too-few-public-methods
    """Runs the selected cases of UI suites, one page session per attempt."""

    def __init__(
        self,
        *,
        configuration: Configuration,
        session_factory: PageSessionFactory,
        screenshots_dir: Path,
        requested_tags: Sequence[str] = (),
    ) -> None:
        self._configuration = configuration
        self._session_factory = session_factory
        self._screenshots_dir = screenshots_dir
        self._requested_tags = tuple(requested_tags)

    def run(self, suite: UiSuite) -> SuiteResult:
        started = time.perf_counter()
        selected = select_runnable(filter_by_tags(suite.tests, self._requested_tags))
        LOGGER.info(
            "Running UI suite %s (%d of %d tests)", suite.suite, len(selected), len(suite.tests)
        )
        cases = run_cases_in_parallel(
            selected,
            lambda case: self._run_case(suite, case),
            workers=self._configuration.execution.workers,
        )
        return SuiteResult(
            suite=suite.suite,
            kind=suite.kind.value,
            cases=cases,
            source_path=suite.source_path,
            duration_ms=(time.perf_counter() - started) * 1000,
        )

    def _run_case(self, suite: UiSuite, case: UiTestCase) -> CaseResult:
        if case.skip:
            return skipped_result(suite.suite, case.name, case.tags)
        retries = (
            case.retries if case.retries is not None else self._configuration.execution.retries
        )
        return run_attempts(
            suite.suite, case.name, case.tags, retries, lambda: self._attempt(suite, case)
        )

    def _attempt(self, suite: UiSuite, case: UiTestCase) -> AttemptOutcome:
        diagnostics = CaseDiagnostics()
        try:
            document = interpolate(case.document, merge_variables({}, case.data_injection))
            resolved = UiTestCase.from_document(document)  # type: ignore[arg-type]
            context = self._dispatch_context(resolved, diagnostics)
            with self._session_factory.open(
                base_url=self._configuration.environment.ui_base_url,
                headers=self._configuration.headers,
            ) as page:
                failure = self._drive(page, suite, resolved, context)
                if failure is not None and self._configuration.features.screenshots:
                    _attach_failure_screenshot(page, diagnostics)
                self._run_teardown(page, suite, context)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            return AttemptOutcome.failure(exc, diagnostics.attachments)
        if failure is None:
            return AttemptOutcome.success(diagnostics.attachments)
        return failure.with_attachments(diagnostics.attachments)

    def _dispatch_context(self, case: UiTestCase, diagnostics: CaseDiagnostics) -> DispatchContext:
        timeout_ms = case.timeout_ms or self._configuration.execution.timeout_ms
        features = self._configuration.features
        return DispatchContext(
            diagnostics=diagnostics,
            screenshots_dir=self._screenshots_dir,
            snapshot_dir=features.snapshot_dir,
            max_diff_pixel_ratio=features.max_diff_pixel_ratio,
            deadline=time.monotonic() + timeout_ms / 1000,
            timeout_ms=timeout_ms,
        )

    def _drive(
        self,
        page: PageCapability,
        suite: UiSuite,
        case: UiTestCase,
        context: DispatchContext,
    ) -> AttemptOutcome | None:
        """Run one case on an open page; return the failure, or None when it passed."""
        # pylint: disable=broad-exception-caught
        if suite.setup is not None:
            try:
                execute_action(page, suite.setup, context)
            except Exception as exc:
                return AttemptOutcome.blocked(f"Setup action failed: {describe_failure(exc)}")
        try:
            if case.viewport is not None:
                page.set_viewport(case.viewport.width, case.viewport.height)
            if case.url:
                page.goto(f"{suite.base_path}{case.url}", {})
        except Exception as exc:
            return AttemptOutcome.failure(exc, prefix="Navigation")

        failed_step = run_steps(page, case.steps, context).failed_step
        if failed_step is not None and failed_step.error is not None:
            return AttemptOutcome.failure(failed_step.error, prefix=failed_step.description)

        if case.snapshot is not None and self._configuration.features.snapshots:
            try:
                verify_snapshot(page, case.snapshot, context)
            except Exception as exc:
                return AttemptOutcome.failure(exc, prefix=f"Snapshot {case.snapshot.name}")
        return None

    @staticmethod
    def _run_teardown(page: PageCapability, suite: UiSuite, context: DispatchContext) -> None:
        if suite.teardown is None:
            return
        try:
            execute_action(page, suite.teardown, context)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            LOGGER.warning("Teardown of UI suite %s failed: %s", suite.suite, exc)


def _attach_failure_screenshot(page: PageCapability, diagnostics: CaseDiagnostics) -> None:
    try:
        diagnostics.attach_binary(FAILURE_SCREENSHOT_NAME, page.screenshot(full_page=True))
    except Exception as exc:  # pylint: disable=broad-exception-caught
        LOGGER.warning("Could not capture failure screenshot: %s", exc)
