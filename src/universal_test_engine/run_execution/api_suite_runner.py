"""Execution of API suites against an HTTP capability."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping, Sequence
from contextlib import AbstractContextManager
from types import MappingProxyType

from universal_test_engine.authentication import AuthenticationError, resolve_auth
from universal_test_engine.configuration import AuthStrategy, Configuration
from universal_test_engine.document_values import deep_get, interpolate, merge_variables
from universal_test_engine.host_capabilities import (
    HostError,
    HttpClient,
    HttpClientFactory,
    HttpRequest,
    build_url,
)
from universal_test_engine.matching_validation import evaluate_expectation
from universal_test_engine.results_writing import CaseDiagnostics, CaseResult, SuiteResult
from universal_test_engine.suite_ingestion import (
    ApiSetupCall,
    ApiSuite,
    ApiTestCase,
    filter_by_tags,
    select_runnable,
)

from .case_outcomes import (
    AttemptOutcome,
    blocked_result,
    run_attempts,
    run_cases_in_parallel,
    skipped_result,
)

LOGGER = logging.getLogger(__name__)


class SuiteSetupError(Exception):
    """Raised when suite setup fails; every case of the suite is blocked."""


class ApiSuiteRunner:  # pylint: disable=too-few-public-methods
    """Runs the selected cases of API suites, setup first and teardown last."""

    def __init__(
        self,
        *,
        configuration: Configuration,
        client_factory: HttpClientFactory,
        requested_tags: Sequence[str] = (),
    ) -> None:
        self._configuration = configuration
        self._client_factory = client_factory
        self._requested_tags = tuple(requested_tags)

    def run(self, suite: ApiSuite) -> SuiteResult:
        started = time.perf_counter()
        selected = select_runnable(filter_by_tags(suite.tests, self._requested_tags))
        LOGGER.info(
            "Running API suite %s (%d of %d tests)", suite.suite, len(selected), len(suite.tests)
        )

        setup_error: str | None = None
        variables: Mapping[str, str] = MappingProxyType({})
        auth_headers: Mapping[str, str] = {}
        try:
            auth_headers = self._resolve_auth_headers()
            variables = self._run_setup(suite.setup, auth_headers)
        except SuiteSetupError as exc:
            setup_error = str(exc)
            LOGGER.warning("Setup of API suite %s failed: %s", suite.suite, setup_error)
            cases = tuple(
                blocked_result(suite.suite, case.name, case.tags, setup_error) for case in selected
            )
        else:
            cases = run_cases_in_parallel(
                selected,
                lambda case: self._run_case(suite, case, variables, auth_headers),
                workers=self._configuration.execution.workers,
            )
        self._run_teardown(suite, variables, auth_headers)

        return SuiteResult(
            suite=suite.suite,
            kind=suite.kind.value,
            cases=cases,
            source_path=suite.source_path,
            duration_ms=(time.perf_counter() - started) * 1000,
            setup_error=setup_error,
        )

    def _resolve_auth_headers(self) -> Mapping[str, str]:
        auth = self._configuration.auth
        if auth.strategy is AuthStrategy.NONE:
            return {}
        base_url = self._configuration.environment.api_base_url
        try:
            with self._open_client() as client:
                return resolve_auth(auth, base_url, client).headers
        except (AuthenticationError, HostError) as exc:
            raise SuiteSetupError(f"Authentication failed: {exc}") from exc

    def _run_setup(
        self, setup: ApiSetupCall | None, auth_headers: Mapping[str, str]
    ) -> Mapping[str, str]:
        variables: dict[str, str] = {}
        if setup is None:
            return MappingProxyType(variables)
        try:
            with self._open_client(auth_headers) as client:
                response = client.send(self._suite_request(setup, variables))
        except HostError as exc:
            raise SuiteSetupError(f"Setup request failed: {exc}") from exc
        if response.status >= 400:
            raise SuiteSetupError(
                f"Setup request {setup.method} {setup.endpoint} returned status {response.status}"
            )
        if setup.extract_token is not None:
            token = deep_get(response.body, setup.extract_token.from_path)
            if not isinstance(token, str):
                raise SuiteSetupError(
                    f"Setup response has no string at '{setup.extract_token.from_path}'"
                )
            variables[setup.extract_token.as_name] = token
            LOGGER.debug("Setup stored variable %s", setup.extract_token.as_name)
        return MappingProxyType(variables)

    def _run_teardown(
        self, suite: ApiSuite, variables: Mapping[str, str], auth_headers: Mapping[str, str]
    ) -> None:
        if suite.teardown is None:
            return
        try:
            with self._open_client(auth_headers) as client:
                response = client.send(self._suite_request(suite.teardown, variables))
        except HostError as exc:
            LOGGER.warning("Teardown of API suite %s failed: %s", suite.suite, exc)
            return
        if response.status >= 400:
            LOGGER.warning(
                "Teardown of API suite %s returned status %d", suite.suite, response.status
            )

    def _suite_request(self, call: ApiSetupCall, variables: Mapping[str, str]) -> HttpRequest:
        resolved = interpolate(
            {"endpoint": call.endpoint, "body": call.body, "headers": dict(call.headers)},
            variables,
        )
        return HttpRequest(
            method=call.method,
            url=build_url("", resolved["endpoint"]),  # type: ignore[index]
            headers=resolved["headers"],  # type: ignore[index]
            body=resolved["body"],  # type: ignore[index]
            timeout_ms=self._configuration.execution.timeout_ms,
        )

    def _run_case(
        self,
        suite: ApiSuite,
        case: ApiTestCase,
        variables: Mapping[str, str],
        auth_headers: Mapping[str, str],
    ) -> CaseResult:
        if case.skip:
            return skipped_result(suite.suite, case.name, case.tags)
        retries = (
            case.retries if case.retries is not None else self._configuration.execution.retries
        )
        return run_attempts(
            suite.suite,
            case.name,
            case.tags,
            retries,
            lambda: self._attempt(suite, case, variables, auth_headers),
        )

    def _attempt(
        self,
        suite: ApiSuite,
        case: ApiTestCase,
        variables: Mapping[str, str],
        auth_headers: Mapping[str, str],
    ) -> AttemptOutcome:
        diagnostics = CaseDiagnostics()
        try:
            local_variables = merge_variables(variables, case.data_injection)
            document = interpolate(case.document, local_variables)
            resolved = ApiTestCase.from_document(document)  # type: ignore[arg-type]
            timeout_ms = resolved.timeout_ms or self._configuration.execution.timeout_ms
            request = self._case_request(suite, resolved, timeout_ms)
            diagnostics.attach_json("Request", request.to_diagnostic())
            with self._open_client(auth_headers, timeout_ms) as client:
                response = client.send(request)
            diagnostics.attach_json("Response", response.to_diagnostic())
            report = evaluate_expectation(resolved.expect, response)
            if not report.passed:
                raise AssertionError(report.failure_message())
        except Exception as exc:  # pylint: disable=broad-exception-caught
            return AttemptOutcome.failure(exc, diagnostics.attachments)
        return AttemptOutcome.success(diagnostics.attachments)

    @staticmethod
    def _case_request(suite: ApiSuite, case: ApiTestCase, timeout_ms: int) -> HttpRequest:
        headers = dict(case.headers)
        if case.auth:
            headers["Authorization"] = f"Bearer {case.auth}"
        return HttpRequest(
            method=case.method,
            url=build_url("", f"{suite.base_endpoint}{case.endpoint}", case.query),
            headers=headers,
            body=case.body,
            timeout_ms=timeout_ms,
        )

    def _open_client(
        self, extra_headers: Mapping[str, str] | None = None, timeout_ms: int | None = None
    ) -> AbstractContextManager[HttpClient]:
        headers = {**self._configuration.headers, **(extra_headers or {})}
        return self._client_factory.open(
            base_url=self._configuration.environment.api_base_url,
            headers=headers,
            timeout_ms=timeout_ms or self._configuration.execution.timeout_ms,
        )
