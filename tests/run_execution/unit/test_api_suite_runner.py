"""API suite runner tests."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path

from universal_test_engine.configuration import (
    AuthSettings,
    AuthStrategy,
    BrowserSettings,
    Configuration,
    EnvironmentSettings,
    ExecutionSettings,
    FeatureSettings,
)
from universal_test_engine.host_capabilities import (
    HostTransportError,
    HttpRequest,
    HttpResponse,
)
from universal_test_engine.results_writing import CaseStatus, FailureKind
from universal_test_engine.run_execution import ApiSuiteRunner
from universal_test_engine.suite_ingestion import ApiSuite


class _FakeHttpFactory:
    """Answers requests through `routes`, keyed by (method, url without query)."""

    def __init__(self, routes: dict) -> None:
        self.routes = routes
        self.requests: list[HttpRequest] = []
        self.opened: list[dict] = []

    @contextmanager
    def open(self, *, base_url: str, headers, timeout_ms: int):
        self.opened.append({"base_url": base_url, "headers": dict(headers), "timeout": timeout_ms})
        yield self

    def send(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        answer = self.routes.get((request.method, request.url.split("?")[0]))
        if answer is None:
            return HttpResponse(status=404, body={"error": "no route"})
        if isinstance(answer, Exception):
            raise answer
        return answer

    def urls(self) -> list[str]:
        return [f"{request.method} {request.url}" for request in self.requests]


def _configuration(auth: AuthSettings | None = None, retries: int = 0) -> Configuration:
    return Configuration(
        path=Path("config.yaml"),
        environment=EnvironmentSettings(
            name="test", api_base_url="http://api.test", ui_base_url=""
        ),
        execution=ExecutionSettings(timeout_ms=2000, retries=retries, workers=2),
        auth=auth or AuthSettings(),
        headers={"X-Client": "engine"},
        browser=BrowserSettings(),
        features=FeatureSettings(),
    )


def _case(name: str, **fields) -> dict:
    document = {"name": name, "method": "GET", "endpoint": "/users", "expect": {"status": 200}}
    document.update(fields)
    return document


def _suite(*tests: dict, **fields) -> ApiSuite:
    return ApiSuite.from_document({"suite": "Users", "tests": list(tests), **fields})


def test_setup_token_is_extracted_and_interpolated_into_cases() -> None:
    factory = _FakeHttpFactory(
        {
            ("POST", "/auth/login"): HttpResponse(200, body={"data": {"token": "t-1"}}),
            ("GET", "/api/users"): HttpResponse(200, body=[{"id": 1}]),
            ("DELETE", "/api/session"): HttpResponse(204),
        }
    )
    suite = _suite(
        _case(
            "list users",
            headers={"Authorization": "Bearer {{token}}"},
            query={"page": 1},
            expect={"status": 200, "bodyContains": [{"id": 1}]},
        ),
        baseEndpoint="/api",
        setup={
            "method": "POST",
            "endpoint": "/auth/login",
            "body": {"user": "qa"},
            "extractToken": {"fromPath": "data.token", "as": "token"},
        },
        teardown={"method": "DELETE", "endpoint": "/api/session"},
    )

    result = ApiSuiteRunner(configuration=_configuration(), client_factory=factory).run(suite)

    case = result.cases[0]
    assert case.status is CaseStatus.PASSED, case.message
    assert factory.urls() == ["POST /auth/login", "GET /api/users?page=1", "DELETE /api/session"]
    assert factory.requests[1].headers["Authorization"] == "Bearer t-1"
    assert factory.opened[1]["base_url"] == "http://api.test"
    assert factory.opened[1]["headers"]["X-Client"] == "engine"
    assert [attachment.name for attachment in case.attachments] == ["Request", "Response"]


def test_failed_setup_blocks_every_case_and_teardown_still_runs() -> None:
    factory = _FakeHttpFactory(
        {
            ("POST", "/seed"): HttpResponse(500),
            ("DELETE", "/seed"): HttpResponse(204),
        }
    )
    suite = _suite(
        _case("a"),
        _case("b"),
        setup={"method": "POST", "endpoint": "/seed"},
        teardown={"method": "DELETE", "endpoint": "/seed"},
    )

    result = ApiSuiteRunner(configuration=_configuration(), client_factory=factory).run(suite)

    assert [case.status for case in result.cases] == [CaseStatus.BLOCKED, CaseStatus.BLOCKED]
    assert result.cases[0].failure_kind is FailureKind.SETUP
    assert result.setup_error == "Setup request POST /seed returned status 500"
    assert factory.urls() == ["POST /seed", "DELETE /seed"]


def test_missing_setup_token_blocks_the_suite() -> None:
    factory = _FakeHttpFactory({("POST", "/login"): HttpResponse(200, body={"token": 42})})
    suite = _suite(
        _case("a"),
        setup={
            "method": "POST",
            "endpoint": "/login",
            "extractToken": {"fromPath": "token", "as": "token"},
        },
    )

    result = ApiSuiteRunner(configuration=_configuration(), client_factory=factory).run(suite)

    assert result.cases[0].status is CaseStatus.BLOCKED
    assert "no string at 'token'" in result.cases[0].message


def test_bearer_auth_headers_reach_every_case_request() -> None:
    factory = _FakeHttpFactory(
        {
            ("POST", "http://api.test/auth/token"): HttpResponse(200, body={"access_token": "abc"}),
            ("GET", "/users"): HttpResponse(200),
        }
    )
    auth = AuthSettings(
        strategy=AuthStrategy.BEARER,
        token_endpoint="/auth/token",
        credentials={"username": "qa", "password": "pw"},
    )

    result = ApiSuiteRunner(configuration=_configuration(auth), client_factory=factory).run(
        _suite(_case("list"))
    )

    assert result.cases[0].status is CaseStatus.PASSED
    assert factory.opened[-1]["headers"]["Authorization"] == "Bearer abc"


def test_failed_authentication_blocks_the_suite() -> None:
    factory = _FakeHttpFactory(
        {("POST", "http://api.test/auth/token"): HttpResponse(401)}
    )
    auth = AuthSettings(
        strategy=AuthStrategy.BEARER, token_endpoint="/auth/token", credentials={"u": "p"}
    )

    result = ApiSuiteRunner(configuration=_configuration(auth), client_factory=factory).run(
        _suite(_case("list"))
    )

    assert result.cases[0].status is CaseStatus.BLOCKED
    assert result.cases[0].message == "Authentication failed: Auth request failed: 401"


def test_case_auth_field_sets_a_bearer_header() -> None:
    factory = _FakeHttpFactory({("GET", "/users"): HttpResponse(200)})

    ApiSuiteRunner(configuration=_configuration(), client_factory=factory).run(
        _suite(_case("list", auth="case-token"))
    )

    assert factory.requests[0].headers["Authorization"] == "Bearer case-token"


def test_tags_only_and_skip_select_the_reported_cases() -> None:
    factory = _FakeHttpFactory({("GET", "/users"): HttpResponse(200)})
    suite = _suite(
        _case("smoke one", tags=["smoke"]),
        _case("slow one", tags=["slow"]),
        _case("skipped smoke", tags=["smoke"], skip=True),
    )

    result = ApiSuiteRunner(
        configuration=_configuration(), client_factory=factory, requested_tags=("smoke",)
    ).run(suite)

    assert [(case.name, case.status) for case in result.cases] == [
        ("smoke one", CaseStatus.PASSED),
        ("skipped smoke", CaseStatus.SKIPPED),
    ]
    assert len(factory.requests) == 1


def test_only_cases_restrict_the_suite() -> None:
    factory = _FakeHttpFactory({("GET", "/users"): HttpResponse(200)})

    result = ApiSuiteRunner(configuration=_configuration(), client_factory=factory).run(
        _suite(_case("a"), _case("b", only=True))
    )

    assert [case.name for case in result.cases] == ["b"]


def test_assertion_failure_is_retried_then_reported() -> None:
    factory = _FakeHttpFactory({})

    result = ApiSuiteRunner(configuration=_configuration(retries=1), client_factory=factory).run(
        _suite(_case("missing"))
    )

    case = result.cases[0]
    assert case.status is CaseStatus.FAILED
    assert case.failure_kind is FailureKind.ASSERTION
    assert case.message == "Expected status 200, got 404"
    assert case.attempts == 2
    assert result.has_failures is True


def test_transport_failure_is_a_host_error() -> None:
    factory = _FakeHttpFactory({("GET", "/users"): HostTransportError("connection refused")})

    result = ApiSuiteRunner(configuration=_configuration(), client_factory=factory).run(
        _suite(_case("list", retries=0))
    )

    case = result.cases[0]
    assert case.failure_kind is FailureKind.HOST_ERROR
    assert "connection refused" in case.message
    assert [attachment.name for attachment in case.attachments] == ["Request"]


def test_data_injection_resolves_placeholders() -> None:
    factory = _FakeHttpFactory({("POST", "/users"): HttpResponse(201, body={"name": "Ada"})})

    result = ApiSuiteRunner(configuration=_configuration(), client_factory=factory).run(
        _suite(
            _case(
                "create",
                method="POST",
                body={"name": "{{name}}"},
                dataInjection={"name": "Ada"},
                expect={"status": 201, "bodyPath": [{"path": "name", "equals": "{{name}}"}]},
            )
        )
    )

    assert result.cases[0].status is CaseStatus.PASSED
    assert factory.requests[0].body == {"name": "Ada"}
