"""Suite document loading tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from universal_test_engine.document_values import MISSING
from universal_test_engine.schema_management import SuiteKind
from universal_test_engine.suite_ingestion import (
    SuiteValidationError,
    discover_suite_files,
    load_api_suite,
    load_suites_from_path,
    load_ui_suite,
)


def _write_json(path: Path, document: object) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


def _api_document() -> dict:
    return {
        "suite": "Users",
        "tags": ["users"],
        "baseEndpoint": "/api",
        "setup": {
            "method": "POST",
            "endpoint": "/auth/login",
            "body": {"user": "qa"},
            "extractToken": {"fromPath": "data.token", "as": "token"},
        },
        "tests": [
            {
                "name": "lists users",
                "method": "GET",
                "endpoint": "/users",
                "query": {"page": 1},
                "tags": ["smoke"],
                "expect": {
                    "status": 200,
                    "bodyExact": None,
                    "bodyPath": [{"path": "data", "type": "object", "equals": None}],
                },
                "retries": 2,
            }
        ],
    }


def test_load_api_suite_builds_typed_entities(tmp_path: Path) -> None:
    suite_path = _write_json(tmp_path / "users.json", _api_document())

    suite = load_api_suite(suite_path)

    assert suite.suite == "Users"
    assert suite.base_endpoint == "/api"
    assert suite.source_path == suite_path
    assert suite.setup is not None
    assert suite.setup.extract_token is not None
    assert suite.setup.extract_token.as_name == "token"
    case = suite.tests[0]
    assert case.tags == ("smoke",)
    assert case.retries == 2
    assert case.query == {"page": 1}
    assert case.expect.status == 200
    assert case.expect.body_exact is None
    assert case.expect.body_contains is MISSING
    assert case.expect.body_path[0].equals is None
    assert case.expect.body_path[0].contains is MISSING
    assert case.document["endpoint"] == "/users"


def test_load_ui_suite_builds_steps_and_snapshot(tmp_path: Path) -> None:
    suite_path = _write_json(
        tmp_path / "login.json",
        {
            "suite": "Login",
            "basePath": "/app",
            "tests": [
                {
                    "name": "logs in",
                    "url": "/login",
                    "viewport": {"width": 800, "height": 600},
                    "steps": [
                        {"action": "fill", "selector": "#user", "value": "qa"},
                        {"action": "click", "selector": "button", "description": "submit"},
                    ],
                    "snapshot": {"name": "dashboard"},
                }
            ],
        },
    )

    suite = load_ui_suite(suite_path)

    case = suite.tests[0]
    assert suite.base_path == "/app"
    assert [step.action for step in case.steps] == ["fill", "click"]
    assert case.steps[1].description == "submit"
    assert case.viewport is not None and case.viewport.width == 800
    assert case.snapshot is not None
    assert case.snapshot.full_page is True


def test_schema_violations_are_all_reported(tmp_path: Path) -> None:
    suite_path = _write_json(
        tmp_path / "broken.json",
        {
            "suite": "Broken",
            "tests": [
                {"name": "no method", "endpoint": "/x", "expect": {}},
                {"name": "bad status", "method": "GET", "endpoint": "/x", "expect": {"status": 42}},
            ],
        },
    )

    with pytest.raises(SuiteValidationError) as exc_info:
        load_api_suite(suite_path)

    issues = exc_info.value.issues
    assert len(issues) == 2
    assert {issue.instance_path for issue in issues} == {"/tests/0", "/tests/1/expect/status"}
    assert "Invalid suite document" in str(exc_info.value)


def test_unknown_ui_action_is_rejected_at_load(tmp_path: Path) -> None:
    suite_path = _write_json(
        tmp_path / "ui.json",
        {"suite": "UI", "tests": [{"name": "x", "steps": [{"action": "teleport"}]}]},
    )

    with pytest.raises(SuiteValidationError) as exc_info:
        load_ui_suite(suite_path)

    assert exc_info.value.issues[0].instance_path == "/tests/0/steps/0/action"


def test_malformed_json_reports_position(tmp_path: Path) -> None:
    suite_path = tmp_path / "bad.json"
    suite_path.write_text('{"suite": "x",', encoding="utf-8")

    with pytest.raises(SuiteValidationError) as exc_info:
        load_api_suite(suite_path)

    issue = exc_info.value.issues[0]
    assert issue.message.startswith("malformed JSON")
    assert issue.params["line"] == 1


def test_missing_file_is_a_validation_error(tmp_path: Path) -> None:
    with pytest.raises(SuiteValidationError) as exc_info:
        load_api_suite(tmp_path / "absent.json")

    assert exc_info.value.issues[0].message == "suite file not found"


def test_directories_expand_to_sorted_json_files(tmp_path: Path) -> None:
    second = _write_json(tmp_path / "suites" / "b.json", _api_document())
    first = _write_json(tmp_path / "suites" / "nested" / "a.json", _api_document())
    (tmp_path / "suites" / "notes.txt").write_text("ignored", encoding="utf-8")

    files = discover_suite_files(tmp_path / "suites")
    suites = load_suites_from_path(tmp_path / "suites", SuiteKind.API)

    assert files == tuple(sorted((first, second)))
    assert len(suites) == 2
