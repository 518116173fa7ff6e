"""Integration tests for matching/validation with suite ingestion."""

from __future__ import annotations

import json
from pathlib import Path

from universal_test_engine.document_values import interpolate, merge_variables
from universal_test_engine.host_capabilities import HttpResponse
from universal_test_engine.matching_validation import evaluate_expectation
from universal_test_engine.suite_ingestion import ApiTestCase, load_api_suite


def _write_suite(tmp_path: Path) -> Path:
    suite_path = tmp_path / "users.json"
    suite_path.write_text(
        json.dumps(
            {
                "suite": "Users",
                "baseEndpoint": "/api",
                "tests": [
                    {
                        "name": "get user",
                        "method": "GET",
                        "endpoint": "/users/{{userId}}",
                        "dataInjection": {"userId": "7", "userName": "Ada"},
                        "expect": {
                            "status": 200,
                            "bodyContains": {"id": 7},
                            "bodyPath": [
                                {"path": "name", "equals": "{{userName}}", "type": "string"}
                            ],
                            "bodySchema": {"type": "object", "required": ["id", "name"]},
                            "headers": {"Content-Type": "application/json"},
                        },
                    }
                ],
            }
        ),
        encoding="utf-8",
    )
    return suite_path


def test_loaded_and_interpolated_case_matches_response(tmp_path: Path) -> None:
    suite = load_api_suite(_write_suite(tmp_path))
    case = suite.tests[0]

    resolved = ApiTestCase.from_document(
        interpolate(case.document, merge_variables({}, case.data_injection))
    )
    report = evaluate_expectation(
        resolved.expect,
        HttpResponse(
            status=200,
            headers={"content-type": "application/json"},
            body={"id": 7, "name": "Ada"},
        ),
    )

    assert resolved.endpoint == "/users/7"
    assert report.passed is True, report.failure_message()
    assert len(report.outcomes) == 6


def test_mismatching_response_reports_every_failed_check(tmp_path: Path) -> None:
    suite = load_api_suite(_write_suite(tmp_path))
    case = suite.tests[0]
    resolved = ApiTestCase.from_document(
        interpolate(case.document, merge_variables({}, case.data_injection))
    )

    report = evaluate_expectation(
        resolved.expect, HttpResponse(status=404, body={"error": "not found"})
    )

    assert report.passed is False
    checks = [outcome.check for outcome in report.failures]
    assert checks == [
        "status",
        "bodyContains",
        "bodySchema",
        "bodyPath[name].equals",
        "bodyPath[name].type",
        "headers[content-type]",
    ]
