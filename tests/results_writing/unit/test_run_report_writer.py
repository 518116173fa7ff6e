"""Results workbook writer tests."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from openpyxl import load_workbook
from universal_test_engine.results_writing import (
    CaseResult,
    CaseStatus,
    FailureKind,
    RunMetadata,
    SuiteResult,
    write_results_workbook,
)


def _suite_results() -> list[SuiteResult]:
    return [
        SuiteResult(
            suite="Users API",
            kind="api",
            cases=(
                CaseResult(
                    suite="Users API",
                    name="list users",
                    status=CaseStatus.PASSED,
                    tags=("smoke", "users"),
                    attempts=1,
                    duration_ms=12.34,
                ),
                CaseResult(
                    suite="Users API",
                    name="get missing user",
                    status=CaseStatus.FAILED,
                    failure_kind=FailureKind.ASSERTION,
                    message="Expected status 404, got 200",
                    attempts=2,
                ),
            ),
        ),
        SuiteResult(
            suite="Login UI",
            kind="ui",
            cases=(
                CaseResult(
                    suite="Login UI",
                    name="login form",
                    status=CaseStatus.BLOCKED,
                    failure_kind=FailureKind.SETUP,
                    message="Setup action failed: boom",
                ),
                CaseResult(suite="Login UI", name="later", status=CaseStatus.SKIPPED),
            ),
        ),
    ]


def _metadata(output_path: Path) -> RunMetadata:
    return RunMetadata(
        run_start=datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC),
        environment="staging",
        api_base_url="https://api.test",
        ui_base_url="https://app.test",
        output_path=output_path,
        duration_ms=1500.0,
    )


def test_write_results_workbook_writes_one_row_per_case(tmp_path: Path) -> None:
    output_path = tmp_path / "out" / "results.xlsx"

    written = write_results_workbook(output_path, _suite_results(), _metadata(output_path))

    assert written == output_path
    sheet = load_workbook(output_path)["Results"]
    rows = list(sheet.iter_rows(values_only=True))
    assert rows[0][:5] == ("Suite", "Kind", "Test", "Tags", "Status")
    assert rows[1][:5] == ("Users API", "api", "list users", "smoke, users", "PASSED")
    assert rows[1][6:8] == (1, 12.3)
    assert rows[2][4:7] == ("FAILED", "ASSERTION", 2)
    assert rows[2][8] == "Expected status 404, got 200"
    assert rows[3][:3] == ("Login UI", "ui", "login form")
    assert rows[3][4:6] == ("BLOCKED", "SETUP")
    assert rows[4][4] == "SKIPPED"
    assert len(rows) == 5


def test_run_info_sheet_records_metadata_and_totals(tmp_path: Path) -> None:
    output_path = tmp_path / "results.xlsx"

    write_results_workbook(output_path, _suite_results(), _metadata(output_path))

    sheet = load_workbook(output_path)["RunInfo"]
    info = {row[0]: row[1] for row in sheet.iter_rows(values_only=True)}
    assert info["environment"] == "staging"
    assert info["run_start"] == "2026-01-02T03:04:05+00:00"
    assert info["suites"] == 2
    assert info["total"] == 4
    assert info["passed"] == 1
    assert info["failed"] == 1
    assert info["skipped"] == 1
    assert info["blocked"] == 1
