"""Run summary and attachment file tests."""

from __future__ import annotations

import json
from pathlib import Path

from universal_test_engine.results_writing import (
    CaseDiagnostics,
    CaseResult,
    CaseStatus,
    SuiteResult,
    build_run_summary,
    write_case_attachments,
    write_run_summary,
)


def test_build_run_summary_counts_statuses() -> None:
    results = [
        SuiteResult(
            suite="s",
            kind="api",
            cases=(
                CaseResult(suite="s", name="a", status=CaseStatus.PASSED),
                CaseResult(suite="s", name="b", status=CaseStatus.PASSED),
                CaseResult(suite="s", name="c", status=CaseStatus.FAILED),
                CaseResult(suite="s", name="d", status=CaseStatus.BLOCKED),
            ),
        )
    ]

    summary = build_run_summary("dev", results, 1234.56)

    assert {key: summary[key] for key in summary if key != "timestamp"} == {
        "environment": "dev",
        "totalTests": 4,
        "passed": 2,
        "failed": 1,
        "skipped": 0,
        "blocked": 1,
        "duration": 1234.6,
    }
    assert isinstance(summary["timestamp"], str)


def test_write_run_summary_writes_json(tmp_path: Path) -> None:
    path = write_run_summary(tmp_path / "out", {"environment": "dev", "totalTests": 0})

    assert path.name == "summary.json"
    assert json.loads(path.read_text(encoding="utf-8")) == {"environment": "dev", "totalTests": 0}


def test_case_attachments_are_written_in_capture_order(tmp_path: Path) -> None:
    diagnostics = CaseDiagnostics()
    diagnostics.attach_json("Request", {"method": "GET"})
    diagnostics.attach_text("note", "hello")
    diagnostics.attach_binary("failure-screenshot", b"\x89PNG")
    results = [
        SuiteResult(
            suite="Users API",
            kind="api",
            cases=(
                CaseResult(
                    suite="Users API",
                    name="get user/1",
                    status=CaseStatus.FAILED,
                    attachments=diagnostics.attachments,
                ),
                CaseResult(suite="Users API", name="no attachments", status=CaseStatus.PASSED),
            ),
        )
    ]

    written = write_case_attachments(tmp_path, results)

    case_dir = tmp_path / "attachments" / "Users_API" / "get_user_1"
    assert written == 3
    assert sorted(path.name for path in case_dir.iterdir()) == [
        "01-Request.json",
        "02-note.txt",
        "03-failure-screenshot.png",
    ]
    assert json.loads((case_dir / "01-Request.json").read_text(encoding="utf-8")) == {
        "method": "GET"
    }
    assert not (tmp_path / "attachments" / "Users_API" / "no_attachments").exists()
