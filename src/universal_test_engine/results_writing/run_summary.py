"""Machine-readable run summary and attachment files."""

from __future__ import annotations

import json
import re
from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path

from .report_models import CaseStatus, SuiteResult, status_totals

SUMMARY_FILE_NAME = "summary.json"
ATTACHMENTS_DIR_NAME = "attachments"
_UNSAFE_PATH_CHARS = re.compile(r"[^\w.-]+")


def build_run_summary(
    environment: str, suite_results: Sequence[SuiteResult], duration_ms: float
) -> dict[str, object]:
    totals = status_totals(suite_results)
    return {
        "environment": environment,
        "totalTests": sum(totals.values()),
        "passed": totals[CaseStatus.PASSED],
        "failed": totals[CaseStatus.FAILED],
        "skipped": totals[CaseStatus.SKIPPED],
        "blocked": totals[CaseStatus.BLOCKED],
        "duration": round(duration_ms, 1),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def write_run_summary(output_dir: Path | str, summary: dict[str, object]) -> Path:
    """Write `summary.json` into the output directory."""
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / SUMMARY_FILE_NAME
    path.write_text(json.dumps(summary, indent=2, ensure_ascii=False), encoding="utf-8")
    return path


def write_case_attachments(output_dir: Path | str, suite_results: Sequence[SuiteResult]) -> int:
    """Persist every attachment under `attachments/<suite>/<case>/`; returns the file count."""
    root = Path(output_dir) / ATTACHMENTS_DIR_NAME
    written = 0
    for suite_result in suite_results:
        for case in suite_result.cases:
            if not case.attachments:
                continue
            case_dir = root / _safe_name(suite_result.suite) / _safe_name(case.name)
            case_dir.mkdir(parents=True, exist_ok=True)
            for index, attachment in enumerate(case.attachments, start=1):
                file_name = f"{index:02d}-{_safe_name(attachment.name)}{attachment.file_extension}"
                (case_dir / file_name).write_bytes(attachment.payload)
                written += 1
    return written


def _safe_name(value: str) -> str:
    cleaned = _UNSAFE_PATH_CHARS.sub("_", value).strip("_")
    return cleaned or "unnamed"
