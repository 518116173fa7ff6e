"""Results workbook writer service."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment
from openpyxl.utils import get_column_letter

from .report_models import CaseStatus, RunMetadata, SuiteResult, status_totals

RESULTS_SHEET_NAME = "Results"
RUN_INFO_SHEET_NAME = "RunInfo"
RESULT_COLUMNS = (
    ("Suite", 30),
    ("Kind", 8),
    ("Test", 45),
    ("Tags", 20),
    ("Status", 10),
    ("Failure Kind", 14),
    ("Attempts", 10),
    ("Duration (ms)", 14),
    ("Message", 80),
)


def write_results_workbook(
    output_path: Path | str,
    suite_results: Sequence[SuiteResult],
    run_metadata: RunMetadata,
) -> Path:
    """Write one row per case plus a RunInfo sheet; returns the written path."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = RESULTS_SHEET_NAME
    _write_header_row(sheet)
    _write_case_rows(sheet, suite_results)
    _write_run_info_sheet(workbook, run_metadata, suite_results)

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    return output


def _write_header_row(sheet) -> None:
    for column, (label, width) in enumerate(RESULT_COLUMNS, start=1):
        cell = sheet.cell(row=1, column=column, value=label)
        cell.style = "Headline 1"
        sheet.column_dimensions[get_column_letter(column)].width = width
    sheet.freeze_panes = "A2"


def _write_case_rows(sheet, suite_results: Sequence[SuiteResult]) -> None:
    row = 2
    for suite_result in suite_results:
        for case in suite_result.cases:
            values = (
                suite_result.suite,
                suite_result.kind,
                case.name,
                ", ".join(case.tags),
                case.status.value,
                case.failure_kind.value if case.failure_kind else "",
                case.attempts,
                round(case.duration_ms, 1),
                case.message,
            )
            for column, value in enumerate(values, start=1):
                sheet.cell(row=row, column=column, value=value)
            sheet.cell(row=row, column=len(values)).alignment = Alignment(wrap_text=True)
            row += 1


def _write_run_info_sheet(
    workbook, run_metadata: RunMetadata, suite_results: Sequence[SuiteResult]
) -> None:
    sheet = workbook.create_sheet(RUN_INFO_SHEET_NAME)
    totals = status_totals(suite_results)
    entries = (
        ("run_start", run_metadata.run_start.isoformat()),
        ("environment", run_metadata.environment),
        ("api_base_url", run_metadata.api_base_url),
        ("ui_base_url", run_metadata.ui_base_url),
        ("output_path", str(run_metadata.output_path)),
        ("duration_ms", round(run_metadata.duration_ms, 1)),
        ("suites", len(suite_results)),
        ("total", sum(totals.values())),
        ("passed", totals[CaseStatus.PASSED]),
        ("failed", totals[CaseStatus.FAILED]),
        ("skipped", totals[CaseStatus.SKIPPED]),
        ("blocked", totals[CaseStatus.BLOCKED]),
    )
    for row, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row, column=1, value=key)
        sheet.cell(row=row, column=2, value=value)
