"""Results writing domain exports."""

from .diagnostic_attachments import (
    JSON_CONTENT_TYPE,
    PNG_CONTENT_TYPE,
    TEXT_CONTENT_TYPE,
    Attachment,
    CaseDiagnostics,
    DiagnosticSink,
)
from .report_models import (
    CaseResult,
    CaseStatus,
    FailureKind,
    RunMetadata,
    SuiteResult,
    status_totals,
)
from .run_report_writer import write_results_workbook
from .run_summary import build_run_summary, write_case_attachments, write_run_summary

__all__ = [
    "JSON_CONTENT_TYPE",
    "PNG_CONTENT_TYPE",
    "TEXT_CONTENT_TYPE",
    "Attachment",
    "CaseDiagnostics",
    "CaseResult",
    "CaseStatus",
    "DiagnosticSink",
    "FailureKind",
    "RunMetadata",
    "SuiteResult",
    "build_run_summary",
    "status_totals",
    "write_case_attachments",
    "write_results_workbook",
    "write_run_summary",
]
