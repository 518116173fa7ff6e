"""Results writing entities."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from .diagnostic_attachments import Attachment


class CaseStatus(str, Enum):
    """Final status of one declared test case."""

    PASSED = "PASSED"
    FAILED = "FAILED"
    SKIPPED = "SKIPPED"
    BLOCKED = "BLOCKED"


class FailureKind(str, Enum):
    """Why a case did not pass; separates broken environments from regressions."""

    ASSERTION = "ASSERTION"
    TIMEOUT = "TIMEOUT"
    HOST_ERROR = "HOST_ERROR"
    CONTRACT = "CONTRACT"
    SETUP = "SETUP"


@dataclass(frozen=True)
class CaseResult:  # pylint: disable=too-many-instance-attributes
    """Outcome of one test case after its final attempt."""

    suite: str
    name: str
    status: CaseStatus
    tags: tuple[str, ...] = ()
    failure_kind: FailureKind | None = None
    message: str = ""
    attempts: int = 0
    duration_ms: float = 0.0
    attachments: tuple[Attachment, ...] = ()

    @property
    def passed(self) -> bool:
        return self.status == CaseStatus.PASSED


@dataclass(frozen=True)
class SuiteResult:
    """Outcomes of every selected case of one suite, in declaration order."""

    suite: str
    kind: str
    cases: tuple[CaseResult, ...]
    source_path: Path | None = None
    duration_ms: float = 0.0
    setup_error: str | None = None

    def count(self, status: CaseStatus) -> int:
        return sum(1 for case in self.cases if case.status == status)

    @property
    def has_failures(self) -> bool:
        return any(case.status in (CaseStatus.FAILED, CaseStatus.BLOCKED) for case in self.cases)


@dataclass(frozen=True)
class RunMetadata:
    """Metadata rendered into the RunInfo sheet and the run summary."""

    run_start: datetime
    environment: str
    api_base_url: str
    ui_base_url: str
    output_path: Path
    duration_ms: float = 0.0


def status_totals(suite_results: Sequence[SuiteResult]) -> Counter[CaseStatus]:
    """Count cases per status across suites."""
    totals: Counter[CaseStatus] = Counter()
    for suite_result in suite_results:
        totals.update(case.status for case in suite_result.cases)
    return totals
