"""Attempt bookkeeping shared by the API and UI suite runners."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, replace
from typing import TypeVar

from universal_test_engine.host_capabilities import HostTimeoutError
from universal_test_engine.results_writing import (
    Attachment,
    CaseResult,
    CaseStatus,
    FailureKind,
)
from universal_test_engine.ui_dispatch import ActionContractError

LOGGER = logging.getLogger(__name__)

CaseT = TypeVar("CaseT")


@dataclass(frozen=True)
class AttemptOutcome:
    """Result of one attempt of one case."""

    passed: bool
    failure_kind: FailureKind | None = None
    message: str = ""
    attachments: tuple[Attachment, ...] = ()

    @classmethod
    def success(cls, attachments: Sequence[Attachment] = ()) -> AttemptOutcome:
        return cls(passed=True, attachments=tuple(attachments))

    @classmethod
    def failure(
        cls,
        exc: BaseException,
        attachments: Sequence[Attachment] = (),
        *,
        prefix: str | None = None,
    ) -> AttemptOutcome:
        message = describe_failure(exc)
        return cls(
            passed=False,
            failure_kind=classify_failure(exc),
            message=f"{prefix}: {message}" if prefix else message,
            attachments=tuple(attachments),
        )

    @classmethod
    def blocked(cls, reason: str) -> AttemptOutcome:
        return cls(passed=False, failure_kind=FailureKind.SETUP, message=reason)

    def with_attachments(self, attachments: Sequence[Attachment]) -> AttemptOutcome:
        return replace(self, attachments=tuple(attachments))


def classify_failure(exc: BaseException) -> FailureKind:
    """Map an exception raised while running a case to its failure kind."""
    if isinstance(exc, ActionContractError):
        return FailureKind.CONTRACT
    if isinstance(exc, AssertionError):
        return FailureKind.ASSERTION
    if isinstance(exc, HostTimeoutError):
        return FailureKind.TIMEOUT
    return FailureKind.HOST_ERROR


def describe_failure(exc: BaseException) -> str:
    message = str(exc)
    if not message:
        return type(exc).__name__
    if isinstance(exc, AssertionError | ActionContractError | HostTimeoutError):
        return message
    return f"{type(exc).__name__}: {message}"


def is_retryable(outcome: AttemptOutcome) -> bool:
    return not outcome.passed and outcome.failure_kind is not FailureKind.CONTRACT


def run_attempts(
    suite: str,
    name: str,
    tags: Sequence[str],
    retries: int,
    attempt: Callable[[], AttemptOutcome],
) -> CaseResult:
    """Run a case until it passes, fails deterministically, or exhausts its retries.

    Attachments of the final attempt are kept; earlier attempts are discarded.
    """
    started = time.perf_counter()
    allowed = 1 + max(0, retries)
    attempts = 0
    outcome = AttemptOutcome(passed=False)
    while attempts < allowed:
        attempts += 1
        outcome = attempt()
        if not is_retryable(outcome):
            break
        if attempts < allowed:
            LOGGER.warning(
                "Retrying %s / %s after %s failure (attempt %d of %d)",
                suite,
                name,
                outcome.failure_kind.value if outcome.failure_kind else "unknown",
                attempts + 1,
                allowed,
            )
    result = CaseResult(
        suite=suite,
        name=name,
        status=_final_status(outcome),
        tags=tuple(tags),
        failure_kind=outcome.failure_kind,
        message=outcome.message,
        attempts=attempts,
        duration_ms=(time.perf_counter() - started) * 1000,
        attachments=outcome.attachments,
    )
    LOGGER.debug("%s / %s -> %s", suite, name, result.status.value)
    return result


def _final_status(outcome: AttemptOutcome) -> CaseStatus:
    if outcome.passed:
        return CaseStatus.PASSED
    if outcome.failure_kind is FailureKind.SETUP:
        return CaseStatus.BLOCKED
    return CaseStatus.FAILED


def skipped_result(suite: str, name: str, tags: Sequence[str]) -> CaseResult:
    return CaseResult(suite=suite, name=name, status=CaseStatus.SKIPPED, tags=tuple(tags))


def blocked_result(suite: str, name: str, tags: Sequence[str], reason: str) -> CaseResult:
    return CaseResult(
        suite=suite,
        name=name,
        status=CaseStatus.BLOCKED,
        tags=tuple(tags),
        failure_kind=FailureKind.SETUP,
        message=reason,
    )


def run_cases_in_parallel(
    cases: Sequence[CaseT],
    run_case: Callable[[CaseT], CaseResult],
    *,
    workers: int,
) -> tuple[CaseResult, ...]:
    """Run cases on a worker pool and return their results in declaration order."""
    if not cases:
        return ()
    max_workers = max(1, min(workers, len(cases)))
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(run_case, case) for case in cases]
        wait(futures)
    return tuple(future.result() for future in futures)
