"""Matching and validation outcome entities."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AssertionOutcome:
    """Result of one independent check."""

    check: str
    passed: bool
    message: str


@dataclass(frozen=True)
class ExpectationReport:
    """Every check an expectation activated, in evaluation order."""

    outcomes: tuple[AssertionOutcome, ...] = ()

    @property
    def passed(self) -> bool:
        """Return True when no check failed; an empty report passes."""
        return all(outcome.passed for outcome in self.outcomes)

    @property
    def failures(self) -> tuple[AssertionOutcome, ...]:
        return tuple(outcome for outcome in self.outcomes if not outcome.passed)

    def failure_message(self) -> str:
        return "\n".join(outcome.message for outcome in self.failures)
