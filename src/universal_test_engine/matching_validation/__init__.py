"""Matching and validation domain exports."""

from .case_evaluator import evaluate_expectation
from .expectation_rules import BodyPathCheck, ExpectationRuleKind
from .matching_outcomes import AssertionOutcome, ExpectationReport

__all__ = [
    "AssertionOutcome",
    "BodyPathCheck",
    "ExpectationReport",
    "ExpectationRuleKind",
    "evaluate_expectation",
]
