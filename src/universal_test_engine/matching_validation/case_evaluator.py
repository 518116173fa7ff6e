"""Evaluation of a declared expectation against an observed HTTP response."""

from __future__ import annotations

import re
from collections.abc import Mapping

from universal_test_engine.document_values import (
    MISSING,
    deep_contains,
    deep_equal,
    deep_get,
    display_value,
    is_sequence,
    runtime_type_tags,
)
from universal_test_engine.host_capabilities import HttpResponse
from universal_test_engine.schema_management import validate_against_schema
from universal_test_engine.suite_ingestion import BodyPathExpectation, Expectation

from .expectation_rules import BodyPathCheck, ExpectationRuleKind
from .matching_outcomes import AssertionOutcome, ExpectationReport


def evaluate_expectation(expectation: Expectation, observed: HttpResponse) -> ExpectationReport:
    """Run every check the expectation declares; all of them must hold.

    Checks are independent: one failing check never stops the others, so a
    report shows every problem of a response at once.
    """
    outcomes: list[AssertionOutcome] = []
    if expectation.status is not None:
        outcomes.append(_check_status(expectation.status, observed.status))
    if expectation.status_range is not None:
        outcomes.append(
            _check_status_range(
                expectation.status_range.min, expectation.status_range.max, observed.status
            )
        )
    if expectation.body_contains is not MISSING:
        outcomes.append(_check_body_contains(expectation.body_contains, observed.body))
    if expectation.body_exact is not MISSING:
        outcomes.append(_check_body_exact(expectation.body_exact, observed.body))
    if expectation.body_schema is not None:
        outcomes.append(_check_body_schema(expectation.body_schema, observed.body))
    for path_expectation in expectation.body_path:
        outcomes.extend(_check_body_path(path_expectation, observed.body))
    for name, expected_value in expectation.headers.items():
        outcomes.append(_check_header(name, expected_value, observed))
    if expectation.response_time_ms is not None:
        outcomes.append(_check_response_time(expectation.response_time_ms, observed.elapsed_ms))
    return ExpectationReport(outcomes=tuple(outcomes))


def _check_status(expected: int, actual: int) -> AssertionOutcome:
    return AssertionOutcome(
        check=ExpectationRuleKind.STATUS.value,
        passed=actual == expected,
        message=f"Expected status {expected}, got {actual}",
    )


def _check_status_range(minimum: int, maximum: int, actual: int) -> AssertionOutcome:
    return AssertionOutcome(
        check=ExpectationRuleKind.STATUS_RANGE.value,
        passed=minimum <= actual <= maximum,
        message=f"Expected status in [{minimum}, {maximum}], got {actual}",
    )


def _check_body_contains(expected: object, body: object) -> AssertionOutcome:
    return AssertionOutcome(
        check=ExpectationRuleKind.BODY_CONTAINS.value,
        passed=deep_contains(body, expected),
        message=(
            f"Response body should contain {display_value(expected)}, "
            f"got {display_value(body)}"
        ),
    )


def _check_body_exact(expected: object, body: object) -> AssertionOutcome:
    return AssertionOutcome(
        check=ExpectationRuleKind.BODY_EXACT.value,
        passed=deep_equal(body, expected),
        message=(
            f"Response body should exactly match {display_value(expected)}, "
            f"got {display_value(body)}"
        ),
    )


def _check_body_schema(schema: Mapping | bool, body: object) -> AssertionOutcome:
    result = validate_against_schema(body, schema)
    if result.valid:
        message = "Response body matches the declared schema"
    else:
        message = "Schema validation failed:\n" + "\n".join(result.errors)
    return AssertionOutcome(
        check=ExpectationRuleKind.BODY_SCHEMA.value, passed=result.valid, message=message
    )


def _check_body_path(expectation: BodyPathExpectation, body: object) -> list[AssertionOutcome]:
    path = expectation.path
    actual = deep_get(body, path)
    outcomes: list[AssertionOutcome] = []

    def record(check: BodyPathCheck, passed: bool, message: str) -> None:
        outcomes.append(
            AssertionOutcome(
                check=f"bodyPath[{path}].{check.value}", passed=passed, message=message
            )
        )

    if expectation.equals is not MISSING:
        record(
            BodyPathCheck.EQUALS,
            deep_equal(actual, expectation.equals),
            f"{path} should equal {display_value(expectation.equals)}, "
            f"got {display_value(actual)}",
        )
    if expectation.contains is not MISSING:
        record(
            BodyPathCheck.CONTAINS,
            deep_contains(actual, expectation.contains),
            f"{path} should contain {display_value(expectation.contains)}, "
            f"got {display_value(actual)}",
        )
    if expectation.type is not None:
        tags = runtime_type_tags(actual)
        record(
            BodyPathCheck.TYPE,
            expectation.type in tags,
            f"{path} should be type {expectation.type}, got {_primary_type(tags)}",
        )
    if expectation.min_length is not None:
        length = _length_of(actual)
        record(
            BodyPathCheck.MIN_LENGTH,
            length is not None and length >= expectation.min_length,
            _length_message(path, ">=", expectation.min_length, actual, length),
        )
    if expectation.max_length is not None:
        length = _length_of(actual)
        record(
            BodyPathCheck.MAX_LENGTH,
            length is not None and length <= expectation.max_length,
            _length_message(path, "<=", expectation.max_length, actual, length),
        )
    if expectation.regex is not None:
        text = display_value(actual)
        try:
            matched = re.search(expectation.regex, text) is not None
        except re.error as exc:
            record(
                BodyPathCheck.REGEX, False, f"{path} regex {expectation.regex!r} is invalid: {exc}"
            )
        else:
            record(
                BodyPathCheck.REGEX,
                matched,
                f"{path} should match /{expectation.regex}/, got {text!r}",
            )
    return outcomes


def _check_header(name: str, expected: str, observed: HttpResponse) -> AssertionOutcome:
    actual = observed.header(name)
    shown = "undefined" if actual is None else repr(actual)
    return AssertionOutcome(
        check=f"{ExpectationRuleKind.HEADERS.value}[{name.lower()}]",
        passed=actual == expected,
        message=f"Header {name} should be {expected!r}, got {shown}",
    )


def _check_response_time(maximum_ms: float, elapsed_ms: float) -> AssertionOutcome:
    return AssertionOutcome(
        check=ExpectationRuleKind.RESPONSE_TIME.value,
        passed=elapsed_ms <= maximum_ms,
        message=f"Response took {elapsed_ms:g}ms (max {maximum_ms:g}ms)",
    )


def _length_of(value: object) -> int | None:
    if isinstance(value, str) or is_sequence(value):
        return len(value)  # type: ignore[arg-type]
    return None


def _length_message(
    path: str, operator: str, bound: int, actual: object, length: int | None
) -> str:
    if length is None:
        return (
            f"{path} length should be {operator} {bound}, "
            f"but a value of type {_primary_type(runtime_type_tags(actual))} has no length"
        )
    return f"{path} length should be {operator} {bound}, got {length}"


def _primary_type(tags: frozenset[str]) -> str:
    for name in ("undefined", "null", "array", "integer", "number", "string", "boolean", "object"):
        if name in tags:
            return name
    return next(iter(sorted(tags)), "unknown")
