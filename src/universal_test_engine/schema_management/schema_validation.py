"""JSON Schema validation for suite documents and inline body schemas."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from functools import lru_cache
from importlib import resources
from typing import Any

from jsonschema import Draft7Validator, FormatChecker
from jsonschema.exceptions import SchemaError as JsonSchemaDefinitionError
from jsonschema.protocols import Validator
from jsonschema.validators import validator_for

from .schema_models import SchemaIssue, SuiteKind, ValidationResult

_SCHEMA_FILES = {
    SuiteKind.API: "api-test.schema.json",
    SuiteKind.UI: "ui-test.schema.json",
}


class SchemaError(Exception):
    """Raised when a bundled suite schema cannot be loaded."""


def load_suite_schema(kind: SuiteKind) -> Mapping[str, Any]:
    """Return the bundled JSON schema for a suite kind."""
    try:
        text = (
            resources.files("universal_test_engine.schema_management")
            .joinpath("schemas")
            .joinpath(_SCHEMA_FILES[SuiteKind(kind)])
            .read_text(encoding="utf-8")
        )
    except (KeyError, ValueError, OSError) as exc:
        raise SchemaError(f"No bundled schema for suite kind {kind!r}.") from exc
    return json.loads(text)


def validate_suite_document(kind: SuiteKind | str, data: object) -> ValidationResult:
    """Validate a parsed suite document, collecting every violation."""
    try:
        suite_kind = SuiteKind(kind)
    except ValueError:
        return ValidationResult(
            issues=(SchemaIssue(instance_path="", message=f'Unknown test type: "{kind}"'),)
        )
    return _collect(_suite_validator(suite_kind), data)


def validate_against_schema(data: object, schema: Mapping[str, Any] | bool) -> ValidationResult:
    """Validate a value against an ad hoc schema declared inside a test case."""
    try:
        validator = _inline_validator(json.dumps(schema, sort_keys=True))
    except JsonSchemaDefinitionError as exc:
        return ValidationResult(
            issues=(
                SchemaIssue(
                    instance_path="",
                    message=f"invalid schema: {exc.message}",
                    params={"keyword": exc.validator},
                ),
            )
        )
    return _collect(validator, data)


@lru_cache(maxsize=len(SuiteKind))
def _suite_validator(kind: SuiteKind) -> Validator:
    schema = load_suite_schema(kind)
    Draft7Validator.check_schema(schema)
    return Draft7Validator(schema, format_checker=FormatChecker())


@lru_cache(maxsize=256)
def _inline_validator(canonical_schema: str) -> Validator:
    schema = json.loads(canonical_schema)
    validator_cls = validator_for(schema, default=Draft7Validator)
    validator_cls.check_schema(schema)
    return validator_cls(schema, format_checker=FormatChecker())


def _collect(validator: Validator, data: object) -> ValidationResult:
    issues = [
        SchemaIssue(
            instance_path=_instance_path(error.absolute_path),
            message=error.message,
            params={"keyword": error.validator, "schema": error.validator_value},
        )
        for error in validator.iter_errors(data)
    ]
    issues.sort(key=lambda issue: issue.instance_path)
    return ValidationResult(issues=tuple(issues))


def _instance_path(path: Iterable[str | int]) -> str:
    parts = [str(part) for part in path]
    if not parts:
        return ""
    return "/" + "/".join(parts)
