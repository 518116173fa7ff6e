"""Schema management exports."""

from .schema_models import SchemaIssue, SuiteKind, ValidationResult
from .schema_validation import (
    SchemaError,
    load_suite_schema,
    validate_against_schema,
    validate_suite_document,
)

__all__ = [
    "SchemaError",
    "SchemaIssue",
    "SuiteKind",
    "ValidationResult",
    "load_suite_schema",
    "validate_against_schema",
    "validate_suite_document",
]
