"""Suite document ingestion and validation service."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

from universal_test_engine.schema_management import (
    SchemaIssue,
    SuiteKind,
    validate_suite_document,
)

from .suite_models import ApiSuite, UiSuite

SUITE_FILE_SUFFIX = ".json"


class SuiteValidationError(Exception):
    """Raised when a suite document cannot be loaded; carries every issue found."""

    def __init__(self, source: Path | str, issues: Sequence[SchemaIssue]) -> None:
        self.source = str(source)
        self.issues = tuple(issues)
        lines = "\n".join(f"  {issue.render()}" for issue in self.issues)
        super().__init__(f"Invalid suite document {self.source}:\n{lines}")


def load_suite_document(path: Path | str, kind: SuiteKind) -> dict:
    """Read and schema-validate one suite file, returning the raw document."""
    suite_path = Path(path)
    if not suite_path.is_file():
        raise SuiteValidationError(
            suite_path, [SchemaIssue(instance_path="", message="suite file not found")]
        )
    try:
        document = json.loads(suite_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise SuiteValidationError(
            suite_path, [SchemaIssue(instance_path="", message=f"unreadable file: {exc}")]
        ) from exc
    except json.JSONDecodeError as exc:
        raise SuiteValidationError(
            suite_path,
            [
                SchemaIssue(
                    instance_path="",
                    message=f"malformed JSON: {exc.msg}",
                    params={"line": exc.lineno, "column": exc.colno},
                )
            ],
        ) from exc

    result = validate_suite_document(kind, document)
    if not result.valid:
        raise SuiteValidationError(suite_path, result.issues)
    return document


def load_api_suite(path: Path | str) -> ApiSuite:
    """Load an API suite file into typed entities."""
    document = load_suite_document(path, SuiteKind.API)
    return ApiSuite.from_document(document, source_path=Path(path))


def load_ui_suite(path: Path | str) -> UiSuite:
    """Load a UI suite file into typed entities."""
    document = load_suite_document(path, SuiteKind.UI)
    return UiSuite.from_document(document, source_path=Path(path))


def discover_suite_files(path: Path | str) -> tuple[Path, ...]:
    """Expand a file or directory argument into the suite files it names, sorted."""
    root = Path(path)
    if root.is_dir():
        return tuple(sorted(root.rglob(f"*{SUITE_FILE_SUFFIX}")))
    return (root,)


def load_suites_from_path(path: Path | str, kind: SuiteKind) -> tuple[ApiSuite | UiSuite, ...]:
    """Load every suite below `path` (a file or a directory of JSON files)."""
    loader = load_api_suite if SuiteKind(kind) is SuiteKind.API else load_ui_suite
    return tuple(loader(suite_file) for suite_file in discover_suite_files(path))
