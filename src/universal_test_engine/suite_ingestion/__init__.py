"""Suite ingestion exports."""

from .suite_models import (
    ApiSetupCall,
    ApiSuite,
    ApiTestCase,
    BodyPathExpectation,
    Expectation,
    SnapshotConfig,
    StatusRange,
    TokenExtraction,
    UiAction,
    UiSuite,
    UiTestCase,
    Viewport,
)
from .suite_reader import (
    SuiteValidationError,
    discover_suite_files,
    load_api_suite,
    load_suite_document,
    load_suites_from_path,
    load_ui_suite,
)
from .tag_filter import filter_by_tags, select_runnable

__all__ = [
    "ApiSetupCall",
    "ApiSuite",
    "ApiTestCase",
    "BodyPathExpectation",
    "Expectation",
    "SnapshotConfig",
    "StatusRange",
    "SuiteValidationError",
    "TokenExtraction",
    "UiAction",
    "UiSuite",
    "UiTestCase",
    "Viewport",
    "discover_suite_files",
    "filter_by_tags",
    "load_api_suite",
    "load_suite_document",
    "load_suites_from_path",
    "load_ui_suite",
    "select_runnable",
]
