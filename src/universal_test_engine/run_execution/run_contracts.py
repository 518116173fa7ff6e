"""Run execution entities."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

from universal_test_engine.configuration.runtime_settings import Configuration
from universal_test_engine.results_writing import CaseStatus, SuiteResult
from universal_test_engine.suite_ingestion import ApiSuite, UiSuite


@dataclass(frozen=True)
class RunRequest:
    """Input contract for executing one run."""

    config_path: str
    api_suite_paths: tuple[str, ...] = ()
    ui_suite_paths: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    output_dir: str | None = None


@dataclass(frozen=True)
class RunOutcome:
    """Output contract for one completed run."""

    output_path: Path
    summary_path: Path
    suite_results: tuple[SuiteResult, ...]
    totals: Counter[CaseStatus] = field(default_factory=Counter)

    @property
    def has_failures(self) -> bool:
        return any(result.has_failures for result in self.suite_results)


@dataclass(frozen=True)
class RunArtifacts:
    """Loaded domain artifacts required during run execution."""

    configuration: Configuration
    api_suites: tuple[ApiSuite, ...]
    ui_suites: tuple[UiSuite, ...]
