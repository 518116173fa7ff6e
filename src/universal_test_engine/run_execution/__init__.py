"""Run execution domain exports."""

from .api_suite_runner import ApiSuiteRunner, SuiteSetupError
from .case_outcomes import AttemptOutcome, classify_failure, run_attempts
from .run_contracts import RunArtifacts, RunOutcome, RunRequest
from .suite_run_use_case import RunExecutionError, execute_suite_run
from .ui_suite_runner import UiSuiteRunner

__all__ = [
    "ApiSuiteRunner",
    "AttemptOutcome",
    "RunArtifacts",
    "RunExecutionError",
    "RunOutcome",
    "RunRequest",
    "SuiteSetupError",
    "UiSuiteRunner",
    "classify_failure",
    "execute_suite_run",
    "run_attempts",
]
