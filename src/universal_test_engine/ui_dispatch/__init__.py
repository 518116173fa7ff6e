"""UI dispatch exports."""

from .action_dispatcher import (
    DispatchContext,
    StepResult,
    StepsOutcome,
    execute_action,
    run_steps,
    unhandled_action_kinds,
    verify_snapshot,
)
from .ui_actions import (
    SELECTOR_REQUIRED,
    VALUE_REQUIRED,
    ActionContractError,
    UiActionKind,
    resolve_action_kind,
)
from .visual_snapshots import SnapshotComparison, compare_with_baseline

__all__ = [
    "SELECTOR_REQUIRED",
    "VALUE_REQUIRED",
    "ActionContractError",
    "DispatchContext",
    "SnapshotComparison",
    "StepResult",
    "StepsOutcome",
    "UiActionKind",
    "compare_with_baseline",
    "execute_action",
    "resolve_action_kind",
    "run_steps",
    "unhandled_action_kinds",
    "verify_snapshot",
]
