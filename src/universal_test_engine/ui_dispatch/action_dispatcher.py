"""Execution of declared UI steps against a page capability.

Steps run strictly in order and the first failing step ends the sequence.
Every `UiActionKind` has exactly one handler in `_HANDLERS`; the module
refuses to import when a kind is left unhandled.
"""

from __future__ import annotations

# pylint: disable=unused-argument

import time
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from universal_test_engine.document_values import display_value, is_number, is_sequence
from universal_test_engine.host_capabilities import HostTimeoutError, PageCapability
from universal_test_engine.results_writing import DiagnosticSink
from universal_test_engine.suite_ingestion import SnapshotConfig, UiAction

from .ui_actions import ActionContractError, UiActionKind, resolve_action_kind
from .visual_snapshots import compare_with_baseline

DEFAULT_WAIT_MS = 1000
DEFAULT_SCROLL = (0, 500)
DEFAULT_GOTO = "/"
INLINE_SCREENSHOT_NAME = "inline"


@dataclass(frozen=True)
class DispatchContext:
    """Per-attempt collaborators and limits shared by every step of a case."""

    diagnostics: DiagnosticSink
    screenshots_dir: Path
    snapshot_dir: Path = Path("snapshots")
    max_diff_pixel_ratio: float = 0.01
    deadline: float | None = None
    timeout_ms: int | None = None


@dataclass(frozen=True)
class StepResult:
    action: UiAction
    description: str
    passed: bool
    error: Exception | None = None
    duration_ms: float = 0.0


@dataclass(frozen=True)
class StepsOutcome:
    step_results: tuple[StepResult, ...] = field(default_factory=tuple)

    @property
    def passed(self) -> bool:
        return all(result.passed for result in self.step_results)

    @property
    def failed_step(self) -> StepResult | None:
        for result in self.step_results:
            if not result.passed:
                return result
        return None


Handler = Callable[[PageCapability, UiAction, DispatchContext], None]


def execute_action(page: PageCapability, action: UiAction, context: DispatchContext) -> None:
    """Validate one step and perform it.

    Raises:
        ActionContractError: unknown action or a missing required field.
    """
    kind = resolve_action_kind(action)
    _HANDLERS[kind](page, action, context)


def run_steps(
    page: PageCapability, steps: Sequence[UiAction], context: DispatchContext
) -> StepsOutcome:
    """Run steps in order, stopping at the first failure."""
    results: list[StepResult] = []
    for index, step in enumerate(steps, start=1):
        description = step.description or f"Step {index}: {step.action}"
        started = time.perf_counter()
        try:
            _check_deadline(context, f"before {description}")
            execute_action(page, step, context)
            _check_deadline(context, f"during {description}")
        except Exception as exc:  # pylint: disable=broad-exception-caught
            results.append(
                StepResult(
                    action=step,
                    description=description,
                    passed=False,
                    error=exc,
                    duration_ms=(time.perf_counter() - started) * 1000,
                )
            )
            break
        results.append(
            StepResult(
                action=step,
                description=description,
                passed=True,
                duration_ms=(time.perf_counter() - started) * 1000,
            )
        )
    return StepsOutcome(step_results=tuple(results))


def verify_snapshot(
    page: PageCapability, snapshot: SnapshotConfig, context: DispatchContext
) -> None:
    """Compare the page (or one region) with its stored baseline.

    Raises:
        AssertionError: the differing pixel ratio exceeds the allowed maximum.
        HostTimeoutError: the case deadline passed before the comparison.
    """
    _check_deadline(context, f"before snapshot {snapshot.name}")
    if snapshot.selector:
        actual = page.screenshot(selector=snapshot.selector)
    else:
        actual = page.screenshot(full_page=snapshot.full_page)
    comparison = compare_with_baseline(
        actual,
        context.snapshot_dir / f"{snapshot.name}.png",
        max_diff_pixel_ratio=context.max_diff_pixel_ratio,
    )
    if comparison.passed:
        return
    context.diagnostics.attach_binary(f"{snapshot.name}-actual", actual)
    if comparison.diff_image is not None:
        context.diagnostics.attach_binary(f"{snapshot.name}-diff", comparison.diff_image)
    raise AssertionError(comparison.message)


def unhandled_action_kinds(
    handlers: Mapping[UiActionKind, Handler] | None = None,
) -> frozenset[UiActionKind]:
    """Return the action kinds without a handler (empty when dispatch is exhaustive)."""
    table = _HANDLERS if handlers is None else handlers
    return frozenset(UiActionKind) - frozenset(table)


def _check_deadline(context: DispatchContext, moment: str) -> None:
    if context.deadline is not None and time.monotonic() > context.deadline:
        raise HostTimeoutError(
            f"Test case exceeded its {context.timeout_ms} ms timeout {moment}"
        )


def _text(action: UiAction) -> str:
    return display_value(action.value)


def _selector(action: UiAction) -> str:
    return action.selector or ""


def _goto(page: PageCapability, action: UiAction, context: DispatchContext) -> None:
    target = action.value if action.value is not None else action.selector or DEFAULT_GOTO
    page.goto(display_value(target), action.options)


def _click(page: PageCapability, action: UiAction, context: DispatchContext) -> None:
    page.click(_selector(action), action.options)


def _fill(page: PageCapability, action: UiAction, context: DispatchContext) -> None:
    page.fill(_selector(action), _text(action), action.options)


def _select(page: PageCapability, action: UiAction, context: DispatchContext) -> None:
    page.select_option(_selector(action), _text(action), action.options)


def _check(page: PageCapability, action: UiAction, context: DispatchContext) -> None:
    page.check(_selector(action), action.options)


def _uncheck(page: PageCapability, action: UiAction, context: DispatchContext) -> None:
    page.uncheck(_selector(action), action.options)


def _hover(page: PageCapability, action: UiAction, context: DispatchContext) -> None:
    page.hover(_selector(action), action.options)


def _press(page: PageCapability, action: UiAction, context: DispatchContext) -> None:
    page.press(_selector(action), _text(action), action.options)


def _scroll(page: PageCapability, action: UiAction, context: DispatchContext) -> None:
    if action.selector:
        page.scroll_into_view(action.selector, action.options)
        return
    position = action.value if action.value is not None else DEFAULT_SCROLL
    if not is_sequence(position) or len(position) != 2:  # type: ignore[arg-type]
        raise ActionContractError('UI action "scroll" without selector needs value [x, y]')
    x, y = position  # type: ignore[misc]
    if not (is_number(x) and is_number(y)):
        raise ActionContractError('UI action "scroll" without selector needs value [x, y]')
    page.scroll_to(x, y)


def _upload(page: PageCapability, action: UiAction, context: DispatchContext) -> None:
    files = action.value
    if is_sequence(files):
        paths = [str(item) for item in files]  # type: ignore[attr-defined]
        page.set_input_files(_selector(action), paths, action.options)
    else:
        page.set_input_files(_selector(action), _text(action), action.options)


def _evaluate(page: PageCapability, action: UiAction, context: DispatchContext) -> None:
    page.evaluate(_text(action))


def _wait(page: PageCapability, action: UiAction, context: DispatchContext) -> None:
    wait_ms = _number(action, DEFAULT_WAIT_MS)
    if context.deadline is None:
        page.wait_for_timeout(wait_ms)
        return
    remaining_ms = max(0.0, (context.deadline - time.monotonic()) * 1000)
    if wait_ms <= remaining_ms:
        page.wait_for_timeout(wait_ms)
        return
    page.wait_for_timeout(remaining_ms)
    raise HostTimeoutError(
        f"Test case exceeded its {context.timeout_ms} ms timeout waiting {wait_ms:g} ms"
    )


def _wait_for_selector(page: PageCapability, action: UiAction, context: DispatchContext) -> None:
    page.wait_for_selector(_selector(action), action.options)


def _wait_for_url(page: PageCapability, action: UiAction, context: DispatchContext) -> None:
    page.wait_for_url(_text(action), action.options)


def _assert_visible(page: PageCapability, action: UiAction, context: DispatchContext) -> None:
    page.expect_visible(_selector(action), action.options)


def _assert_hidden(page: PageCapability, action: UiAction, context: DispatchContext) -> None:
    page.expect_hidden(_selector(action), action.options)


def _assert_text(page: PageCapability, action: UiAction, context: DispatchContext) -> None:
    page.expect_text(_selector(action), _text(action), action.options)


def _assert_value(page: PageCapability, action: UiAction, context: DispatchContext) -> None:
    page.expect_value(_selector(action), _text(action), action.options)


def _assert_url(page: PageCapability, action: UiAction, context: DispatchContext) -> None:
    page.expect_url(_text(action), action.options)


def _assert_title(page: PageCapability, action: UiAction, context: DispatchContext) -> None:
    page.expect_title(_text(action), action.options)


def _assert_count(page: PageCapability, action: UiAction, context: DispatchContext) -> None:
    page.expect_count(_selector(action), int(_number(action, None)), action.options)


def _screenshot(page: PageCapability, action: UiAction, context: DispatchContext) -> None:
    name = _text(action) if action.value is not None else INLINE_SCREENSHOT_NAME
    image = page.screenshot(full_page=bool(action.options.get("fullPage", False)))
    target = context.screenshots_dir / f"{name}.png"
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(image)
    context.diagnostics.attach_binary(f"screenshot-{name}", image)


def _number(action: UiAction, default: float | None) -> float:
    raw = action.value if action.value is not None else default
    if isinstance(raw, bool):
        raise ActionContractError(f'UI action "{action.action}" needs a numeric value')
    try:
        return float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ActionContractError(
            f'UI action "{action.action}" needs a numeric value, got {raw!r}'
        ) from exc


_HANDLERS: Mapping[UiActionKind, Handler] = {
    UiActionKind.GOTO: _goto,
    UiActionKind.CLICK: _click,
    UiActionKind.FILL: _fill,
    UiActionKind.SELECT: _select,
    UiActionKind.CHECK: _check,
    UiActionKind.UNCHECK: _uncheck,
    UiActionKind.HOVER: _hover,
    UiActionKind.PRESS: _press,
    UiActionKind.SCROLL: _scroll,
    UiActionKind.UPLOAD: _upload,
    UiActionKind.EVALUATE: _evaluate,
    UiActionKind.WAIT: _wait,
    UiActionKind.WAIT_FOR_SELECTOR: _wait_for_selector,
    UiActionKind.WAIT_FOR_URL: _wait_for_url,
    UiActionKind.ASSERT_VISIBLE: _assert_visible,
    UiActionKind.ASSERT_HIDDEN: _assert_hidden,
    UiActionKind.ASSERT_TEXT: _assert_text,
    UiActionKind.ASSERT_VALUE: _assert_value,
    UiActionKind.ASSERT_URL: _assert_url,
    UiActionKind.ASSERT_TITLE: _assert_title,
    UiActionKind.ASSERT_COUNT: _assert_count,
    UiActionKind.SCREENSHOT: _screenshot,
}

if unhandled_action_kinds():
    raise ImportError(
        "UI actions without a handler: "
        + ", ".join(sorted(kind.value for kind in unhandled_action_kinds()))
    )
