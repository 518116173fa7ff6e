"""UI action vocabulary and the fields each action requires."""

from __future__ import annotations

from enum import Enum

from universal_test_engine.suite_ingestion import UiAction


class ActionContractError(Exception):
    """Raised when a step names an unknown action or lacks a field its action needs."""


class UiActionKind(str, Enum):
    """Closed set of actions a UI step may declare."""

    GOTO = "goto"
    CLICK = "click"
    FILL = "fill"
    SELECT = "select"
    CHECK = "check"
    UNCHECK = "uncheck"
    HOVER = "hover"
    PRESS = "press"
    SCROLL = "scroll"
    UPLOAD = "upload"
    EVALUATE = "evaluate"
    WAIT = "wait"
    WAIT_FOR_SELECTOR = "waitForSelector"
    WAIT_FOR_URL = "waitForURL"
    ASSERT_VISIBLE = "assertVisible"
    ASSERT_HIDDEN = "assertHidden"
    ASSERT_TEXT = "assertText"
    ASSERT_VALUE = "assertValue"
    ASSERT_URL = "assertURL"
    ASSERT_TITLE = "assertTitle"
    ASSERT_COUNT = "assertCount"
    SCREENSHOT = "screenshot"


SELECTOR_REQUIRED = frozenset(
    {
        UiActionKind.CLICK,
        UiActionKind.FILL,
        UiActionKind.SELECT,
        UiActionKind.CHECK,
        UiActionKind.UNCHECK,
        UiActionKind.HOVER,
        UiActionKind.PRESS,
        UiActionKind.UPLOAD,
        UiActionKind.WAIT_FOR_SELECTOR,
        UiActionKind.ASSERT_VISIBLE,
        UiActionKind.ASSERT_HIDDEN,
        UiActionKind.ASSERT_TEXT,
        UiActionKind.ASSERT_VALUE,
        UiActionKind.ASSERT_COUNT,
    }
)

VALUE_REQUIRED = frozenset(
    {
        UiActionKind.FILL,
        UiActionKind.SELECT,
        UiActionKind.PRESS,
        UiActionKind.UPLOAD,
        UiActionKind.EVALUATE,
        UiActionKind.WAIT_FOR_URL,
        UiActionKind.ASSERT_TEXT,
        UiActionKind.ASSERT_VALUE,
        UiActionKind.ASSERT_URL,
        UiActionKind.ASSERT_TITLE,
        UiActionKind.ASSERT_COUNT,
    }
)


def resolve_action_kind(action: UiAction) -> UiActionKind:
    """Map the declared action name to its kind and check its required fields."""
    try:
        kind = UiActionKind(action.action)
    except ValueError as exc:
        raise ActionContractError(f'Unknown UI action: "{action.action}"') from exc
    if kind in SELECTOR_REQUIRED and not action.selector:
        raise ActionContractError(f'UI action "{kind.value}" requires a selector')
    if kind in VALUE_REQUIRED and action.value is None:
        raise ActionContractError(f'UI action "{kind.value}" requires a value')
    return kind
