"""Tag filter tests."""

from __future__ import annotations

from universal_test_engine.suite_ingestion import (
    ApiTestCase,
    Expectation,
    filter_by_tags,
    select_runnable,
)


def _case(name: str, tags: tuple[str, ...] = (), *, only: bool = False) -> ApiTestCase:
    return ApiTestCase(
        name=name, method="GET", endpoint="/", expect=Expectation(), tags=tags, only=only
    )


def test_empty_request_returns_every_test_in_order() -> None:
    tests = [_case("a", ("smoke",)), _case("b"), _case("c", ("regression",))]

    assert filter_by_tags(tests, []) == tuple(tests)


def test_keeps_tests_with_at_least_one_requested_tag() -> None:
    smoke = _case("smoke", ("smoke", "users"))
    regression = _case("regression", ("regression",))
    untagged = _case("untagged")

    selected = filter_by_tags([smoke, regression, untagged], ["users", "nightly"])

    assert selected == (smoke,)


def test_multiple_requested_tags_use_any_match() -> None:
    smoke = _case("smoke", ("smoke",))
    regression = _case("regression", ("regression",))

    assert filter_by_tags([smoke, regression], ["smoke", "regression"]) == (smoke, regression)


def test_select_runnable_prefers_only_cases() -> None:
    focused = _case("focused", only=True)
    other = _case("other")

    assert select_runnable([other, focused]) == (focused,)
    assert select_runnable([other]) == (other,)
