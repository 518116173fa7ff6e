"""Tag based selection of declared test cases."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol, TypeVar


class Tagged(Protocol):
    @property
    def tags(self) -> Sequence[str]: ...


TaggedT = TypeVar("TaggedT", bound=Tagged)


def filter_by_tags(tests: Iterable[TaggedT], requested_tags: Iterable[str]) -> tuple[TaggedT, ...]:
    """Keep the tests declaring at least one requested tag.

    An empty request selects everything, in declaration order. Untagged tests
    never match a non-empty request.
    """
    requested = frozenset(requested_tags)
    if not requested:
        return tuple(tests)
    return tuple(test for test in tests if requested.intersection(test.tags))


def select_runnable(tests: Sequence[TaggedT]) -> tuple[TaggedT, ...]:
    """Restrict a suite to its `only` cases when any case is marked `only`."""
    focused = tuple(test for test in tests if getattr(test, "only", False))
    return focused or tuple(tests)
