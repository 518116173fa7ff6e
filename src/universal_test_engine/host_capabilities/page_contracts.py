"""Browser page capability consumed by the UI action dispatcher.

Implementations raise `HostTimeoutError` or `HostActionError` when an action
cannot be performed, and `AssertionError` when an `expect_*` check does not
hold within its timeout.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from contextlib import AbstractContextManager
from typing import Any, Protocol

Options = Mapping[str, Any]


class PageCapability(Protocol):  # pylint: disable=too-many-public-methods
    """Operations the dispatcher may perform on one open page."""

    def goto(self, url: str, options: Options) -> None: ...

    def click(self, selector: str, options: Options) -> None: ...

    def fill(self, selector: str, value: str, options: Options) -> None: ...

    def select_option(self, selector: str, value: str, options: Options) -> None: ...

    def check(self, selector: str, options: Options) -> None: ...

    def uncheck(self, selector: str, options: Options) -> None: ...

    def hover(self, selector: str, options: Options) -> None: ...

    def press(self, selector: str, key: str, options: Options) -> None: ...

    def scroll_into_view(self, selector: str, options: Options) -> None: ...

    def scroll_to(self, x: float, y: float) -> None: ...

    def set_input_files(
        self, selector: str, files: str | Sequence[str], options: Options
    ) -> None: ...

    def evaluate(self, expression: str) -> object: ...

    def wait_for_timeout(self, milliseconds: float) -> None: ...

    def wait_for_selector(self, selector: str, options: Options) -> None: ...

    def wait_for_url(self, url: str, options: Options) -> None: ...

    def expect_visible(self, selector: str, options: Options) -> None: ...

    def expect_hidden(self, selector: str, options: Options) -> None: ...

    def expect_text(self, selector: str, text: str, options: Options) -> None: ...

    def expect_value(self, selector: str, value: str, options: Options) -> None: ...

    def expect_url(self, url: str, options: Options) -> None: ...

    def expect_title(self, title: str, options: Options) -> None: ...

    def expect_count(self, selector: str, count: int, options: Options) -> None: ...

    def screenshot(self, *, full_page: bool = False, selector: str | None = None) -> bytes: ...

    def set_viewport(self, width: int, height: int) -> None: ...


class PageSessionFactory(Protocol):  # pylint: disable=too-few-public-methods
    """Opens an isolated page; the context manager closes the browser on every exit path."""

    def open(
        self, *, base_url: str, headers: Mapping[str, str]
    ) -> AbstractContextManager[PageCapability]: ...
