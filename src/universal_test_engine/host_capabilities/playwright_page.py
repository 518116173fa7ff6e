"""Playwright (sync API) implementation of the page capability."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any, TypeVar

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page, expect, sync_playwright
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from .host_errors import HostActionError, HostTimeoutError
from .page_contracts import Options

LOGGER = logging.getLogger(__name__)

SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")
_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")

ResultT = TypeVar("ResultT")


class PlaywrightPage:  # pylint: disable=too-many-public-methods
    """Adapts a Playwright `Page` to the dispatcher's vocabulary.

    Option keys are accepted in the camelCase used by suite documents and
    passed to Playwright in snake_case.
    """

    def __init__(self, page: Page) -> None:
        self._page = page

    def goto(self, url: str, options: Options) -> None:
        self._guard(f"goto {url}", lambda: self._page.goto(url, **_kwargs(options)))

    def click(self, selector: str, options: Options) -> None:
        self._guard(
            f"click {selector}", lambda: self._page.locator(selector).click(**_kwargs(options))
        )

    def fill(self, selector: str, value: str, options: Options) -> None:
        self._guard(
            f"fill {selector}",
            lambda: self._page.locator(selector).fill(value, **_kwargs(options)),
        )

    def select_option(self, selector: str, value: str, options: Options) -> None:
        self._guard(
            f"select {selector}",
            lambda: self._page.locator(selector).select_option(value, **_kwargs(options)),
        )

    def check(self, selector: str, options: Options) -> None:
        self._guard(
            f"check {selector}", lambda: self._page.locator(selector).check(**_kwargs(options))
        )

    def uncheck(self, selector: str, options: Options) -> None:
        self._guard(
            f"uncheck {selector}",
            lambda: self._page.locator(selector).uncheck(**_kwargs(options)),
        )

    def hover(self, selector: str, options: Options) -> None:
        self._guard(
            f"hover {selector}", lambda: self._page.locator(selector).hover(**_kwargs(options))
        )

    def press(self, selector: str, key: str, options: Options) -> None:
        self._guard(
            f"press {key} on {selector}",
            lambda: self._page.locator(selector).press(key, **_kwargs(options)),
        )

    def scroll_into_view(self, selector: str, options: Options) -> None:
        self._guard(
            f"scroll to {selector}",
            lambda: self._page.locator(selector).scroll_into_view_if_needed(**_kwargs(options)),
        )

    def scroll_to(self, x: float, y: float) -> None:
        self._guard(
            f"scroll to ({x}, {y})",
            lambda: self._page.evaluate("([x, y]) => window.scrollTo(x, y)", [x, y]),
        )

    def set_input_files(self, selector: str, files: str | Sequence[str], options: Options) -> None:
        payload = files if isinstance(files, str) else list(files)
        self._guard(
            f"upload to {selector}",
            lambda: self._page.locator(selector).set_input_files(payload, **_kwargs(options)),
        )

    def evaluate(self, expression: str) -> object:
        return self._guard("evaluate", lambda: self._page.evaluate(expression))

    def wait_for_timeout(self, milliseconds: float) -> None:
        self._page.wait_for_timeout(milliseconds)

    def wait_for_selector(self, selector: str, options: Options) -> None:
        self._guard(
            f"wait for {selector}",
            lambda: self._page.wait_for_selector(selector, **_kwargs(options)),
        )

    def wait_for_url(self, url: str, options: Options) -> None:
        self._guard(f"wait for URL {url}", lambda: self._page.wait_for_url(url, **_kwargs(options)))

    def expect_visible(self, selector: str, options: Options) -> None:
        expect(self._page.locator(selector)).to_be_visible(**_kwargs(options))

    def expect_hidden(self, selector: str, options: Options) -> None:
        expect(self._page.locator(selector)).to_be_hidden(**_kwargs(options))

    def expect_text(self, selector: str, text: str, options: Options) -> None:
        expect(self._page.locator(selector)).to_contain_text(text, **_kwargs(options))

    def expect_value(self, selector: str, value: str, options: Options) -> None:
        expect(self._page.locator(selector)).to_have_value(value, **_kwargs(options))

    def expect_url(self, url: str, options: Options) -> None:
        expect(self._page).to_have_url(url, **_kwargs(options))

    def expect_title(self, title: str, options: Options) -> None:
        expect(self._page).to_have_title(title, **_kwargs(options))

    def expect_count(self, selector: str, count: int, options: Options) -> None:
        expect(self._page.locator(selector)).to_have_count(count, **_kwargs(options))

    def screenshot(self, *, full_page: bool = False, selector: str | None = None) -> bytes:
        if selector:
            return self._guard(
                f"screenshot {selector}", lambda: self._page.locator(selector).screenshot()
            )
        return self._guard("screenshot", lambda: self._page.screenshot(full_page=full_page))

    def set_viewport(self, width: int, height: int) -> None:
        self._page.set_viewport_size({"width": width, "height": height})

    @staticmethod
    def _guard(description: str, operation: Callable[[], ResultT]) -> ResultT:
        try:
            return operation()
        except PlaywrightTimeoutError as exc:
            raise HostTimeoutError(f"{description}: {exc.message}") from exc
        except PlaywrightError as exc:
            raise HostActionError(f"{description}: {exc.message}") from exc


class PlaywrightSessionFactory:  # pylint: disable=too-few-public-methods
    """Launches one browser per opened session."""

    def __init__(
        self,
        *,
        browser_name: str = "chromium",
        headless: bool = True,
        action_timeout_ms: int = 15000,
        navigation_timeout_ms: int = 30000,
    ) -> None:
        if browser_name not in SUPPORTED_BROWSERS:
            raise ValueError(f"Unsupported browser '{browser_name}'.")
        self._browser_name = browser_name
        self._headless = headless
        self._action_timeout_ms = action_timeout_ms
        self._navigation_timeout_ms = navigation_timeout_ms

    @contextmanager
    def open(self, *, base_url: str, headers: Mapping[str, str]) -> Iterator[PlaywrightPage]:
        with sync_playwright() as playwright:
            try:
                browser = getattr(playwright, self._browser_name).launch(headless=self._headless)
            except PlaywrightError as exc:
                raise HostActionError(
                    f"Unable to launch {self._browser_name}: {exc.message}"
                ) from exc
            try:
                context = browser.new_context(
                    base_url=base_url or None,
                    extra_http_headers=dict(headers) or None,
                )
                context.set_default_timeout(self._action_timeout_ms)
                context.set_default_navigation_timeout(self._navigation_timeout_ms)
                yield PlaywrightPage(context.new_page())
            finally:
                LOGGER.debug("Closing %s session for %s", self._browser_name, base_url)
                browser.close()


def _kwargs(options: Options) -> dict[str, Any]:
    return {_CAMEL_BOUNDARY.sub("_", key).lower(): value for key, value in options.items()}
