"""Playwright implementation of the browser capability interface.

Uses the sync API: the HTTP layer runs each submission in a worker thread,
and every carrier attempt gets its own browser, context and page.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import ExitStack, contextmanager

from playwright.sync_api import Page, TimeoutError as PlaywrightTimeout, sync_playwright

from quote_worker.browser.page import LoadState, QuotePage, WaitUntil
from quote_worker.exceptions import StepTimeoutError
from quote_worker.settings.config import BrowserSettings

logger = logging.getLogger(__name__)


class PlaywrightQuotePage:
    """Adapts a Playwright ``Page`` to :class:`QuotePage`."""

    def __init__(self, page: Page) -> None:
        self._page = page

    def navigate(self, url: str, *, wait_until: WaitUntil = "domcontentloaded") -> None:
        logger.debug("goto %s (wait_until=%s)", url, wait_until)
        self._page.goto(url, wait_until=wait_until)

    def fill(self, selector: str, value: str) -> None:
        self._page.fill(selector, value)

    def select_option(self, selector: str, value: str) -> None:
        self._page.select_option(selector, value)

    def click(self, selector: str, *, timeout_ms: int | None = None) -> None:
        self._page.click(selector, timeout=timeout_ms)

    def press(self, selector: str, key: str, *, timeout_ms: int | None = None) -> None:
        self._page.press(selector, key, timeout=timeout_ms)

    def wait_for_load_state(self, state: LoadState = "networkidle") -> None:
        self._page.wait_for_load_state(state)

    def wait_for_selector(self, selector: str, *, timeout_ms: int) -> None:
        try:
            self._page.wait_for_selector(selector, timeout=timeout_ms)
        except PlaywrightTimeout as exc:
            raise StepTimeoutError(selector, timeout_ms) from exc

    def text_content(self, selector: str) -> str | None:
        return self._page.text_content(selector)


class PlaywrightLauncher:
    """Launches headless Chromium for one carrier attempt.

    Requires ``playwright install chromium`` to have been run at least once.
    """

    def __init__(self, settings: BrowserSettings) -> None:
        self._settings = settings

    @contextmanager
    def open(self) -> Iterator[QuotePage]:
        with sync_playwright() as pw, ExitStack() as stack:
            browser = pw.chromium.launch(headless=self._settings.headless)
            stack.callback(browser.close)
            context = browser.new_context()
            stack.callback(context.close)
            context.set_default_timeout(self._settings.timeout_ms)
            page = context.new_page()
            stack.callback(page.close)
            logger.debug("Browser session opened (headless=%s)", self._settings.headless)
            yield PlaywrightQuotePage(page)
