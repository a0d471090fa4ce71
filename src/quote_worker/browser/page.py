"""Browser capability interface used by the carrier quote flow.

Keeping the flow behind these protocols lets it run against a fake page
in tests and against Playwright in production.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Literal, Protocol

WaitUntil = Literal["commit", "domcontentloaded", "load", "networkidle"]
LoadState = Literal["domcontentloaded", "load", "networkidle"]


class QuotePage(Protocol):
    """The page operations a carrier quote flow needs.

    Implementations raise on failure. :meth:`wait_for_selector` raises
    :class:`~quote_worker.exceptions.StepTimeoutError` when its bounded
    wait expires.
    """

    def navigate(self, url: str, *, wait_until: WaitUntil = "domcontentloaded") -> None: ...

    def fill(self, selector: str, value: str) -> None: ...

    def select_option(self, selector: str, value: str) -> None: ...

    def click(self, selector: str, *, timeout_ms: int | None = None) -> None: ...

    def press(self, selector: str, key: str, *, timeout_ms: int | None = None) -> None: ...

    def wait_for_load_state(self, state: LoadState = "networkidle") -> None: ...

    def wait_for_selector(self, selector: str, *, timeout_ms: int) -> None: ...

    def text_content(self, selector: str) -> str | None: ...


class BrowserLauncher(Protocol):
    """Opens one scoped browser session (browser, context, page).

    Leaving the returned context manager closes all three, on success and
    on error alike.
    """

    def open(self) -> AbstractContextManager[QuotePage]: ...
