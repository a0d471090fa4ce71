"""Quote-worker test configuration — shared fixtures for unit and integration tests."""

from __future__ import annotations

import copy
import os
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import pytest

from quote_worker.exceptions import StepTimeoutError

# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_settings_cache(monkeypatch):
    """Clear the settings LRU cache and stray QW_* env vars between tests."""
    from quote_worker.settings.config import get_settings

    for name in list(os.environ):
        if name.startswith("QW_"):
            monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------

VALID_PAYLOAD: dict[str, Any] = {
    "contact": {
        "firstName": "Jane",
        "lastName": "Doe",
        "email": "jane@example.com",
        "phone": "5551234567",
    },
    "address": {
        "street1": "123 Main St",
        "city": "Austin",
        "state": "TX",
        "zip": "78701",
    },
}


@pytest.fixture()
def valid_payload() -> dict[str, Any]:
    """A fresh copy of the Jane Doe / Austin TX example payload."""
    return copy.deepcopy(VALID_PAYLOAD)


@pytest.fixture()
def submission(valid_payload):
    from quote_worker.models.submission import build_submission

    return build_submission(valid_payload, "1700000000000")


# ---------------------------------------------------------------------------
# Fake browser
# ---------------------------------------------------------------------------


class FakePage:
    """In-memory ``QuotePage`` that records every call.

    Args:
        failures: Maps ``method`` or ``(method, target)`` to an exception to raise.
        premium_text: Returned by ``text_content``.
        premium_visible: When ``False``, ``wait_for_selector`` times out.
    """

    def __init__(
        self,
        *,
        failures: dict[Any, Exception] | None = None,
        premium_text: str | None = "  $1,234.56  ",
        premium_visible: bool = True,
    ) -> None:
        self.calls: list[tuple[Any, ...]] = []
        self.failures = failures or {}
        self.premium_text = premium_text
        self.premium_visible = premium_visible

    def _record(self, method: str, target: str, *args: Any) -> None:
        self.calls.append((method, target, *args))
        exc = self.failures.get((method, target)) or self.failures.get(method)
        if exc is not None:
            raise exc

    def navigate(self, url, *, wait_until="domcontentloaded"):
        self._record("navigate", url, wait_until)

    def fill(self, selector, value):
        self._record("fill", selector, value)

    def select_option(self, selector, value):
        self._record("select_option", selector, value)

    def click(self, selector, *, timeout_ms=None):
        self._record("click", selector)

    def press(self, selector, key, *, timeout_ms=None):
        self._record("press", selector, key)

    def wait_for_load_state(self, state="networkidle"):
        self._record("wait_for_load_state", state)

    def wait_for_selector(self, selector, *, timeout_ms):
        self._record("wait_for_selector", selector)
        if not self.premium_visible:
            raise StepTimeoutError(selector, timeout_ms)

    def text_content(self, selector):
        self._record("text_content", selector)
        return self.premium_text

    def methods(self) -> list[str]:
        return [call[0] for call in self.calls]


class FakeLauncher:
    """``BrowserLauncher`` that hands out ``FakePage``s and counts open/close.

    Args:
        page_kwargs: Per-session ``FakePage`` arguments, consumed in order;
            sessions beyond the list get a default page.
        fail_on_open: Raised instead of opening a session.
    """

    def __init__(self, page_kwargs: list[dict[str, Any]] | None = None, fail_on_open: Exception | None = None):
        self.page_kwargs = list(page_kwargs or [])
        self.fail_on_open = fail_on_open
        self.pages: list[FakePage] = []
        self.opened = 0
        self.closed = 0

    @property
    def open_sessions(self) -> int:
        return self.opened - self.closed

    @contextmanager
    def open(self) -> Iterator[FakePage]:
        if self.fail_on_open is not None:
            raise self.fail_on_open
        kwargs = self.page_kwargs[len(self.pages)] if len(self.pages) < len(self.page_kwargs) else {}
        page = FakePage(**kwargs)
        self.pages.append(page)
        self.opened += 1
        try:
            yield page
        finally:
            self.closed += 1


@pytest.fixture()
def fake_launcher() -> FakeLauncher:
    return FakeLauncher()


@pytest.fixture()
def make_launcher():
    """Factory for ``FakeLauncher`` instances with scripted pages."""
    return FakeLauncher


@pytest.fixture()
def make_page():
    """Factory for standalone ``FakePage`` instances."""
    return FakePage


@pytest.fixture()
def browser_settings():
    from quote_worker.settings.config import BrowserSettings

    return BrowserSettings(candidate_timeout_ms=100, premium_timeout_ms=100)


@pytest.fixture()
def make_carrier():
    """Factory for ``CarrierConfig`` with placeholder URLs and credentials."""
    from quote_worker.carriers.registry import CarrierConfig

    def _make(name: str = "carrierA", **overrides: Any) -> CarrierConfig:
        fields: dict[str, Any] = {
            "name": name,
            "login_url": f"https://example.com/login-{name}",
            "start_url": f"https://example.com/new-quote-{name}",
            "username": f"{name}@example.com",
            "password": "secret",
        }
        fields.update(overrides)
        return CarrierConfig(**fields)

    return _make


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests that exercise the HTTP or CLI surface end to end")
    config.addinivalue_line("markers", "slow: marks tests that take more than a few seconds")
