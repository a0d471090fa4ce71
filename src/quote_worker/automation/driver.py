"""Carrier automation driver — simulate or drive one carrier's quote form.

Live flow (one browser session per carrier attempt)::

    IDLE -> LOGGED_IN -> QUOTE_STARTED -> FORM_FILLED -> SUBMITTED -> RESULT_CAPTURED
      \\________________________ any step raises ________________________/ -> FAILED

Every failure inside the flow is turned into a ``CarrierOutcome`` with
``ok=False``; nothing propagates to the orchestrator. The browser session
is closed before the outcome is returned, whichever way the flow ended.
"""

from __future__ import annotations

import logging
import re

from quote_worker.browser.alternatives import click_candidates, first_successful, press_candidate
from quote_worker.browser.page import BrowserLauncher, QuotePage
from quote_worker.carriers.registry import CarrierConfig
from quote_worker.exceptions import InvalidTransitionError, StepTimeoutError
from quote_worker.models.outcome import CarrierOutcome
from quote_worker.models.states import QuoteState, can_transition
from quote_worker.models.submission import Submission
from quote_worker.settings.config import BrowserSettings

logger = logging.getLogger(__name__)

_NON_DIGITS_RE = re.compile(r"\D")


def digits_only(value: str) -> str:
    """Strip every non-digit character (carriers expect bare phone digits)."""
    return _NON_DIGITS_RE.sub("", value)


class QuoteFlow:
    """One live quote attempt against an open page.

    Args:
        page: Browser page for this attempt only.
        carrier: Carrier URLs, credentials and selectors.
        submission: The validated request data to enter.
        settings: Browser timeouts for alternative actions and premium capture.
    """

    def __init__(
        self,
        page: QuotePage,
        carrier: CarrierConfig,
        submission: Submission,
        settings: BrowserSettings,
    ) -> None:
        self._page = page
        self._carrier = carrier
        self._submission = submission
        self._settings = settings
        self.state = QuoteState.IDLE

    def run(self) -> str | None:
        """Execute every step; return the captured premium text, or ``None``."""
        try:
            self.login()
            self.start_quote()
            self.fill_form()
            self.submit_quote()
            return self.capture_premium()
        except Exception:
            self._advance(QuoteState.FAILED)
            raise

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def login(self) -> None:
        sel = self._carrier.selectors
        self._page.navigate(self._carrier.login_url, wait_until="domcontentloaded")
        self._page.fill(sel.css("username"), self._carrier.username)
        self._page.fill(sel.css("password"), self._carrier.password)
        timeout = self._settings.candidate_timeout_ms
        first_successful(
            "login submit",
            [
                *click_candidates(self._page, sel.login_submit, timeout),
                press_candidate(self._page, sel.css("password"), "Enter", timeout),
            ],
        )
        self._page.wait_for_load_state("networkidle")
        self._advance(QuoteState.LOGGED_IN)

    def start_quote(self) -> None:
        self._page.navigate(self._carrier.start_url, wait_until="domcontentloaded")
        self._advance(QuoteState.QUOTE_STARTED)

    def fill_form(self) -> None:
        sel = self._carrier.selectors
        contact = self._submission.contact
        address = self._submission.address

        self._page.fill(sel.css("first_name"), contact.first_name)
        self._page.fill(sel.css("last_name"), contact.last_name)
        self._page.fill(sel.css("email"), contact.email)
        self._page.fill(sel.css("phone"), digits_only(contact.phone))

        self._page.fill(sel.css("street1"), address.street1)
        self._page.fill(sel.css("city"), address.city)
        self._page.select_option(sel.css("state"), address.state)
        self._page.fill(sel.css("zip"), address.zip)
        self._advance(QuoteState.FORM_FILLED)

    def submit_quote(self) -> None:
        sel = self._carrier.selectors
        first_successful(
            "quote submit",
            click_candidates(self._page, sel.quote_submit, self._settings.candidate_timeout_ms),
        )
        self._page.wait_for_load_state("networkidle")
        self._advance(QuoteState.SUBMITTED)

    def capture_premium(self) -> str | None:
        """Read the premium display.

        The quote was already submitted, so nothing here fails the attempt:
        a missing, blank or unreadable premium is recorded as ``None``.
        """
        selector = self._carrier.selectors.css("premium")
        premium: str | None = None
        try:
            self._page.wait_for_selector(selector, timeout_ms=self._settings.premium_timeout_ms)
            text = self._page.text_content(selector)
            premium = text.strip() if text and text.strip() else None
        except StepTimeoutError:
            logger.info("%s: no premium displayed within %dms", self._carrier.name, self._settings.premium_timeout_ms)
        except Exception as exc:
            logger.warning("%s: premium could not be read: %s", self._carrier.name, exc)
        self._advance(QuoteState.RESULT_CAPTURED)
        return premium

    def _advance(self, target: QuoteState) -> None:
        if not can_transition(self.state, target):
            raise InvalidTransitionError(self.state.value, target.value)
        logger.debug("%s: %s -> %s", self._carrier.name, self.state.value, target.value)
        self.state = target


class CarrierDriver:
    """Produces one ``CarrierOutcome`` per carrier attempt.

    Args:
        launcher: Opens a scoped browser session for each live attempt.
        settings: Browser timeouts passed to each :class:`QuoteFlow`.
    """

    def __init__(self, launcher: BrowserLauncher, settings: BrowserSettings) -> None:
        self._launcher = launcher
        self._settings = settings

    def run(self, carrier: CarrierConfig, submission: Submission, *, dry_run: bool) -> CarrierOutcome:
        """Simulate or perform the quote flow for *carrier*."""
        if dry_run:
            logger.info("Submission %s: %s dry run", submission.id, carrier.name)
            return CarrierOutcome.dry_run(carrier.name, carrier.selectors.example_map())
        return self._run_live(carrier, submission)

    def _run_live(self, carrier: CarrierConfig, submission: Submission) -> CarrierOutcome:
        flow: QuoteFlow | None = None
        try:
            with self._launcher.open() as page:
                flow = QuoteFlow(page, carrier, submission, self._settings)
                premium = flow.run()
        except Exception as exc:
            state = flow.state.value if flow else QuoteState.IDLE.value
            logger.warning(
                "Submission %s: %s failed (state=%s): %s",
                submission.id,
                carrier.name,
                state,
                exc,
            )
            return CarrierOutcome.failed(carrier.name, str(exc) or type(exc).__name__)

        logger.info(
            "Submission %s: %s quote captured (premium=%s)",
            submission.id,
            carrier.name,
            premium if premium is not None else "none",
        )
        return CarrierOutcome.captured(carrier.name, premium)
