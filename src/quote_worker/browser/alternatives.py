"""Ordered alternative actions with first-success semantics.

Carrier portals label the same affordance differently ("Submit", "Rate",
"Next"; click vs. Enter to log in). Rather than branching per carrier, a
step lists its candidates in order; they are attempted one at a time and
the first that does not raise wins.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from quote_worker.browser.page import QuotePage
from quote_worker.exceptions import NoAlternativeSucceededError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CandidateAction:
    """One way of performing a step. ``run`` raises if it does not apply."""

    label: str
    run: Callable[[], None]


def first_successful(purpose: str, candidates: Sequence[CandidateAction]) -> str:
    """Run *candidates* in order, stopping at the first that succeeds.

    Args:
        purpose: Short name of the step, used in logs and the error message.
        candidates: Actions to try, most preferred first.

    Returns:
        The label of the candidate that succeeded.

    Raises:
        NoAlternativeSucceededError: If every candidate raised (or none given).
    """
    failures: list[tuple[str, str]] = []
    for candidate in candidates:
        try:
            candidate.run()
        except Exception as exc:
            logger.debug("%s candidate %r failed: %s", purpose, candidate.label, exc)
            failures.append((candidate.label, str(exc)))
            continue
        logger.debug("%s resolved via %r", purpose, candidate.label)
        return candidate.label
    raise NoAlternativeSucceededError(purpose, failures)


def click_candidates(page: QuotePage, selectors: Sequence[str], timeout_ms: int) -> list[CandidateAction]:
    """Build one click candidate per selector."""
    return [
        CandidateAction(label=f"click {sel}", run=lambda sel=sel: page.click(sel, timeout_ms=timeout_ms))
        for sel in selectors
    ]


def press_candidate(page: QuotePage, selector: str, key: str, timeout_ms: int) -> CandidateAction:
    """Build a candidate that presses *key* in the element matching *selector*."""
    return CandidateAction(
        label=f"press {key} in {selector}",
        run=lambda: page.press(selector, key, timeout_ms=timeout_ms),
    )
