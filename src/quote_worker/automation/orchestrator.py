"""Submission orchestrator — run every configured carrier for one submission.

Carriers are processed strictly one after another: a carrier's browser
session is closed before the next one opens, which bounds each in-flight
submission to a single browser process.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence

from quote_worker.automation.driver import CarrierDriver
from quote_worker.carriers.registry import CarrierConfig
from quote_worker.models.outcome import CarrierOutcome, SubmissionResult
from quote_worker.models.submission import Submission

logger = logging.getLogger(__name__)


class SubmissionOrchestrator:
    """Runs the carrier registry against a submission and aggregates outcomes.

    Args:
        carriers: Read-only carrier registry, in the order results are reported.
        driver: Performs (or simulates) each carrier attempt.
        dry_run: Default mode when :meth:`submit` is not given one.
    """

    def __init__(
        self,
        carriers: Sequence[CarrierConfig],
        driver: CarrierDriver,
        *,
        dry_run: bool = True,
    ) -> None:
        self._carriers = tuple(carriers)
        self._driver = driver
        self._dry_run = dry_run

    @property
    def carriers(self) -> tuple[CarrierConfig, ...]:
        return self._carriers

    def submit(self, submission: Submission, *, dry_run: bool | None = None) -> SubmissionResult:
        """Attempt every carrier in order.

        Per-carrier failures are reported in the outcomes and never fail the
        submission; anything raised here is unexpected and propagates.
        """
        mode = self._dry_run if dry_run is None else dry_run
        start = time.monotonic()
        results: list[CarrierOutcome] = []

        for carrier in self._carriers:
            if not carrier.has_credentials:
                logger.warning("Submission %s: %s has no credentials, skipping", submission.id, carrier.name)
                results.append(CarrierOutcome.missing_credentials(carrier.name))
                continue
            results.append(self._driver.run(carrier, submission, dry_run=mode))

        logger.info(
            "Submission %s: %d/%d carriers ok in %.1fs (%s)",
            submission.id,
            sum(1 for r in results if r.ok),
            len(results),
            time.monotonic() - start,
            "dry run" if mode else "live",
        )
        return SubmissionResult(ok=True, id=submission.id, results=tuple(results))
