"""Carrier automation: the per-carrier quote flow and the submission loop."""

from quote_worker.automation.driver import CarrierDriver, QuoteFlow
from quote_worker.automation.orchestrator import SubmissionOrchestrator

__all__ = ["CarrierDriver", "QuoteFlow", "SubmissionOrchestrator"]
