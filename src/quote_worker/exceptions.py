"""Quote-worker exception hierarchy."""

from __future__ import annotations


class QuoteWorkerError(Exception):
    """Base exception for all quote-worker errors."""


class PayloadValidationError(QuoteWorkerError):
    """Raised when a submission payload is missing required fields.

    Attributes:
        errors: Human-readable messages, one per missing field, in check order.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid payload")


class MissingCredentialsError(QuoteWorkerError):
    """Raised for a carrier configured without a username or password."""

    def __init__(self, carrier: str) -> None:
        self.carrier = carrier
        super().__init__("Missing credentials")


class InvalidTransitionError(QuoteWorkerError):
    """Raised when the quote flow attempts a transition the state table forbids."""

    def __init__(self, current: str, target: str) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Invalid quote flow transition {current} -> {target}")


class StepTimeoutError(QuoteWorkerError):
    """Raised by the browser layer when a bounded wait expires."""

    def __init__(self, selector: str, timeout_ms: int) -> None:
        self.selector = selector
        self.timeout_ms = timeout_ms
        super().__init__(f"Timed out after {timeout_ms}ms waiting for {selector!r}")


class AutomationStepError(QuoteWorkerError):
    """Raised when a live carrier automation step cannot complete."""


class NoAlternativeSucceededError(AutomationStepError):
    """Raised when every candidate in an ordered list of alternative actions fails.

    Attributes:
        failures: ``(label, message)`` pairs in the order the candidates were tried.
    """

    def __init__(self, purpose: str, failures: list[tuple[str, str]]) -> None:
        self.purpose = purpose
        self.failures = list(failures)
        detail = "; ".join(f"{label}: {message}" for label, message in self.failures)
        super().__init__(f"No {purpose} action succeeded ({detail})")
