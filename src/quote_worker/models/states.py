"""Quote flow state machine definitions for one live carrier attempt."""

from enum import Enum


class QuoteState(str, Enum):
    """States a carrier quote attempt moves through."""

    IDLE = "IDLE"
    LOGGED_IN = "LOGGED_IN"
    QUOTE_STARTED = "QUOTE_STARTED"
    FORM_FILLED = "FORM_FILLED"
    SUBMITTED = "SUBMITTED"
    RESULT_CAPTURED = "RESULT_CAPTURED"
    FAILED = "FAILED"


TERMINAL_STATES = {QuoteState.RESULT_CAPTURED, QuoteState.FAILED}

# Normal transitions; FAILED is additionally valid from every non-terminal state.
STATE_TRANSITIONS: dict[QuoteState, list[QuoteState]] = {
    QuoteState.IDLE: [QuoteState.LOGGED_IN],
    QuoteState.LOGGED_IN: [QuoteState.QUOTE_STARTED],
    QuoteState.QUOTE_STARTED: [QuoteState.FORM_FILLED],
    QuoteState.FORM_FILLED: [QuoteState.SUBMITTED],
    QuoteState.SUBMITTED: [QuoteState.RESULT_CAPTURED],
}


def can_transition(current: QuoteState, target: QuoteState) -> bool:
    """Return ``True`` if *current* may move to *target*."""
    if current in TERMINAL_STATES:
        return False
    if target == QuoteState.FAILED:
        return True
    return target in STATE_TRANSITIONS.get(current, [])
