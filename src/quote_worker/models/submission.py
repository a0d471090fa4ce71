"""Submission models and the payload validator.

The HTTP layer hands :func:`validate_payload` whatever JSON it received.
Only presence is checked: email shape, phone digit count and state codes
are left to the carrier portals.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from quote_worker.exceptions import PayloadValidationError

# (section, field, message) in the order errors are reported.
REQUIRED_FIELDS: tuple[tuple[str, str, str], ...] = (
    ("contact", "firstName", "contact.firstName is required"),
    ("contact", "lastName", "contact.lastName is required"),
    ("contact", "email", "contact.email is required"),
    ("contact", "phone", "contact.phone is required"),
    ("address", "street1", "address.street1 is required"),
    ("address", "city", "address.city is required"),
    ("address", "state", "address.state is required (2-letter code)"),
    ("address", "zip", "address.zip is required"),
)

_FROZEN_CAMEL = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
    coerce_numbers_to_str=True,
    extra="ignore",
)


class Contact(BaseModel):
    model_config = _FROZEN_CAMEL

    first_name: str
    last_name: str
    email: str
    phone: str


class Address(BaseModel):
    model_config = _FROZEN_CAMEL

    street1: str
    city: str
    state: str
    zip: str


class Submission(BaseModel):
    """A validated quote request. Immutable; lives for one HTTP request."""

    model_config = _FROZEN_CAMEL

    id: str
    contact: Contact
    address: Address


def validate_payload(payload: Any) -> list[str]:
    """Return the missing-field errors for *payload* (empty list means valid).

    Non-mapping payloads and non-mapping ``contact``/``address`` sections are
    treated as empty. The input is never modified.
    """
    root = payload if isinstance(payload, Mapping) else {}
    errors: list[str] = []
    for section, field, message in REQUIRED_FIELDS:
        group = root.get(section)
        if not isinstance(group, Mapping):
            group = {}
        if not group.get(field):
            errors.append(message)
    return errors


def build_submission(payload: Any, submission_id: str) -> Submission:
    """Validate *payload* and return a frozen :class:`Submission`.

    Raises:
        PayloadValidationError: If a required field is missing, or present
            with a value that cannot be read as text (e.g. a nested object).
    """
    errors = validate_payload(payload)
    if errors:
        raise PayloadValidationError(errors)
    try:
        return Submission.model_validate(
            {"id": submission_id, "contact": payload["contact"], "address": payload["address"]}
        )
    except ValidationError as exc:
        raise PayloadValidationError(
            [f"{'.'.join(str(p) for p in err['loc'])} must be a string" for err in exc.errors()]
        ) from exc


class _SubmissionIdFactory:
    """Millisecond-timestamp ids, bumped so no two requests share one."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last = 0

    def __call__(self) -> str:
        now_ms = time.time_ns() // 1_000_000
        with self._lock:
            self._last = max(now_ms, self._last + 1)
            return str(self._last)


new_submission_id = _SubmissionIdFactory()
