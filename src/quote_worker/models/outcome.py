"""Per-carrier outcomes and the aggregated submission result.

Outcomes serialize in camelCase and omit fields that were never set, so a
dry-run outcome carries ``mode``/``message`` while a live success carries
``premium`` (possibly ``null``).
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from quote_worker.exceptions import MissingCredentialsError

DRY_RUN_MODE = "dryRun"
DRY_RUN_MESSAGE = "Would login and fill quote with provided data."


class CarrierOutcome(BaseModel):
    """Result of one (submission, carrier) attempt. Never mutated after creation."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    backend: str
    ok: bool
    mode: Literal["dryRun"] | None = None
    message: str | None = None
    premium: str | None = None
    error: str | None = None
    used_selectors_example: dict[str, str] | None = None

    @classmethod
    def dry_run(cls, backend: str, selectors_example: dict[str, str]) -> CarrierOutcome:
        return cls(
            backend=backend,
            ok=True,
            mode=DRY_RUN_MODE,
            message=DRY_RUN_MESSAGE,
            used_selectors_example=selectors_example,
        )

    @classmethod
    def captured(cls, backend: str, premium: str | None) -> CarrierOutcome:
        return cls(backend=backend, ok=True, premium=premium)

    @classmethod
    def failed(cls, backend: str, error: str) -> CarrierOutcome:
        return cls(backend=backend, ok=False, error=error)

    @classmethod
    def missing_credentials(cls, backend: str) -> CarrierOutcome:
        return cls.failed(backend, str(MissingCredentialsError(backend)))

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the HTTP response (camelCase, unset fields dropped)."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class SubmissionResult(BaseModel):
    """Orchestrator output: one outcome per carrier, in registry order."""

    model_config = ConfigDict(frozen=True)

    ok: bool = True
    id: str
    results: tuple[CarrierOutcome, ...] = Field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {"ok": self.ok, "id": self.id, "results": [r.to_dict() for r in self.results]}
