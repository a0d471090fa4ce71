"""Carrier registry — read-only carrier configurations built once from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from quote_worker.carriers.selectors import CarrierSelectors

if TYPE_CHECKING:
    from quote_worker.settings.config import Settings


class CarrierConfig(BaseModel):
    """Connection/credential configuration for one carrier.

    Frozen after construction so a single registry can be shared across
    concurrent submissions.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    login_url: str
    start_url: str
    username: str = ""
    password: str = Field(default="", repr=False)
    selectors: CarrierSelectors = Field(default_factory=CarrierSelectors)

    @property
    def has_credentials(self) -> bool:
        return bool(self.username) and bool(self.password)


def build_registry(settings: Settings) -> tuple[CarrierConfig, ...]:
    """Return the configured carriers in slot order.

    A carrier without an explicit ``name`` is named after its settings slot.
    """
    return tuple(
        CarrierConfig(
            name=cfg.name or slot,
            login_url=cfg.login_url,
            start_url=cfg.start_url,
            username=cfg.username,
            password=cfg.password,
            selectors=cfg.selectors,
        )
        for slot, cfg in settings.carriers.items()
    )
