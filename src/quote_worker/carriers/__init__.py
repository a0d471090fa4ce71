"""Carrier registry and per-carrier selector configuration."""

from quote_worker.carriers.registry import CarrierConfig, build_registry
from quote_worker.carriers.selectors import CarrierSelectors

__all__ = ["CarrierConfig", "CarrierSelectors", "build_registry"]
