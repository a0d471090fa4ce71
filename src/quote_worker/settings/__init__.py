"""Quote-worker settings (pydantic-settings, TOML layered)."""

from quote_worker.settings.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
