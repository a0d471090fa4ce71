"""Configuration loader for the quote worker using Pydantic settings.

Config precedence (highest wins):
  1. Explicit values / CLI flags
  2. Environment variables (QW_* with __ for nesting)
  3. settings.local.toml
  4. settings.<env>.toml
  5. settings.default.toml
  6. Built-in defaults (placeholder carriers, simulate mode)
"""

from __future__ import annotations

import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from quote_worker.carriers.selectors import CarrierSelectors

# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

_THIS_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = Path(os.getenv("QW_PROJECT_ROOT", _THIS_DIR.parents[2]))
CONFIG_DIR = PROJECT_ROOT / "config"

ENV_VAR_NAME = "QW_ENV"
DEFAULT_ENV = "local"

# Placeholder carriers so the service runs end to end with zero configuration.
DEFAULT_CARRIERS: dict[str, dict[str, Any]] = {
    "a": {
        "name": "UP&C",
        "login_url": "https://example.com/login-a",
        "start_url": "https://example.com/new-quote-a",
        "username": "user@example.com",
        "password": "password123",
    },
    "b": {
        "name": "carrierB",
        "login_url": "https://example.com/login-b",
        "start_url": "https://example.com/new-quote-b",
        "username": "user2@example.com",
        "password": "password456",
    },
}


def _resolve_env() -> str:
    return (os.getenv(ENV_VAR_NAME) or DEFAULT_ENV).strip()


def _load_toml(path: Path) -> dict[str, Any]:
    if path.is_file():
        with open(path, "rb") as f:
            return tomllib.load(f)
    return {}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge *override* into a copy of *base*, recursing into nested dicts."""
    merged = dict(base)
    for key, val in override.items():
        if isinstance(val, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], val)
        else:
            merged[key] = val
    return merged


def parse_dry_run(value: Any) -> bool:
    """Interpret a textual simulate/live flag: anything but ``"false"`` simulates."""
    if isinstance(value, bool):
        return value
    if value is None:
        return True
    return str(value).strip().lower() != "false"


# ---------------------------------------------------------------------------
# Section models
# ---------------------------------------------------------------------------


class CarrierSettings(BaseModel):
    """Connection and credential configuration for one carrier portal."""

    name: str = ""
    login_url: str = ""
    start_url: str = ""
    username: str = ""
    password: str = Field(default="", repr=False)
    selectors: CarrierSelectors = Field(default_factory=CarrierSelectors)


class BrowserSettings(BaseSettings):
    """Playwright browser settings."""

    model_config = SettingsConfigDict(env_prefix="QW_BROWSER__")

    headless: bool = True
    timeout_ms: int = Field(default=30_000, gt=0)
    candidate_timeout_ms: int = Field(default=5_000, gt=0)
    premium_timeout_ms: int = Field(default=15_000, gt=0)


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="QW_API__")

    host: str = "0.0.0.0"
    port: int = 3000
    max_body_bytes: int = Field(default=1_048_576, gt=0)


class LogSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="QW_LOG__")

    level: str = "INFO"
    json_format: bool = False


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------


class Settings(BaseSettings):
    """Root quote-worker settings with nested sections."""

    model_config = SettingsConfigDict(
        env_prefix="QW_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    env: str = Field(default_factory=_resolve_env)
    project_root: Path = Field(default=PROJECT_ROOT)
    dry_run: bool = True

    browser: BrowserSettings = Field(default_factory=BrowserSettings)
    api: APISettings = Field(default_factory=APISettings)
    log: LogSettings = Field(default_factory=LogSettings)
    carriers: dict[str, CarrierSettings] = Field(default_factory=dict)

    @field_validator("dry_run", mode="before")
    @classmethod
    def _parse_dry_run(cls, v: Any) -> bool:
        return parse_dry_run(v)

    @model_validator(mode="before")
    @classmethod
    def _merge_toml_files(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Layer built-in carriers and TOML config files beneath env var overrides."""
        defaults = _load_toml(CONFIG_DIR / "settings.default.toml")
        env_name = (values.get("env") or os.getenv(ENV_VAR_NAME) or DEFAULT_ENV).strip()
        env_overrides = _load_toml(CONFIG_DIR / f"settings.{env_name}.toml")
        local_overrides = _load_toml(CONFIG_DIR / "settings.local.toml")

        # Merge: built-ins < defaults < env-specific < local < explicit values
        merged: dict[str, Any] = {"carriers": DEFAULT_CARRIERS}
        for layer in (defaults, env_overrides, local_overrides, values):
            merged = _deep_merge(merged, layer)
        return merged


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton settings instance (cached)."""
    return Settings()
