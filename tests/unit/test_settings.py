"""Unit tests for quote-worker settings.

Covers defaults, the textual dry-run flag, env var overrides (including
per-carrier nested overrides), TOML profile layering and deep merging.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from quote_worker.settings import config as config_module
from quote_worker.settings.config import _deep_merge, parse_dry_run

REPO_CONFIG_DIR = Path(__file__).resolve().parents[2] / "config"


class TestSettings:
    """Core settings loading and override mechanics."""

    def test_default_settings_load(self):
        from quote_worker.settings import get_settings

        s = get_settings()
        assert s.env == "local"
        assert s.dry_run is True

    def test_get_settings_is_cached(self):
        from quote_worker.settings import get_settings

        assert get_settings() is get_settings()

    def test_default_carriers_are_placeholders(self):
        from quote_worker.settings.config import Settings

        s = Settings()
        assert list(s.carriers) == ["a", "b"]
        assert s.carriers["a"].name == "UP&C"
        assert s.carriers["a"].login_url == "https://example.com/login-a"
        assert s.carriers["a"].start_url == "https://example.com/new-quote-a"
        assert s.carriers["b"].username == "user2@example.com"
        assert s.carriers["b"].password == "password456"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("false", False), ("FALSE", False), (" False ", False), ("true", True), ("0", True), ("no", True), ("", True)],
    )
    def test_dry_run_env_text(self, monkeypatch, raw, expected):
        monkeypatch.setenv("QW_DRY_RUN", raw)
        from quote_worker.settings.config import Settings

        assert Settings().dry_run is expected

    def test_carrier_env_override_keeps_other_fields(self, monkeypatch):
        monkeypatch.setenv("QW_CARRIERS__A__USERNAME", "agent@carrier.test")
        from quote_worker.settings.config import Settings

        s = Settings()
        assert s.carriers["a"].username == "agent@carrier.test"
        assert s.carriers["a"].password == "password123"
        assert s.carriers["a"].name == "UP&C"

    def test_nested_env_var_override_double_underscore(self, monkeypatch):
        monkeypatch.setenv("QW_BROWSER__PREMIUM_TIMEOUT_MS", "2500")
        monkeypatch.setenv("QW_API__PORT", "8080")
        from quote_worker.settings.config import Settings

        s = Settings()
        assert s.browser.premium_timeout_ms == 2500
        assert s.api.port == 8080

    def test_test_profile_layering(self, monkeypatch):
        """QW_ENV=test should load settings.test.toml over the defaults."""
        monkeypatch.setenv("QW_ENV", "test")
        monkeypatch.setattr(config_module, "CONFIG_DIR", REPO_CONFIG_DIR)
        from quote_worker.settings.config import Settings

        s = Settings()
        assert s.env == "test"
        assert s.browser.premium_timeout_ms == 100
        assert s.browser.timeout_ms == 30_000

    def test_explicit_values_win(self, monkeypatch):
        monkeypatch.setenv("QW_DRY_RUN", "false")
        from quote_worker.settings.config import Settings

        assert Settings(dry_run=True).dry_run is True


class TestBrowserSettings:
    def test_defaults(self):
        from quote_worker.settings.config import Settings

        s = Settings()
        assert s.browser.headless is True
        assert s.browser.timeout_ms == 30_000
        assert s.browser.candidate_timeout_ms == 5_000
        assert s.browser.premium_timeout_ms == 15_000


class TestAPISettings:
    def test_defaults(self):
        from quote_worker.settings.config import Settings

        s = Settings()
        assert s.api.port == 3000
        assert s.api.max_body_bytes == 1_048_576


class TestHelpers:
    def test_parse_dry_run_passthrough(self):
        assert parse_dry_run(False) is False
        assert parse_dry_run(None) is True

    def test_deep_merge_recurses(self):
        base = {"carriers": {"a": {"name": "A", "username": "u"}}, "dry_run": True}
        merged = _deep_merge(base, {"carriers": {"a": {"username": "v"}, "b": {"name": "B"}}})
        assert merged == {
            "carriers": {"a": {"name": "A", "username": "v"}, "b": {"name": "B"}},
            "dry_run": True,
        }
        assert base["carriers"]["a"]["username"] == "u"
